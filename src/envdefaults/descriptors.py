"""Typed setting descriptors.

Uses Pydantic discriminated unions so every registered default carries an
explicit kind. Descriptors are frozen and strictly validated: the stored
default always has exactly the runtime type its kind promises.

Example:
    Declaring settings explicitly::

        from datetime import timedelta

        from envdefaults.descriptors import DurationSetting, Int64Setting

        Int64Setting(name="MAX_BYTES", default=2**40, description="Upload cap")
        DurationSetting(name="TIMEOUT", default=timedelta(seconds=30))

    Or letting the kind be inferred from a plain Python value::

        descriptor_for("DB_MAX", 8, "Maximum database connections")
"""

from __future__ import annotations

from datetime import timedelta
from enum import StrEnum
from typing import Annotated, Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from envdefaults.errors import RegistrationError
from envdefaults.parsing import (
    INT64_MAX,
    INT64_MIN,
    format_bool,
    format_duration,
    format_string_list,
)


class SettingType(StrEnum):
    """Discriminator values for the supported setting kinds."""

    STRING = "string"
    STRING_LIST = "string_list"
    INTEGER = "integer"
    INT64 = "int64"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DURATION = "duration"


class _BaseSetting(BaseModel):
    """Fields shared by every setting kind."""

    model_config = ConfigDict(frozen=True, strict=True)

    label: ClassVar[str] = ""

    name: str = Field(min_length=1)
    description: str = ""

    @property
    def type_label(self) -> str:
        """Short type name shown by the help printer."""
        return self.label

    def render_default(self) -> str:
        """Render the default the way it would be written in a ``.env`` file."""
        return str(getattr(self, "default", ""))


class StringSetting(_BaseSetting):
    label: ClassVar[str] = "string"

    type: Literal["string"] = "string"
    default: str


class StringListSetting(_BaseSetting):
    """Comma-separated list of strings.

    Lists are accepted and stored as a tuple.
    """

    label: ClassVar[str] = "list"

    type: Literal["string_list"] = "string_list"
    default: tuple[str, ...]

    @field_validator("default", mode="before")
    @classmethod
    def freeze_list(cls, v: Any) -> Any:
        if isinstance(v, list):
            return tuple(v)
        return v

    def render_default(self) -> str:
        return format_string_list(self.default)


class IntSetting(_BaseSetting):
    label: ClassVar[str] = "integer"

    type: Literal["integer"] = "integer"
    default: int = Field(ge=INT64_MIN, le=INT64_MAX)


class Int64Setting(_BaseSetting):
    """64-bit integer; only registered explicitly, never inferred."""

    label: ClassVar[str] = "int64"

    type: Literal["int64"] = "int64"
    default: int = Field(ge=INT64_MIN, le=INT64_MAX)


class FloatSetting(_BaseSetting):
    label: ClassVar[str] = "float"

    type: Literal["float"] = "float"
    default: float


class BoolSetting(_BaseSetting):
    label: ClassVar[str] = "boolean"

    type: Literal["boolean"] = "boolean"
    default: bool

    def render_default(self) -> str:
        return format_bool(self.default)


class DurationSetting(_BaseSetting):
    label: ClassVar[str] = "duration"

    type: Literal["duration"] = "duration"
    default: timedelta

    def render_default(self) -> str:
        return format_duration(self.default)


SettingDescriptor = Annotated[
    StringSetting
    | StringListSetting
    | IntSetting
    | Int64Setting
    | FloatSetting
    | BoolSetting
    | DurationSetting,
    Field(discriminator="type"),
]
"""Discriminated union of all setting descriptor kinds.

The ``type`` field on each variant acts as the discriminator.
"""


def _infer_model(default: Any) -> type[_BaseSetting] | None:
    # bool before int: bool is an int subclass
    if isinstance(default, bool):
        return BoolSetting
    if isinstance(default, int):
        return IntSetting
    if isinstance(default, float):
        return FloatSetting
    if isinstance(default, str):
        return StringSetting
    if isinstance(default, timedelta):
        return DurationSetting
    if isinstance(default, list) and all(isinstance(item, str) for item in default):
        return StringListSetting
    return None


def descriptor_for(name: str, default: Any, description: str = "") -> SettingDescriptor:
    """Build a descriptor, inferring its kind from ``default``'s runtime type.

    Supported defaults: ``str``, ``list[str]``, ``int``, ``float``, ``bool``
    and ``datetime.timedelta``. Integers are inferred as ``integer``; use
    :class:`Int64Setting` directly for an ``int64`` setting.

    Args:
        name: Environment variable name.
        default: Default value.
        description: Human-readable description for the help output.

    Returns:
        Frozen descriptor of the inferred kind.

    Raises:
        RegistrationError: If the default's type is unsupported or the
            descriptor fails validation (empty name, out-of-range integer).
    """
    model = _infer_model(default)
    if model is None:
        raise RegistrationError(name, f"unsupported default type {type(default).__name__}")
    try:
        return model(name=name, default=default, description=description)  # type: ignore[return-value]
    except PydanticValidationError as exc:
        raise RegistrationError(name, str(exc)) from exc
