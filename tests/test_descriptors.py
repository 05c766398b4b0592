"""Tests for setting descriptors."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

import pytest
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from envdefaults.descriptors import (
    BoolSetting,
    DurationSetting,
    FloatSetting,
    Int64Setting,
    IntSetting,
    SettingDescriptor,
    SettingType,
    StringListSetting,
    StringSetting,
    descriptor_for,
)
from envdefaults.errors import RegistrationError
from envdefaults.parsing import INT64_MAX


@pytest.mark.unit
class TestDescriptorFor:
    @pytest.mark.parametrize(
        ("default", "model", "kind"),
        [
            ("localhost", StringSetting, SettingType.STRING),
            (["a", "b"], StringListSetting, SettingType.STRING_LIST),
            ([], StringListSetting, SettingType.STRING_LIST),
            (8, IntSetting, SettingType.INTEGER),
            (0.5, FloatSetting, SettingType.FLOAT),
            (True, BoolSetting, SettingType.BOOLEAN),
            (timedelta(seconds=30), DurationSetting, SettingType.DURATION),
        ],
    )
    def test_infers_kind(self, default: Any, model: type, kind: SettingType) -> None:
        descriptor = descriptor_for("NAME", default, "described")
        assert isinstance(descriptor, model)
        assert descriptor.type == kind
        assert descriptor.default == (tuple(default) if isinstance(default, list) else default)
        assert descriptor.name == "NAME"
        assert descriptor.description == "described"

    def test_bool_is_not_inferred_as_integer(self) -> None:
        assert isinstance(descriptor_for("FLAG", False), BoolSetting)

    @pytest.mark.parametrize("default", [[1, 2], ["a", 1], {"a": "b"}, None, ("a",), b"raw"])
    def test_unsupported_type(self, default: Any) -> None:
        with pytest.raises(RegistrationError, match="unsupported default type"):
            descriptor_for("BAD", default)

    def test_registration_error_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            descriptor_for("BAD", object())

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(RegistrationError):
            descriptor_for("", "value")

    def test_integer_out_of_int64_range_rejected(self) -> None:
        with pytest.raises(RegistrationError):
            descriptor_for("HUGE", INT64_MAX + 1)


@pytest.mark.unit
class TestDescriptorModels:
    def test_frozen(self) -> None:
        descriptor = IntSetting(name="DB_MAX", default=8)
        with pytest.raises(PydanticValidationError):
            descriptor.default = 9  # type: ignore[misc]

    def test_list_default_is_frozen(self) -> None:
        source = ["a", "b"]
        descriptor = StringListSetting(name="HOSTS", default=source)
        source.append("c")
        assert descriptor.default == ("a", "b")
        with pytest.raises(AttributeError):
            descriptor.default.append("z")  # type: ignore[attr-defined]

    def test_strict_int_rejects_bool(self) -> None:
        with pytest.raises(PydanticValidationError):
            IntSetting(name="DB_MAX", default=True)

    def test_strict_string_rejects_int(self) -> None:
        with pytest.raises(PydanticValidationError):
            StringSetting(name="HOST", default=1)  # type: ignore[arg-type]

    def test_int64_explicit(self) -> None:
        descriptor = Int64Setting(name="MAX_BYTES", default=2**40, description="Upload cap")
        assert descriptor.type == SettingType.INT64
        assert descriptor.type_label == "int64"

    def test_description_defaults_to_empty(self) -> None:
        assert StringSetting(name="HOST", default="x").description == ""

    def test_discriminated_union_from_dict(self) -> None:
        adapter: TypeAdapter[Any] = TypeAdapter(SettingDescriptor)
        descriptor = adapter.validate_python(
            FloatSetting(name="RATIO", default=0.25).model_dump(),
        )
        assert isinstance(descriptor, FloatSetting)
        assert descriptor.default == 0.25


@pytest.mark.unit
class TestTypeLabels:
    @pytest.mark.parametrize(
        ("descriptor", "label"),
        [
            (StringSetting(name="A", default=""), "string"),
            (StringListSetting(name="A", default=[]), "list"),
            (IntSetting(name="A", default=0), "integer"),
            (Int64Setting(name="A", default=0), "int64"),
            (FloatSetting(name="A", default=0.0), "float"),
            (BoolSetting(name="A", default=False), "boolean"),
            (DurationSetting(name="A", default=timedelta(0)), "duration"),
        ],
    )
    def test_label(self, descriptor: Any, label: str) -> None:
        assert descriptor.type_label == label


@pytest.mark.unit
class TestRenderDefault:
    def test_string(self) -> None:
        assert StringSetting(name="A", default="info").render_default() == "info"

    def test_list_is_comma_joined(self) -> None:
        assert StringListSetting(name="A", default=["a", "b"]).render_default() == "a,b"

    def test_int(self) -> None:
        assert IntSetting(name="A", default=8).render_default() == "8"

    def test_float(self) -> None:
        assert FloatSetting(name="A", default=0.5).render_default() == "0.5"

    def test_bool_lowercase(self) -> None:
        assert BoolSetting(name="A", default=True).render_default() == "true"

    def test_duration(self) -> None:
        descriptor = DurationSetting(name="A", default=timedelta(minutes=1, seconds=30))
        assert descriptor.render_default() == "1m30s"
