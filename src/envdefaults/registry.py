"""Registry of default values for environment-backed settings.

Applications register defaults at start-up; accessors fall back to them
when a variable is unset or unparseable.

Example:
    >>> from datetime import timedelta
    >>> registry = DefaultRegistry()
    >>> registry.register("DB_MAX", 8, "Maximum database connections")
    IntSetting(name='DB_MAX', description='Maximum database connections', type='integer', default=8)
    >>> registry.default("DB_MAX").default
    8
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from envdefaults.descriptors import descriptor_for

if TYPE_CHECKING:
    from envdefaults.descriptors import SettingDescriptor

logger = logging.getLogger(__name__)


class DefaultRegistry:
    """Thread-safe mapping of setting name to descriptor.

    Descriptors are immutable and are replaced whole under a lock, so a
    lookup sees either the previous or the new descriptor for a name.
    Re-registering a name overwrites the previous descriptor.
    """

    def __init__(self) -> None:
        self._descriptors: dict[str, SettingDescriptor] = {}
        self._lock = threading.Lock()

    def register(self, name: str, default: Any, description: str = "") -> SettingDescriptor:
        """Register a default, inferring its kind from the value's type.

        Args:
            name: Environment variable name.
            default: ``str``, ``list[str]``, ``int``, ``float``, ``bool`` or
                ``datetime.timedelta``.
            description: Human-readable description for the help output.

        Returns:
            The stored descriptor.

        Raises:
            RegistrationError: If the default's type is unsupported. The
                registry is left unchanged.
        """
        return self.register_setting(descriptor_for(name, default, description))

    def register_setting(self, descriptor: SettingDescriptor) -> SettingDescriptor:
        """Register an explicitly typed descriptor.

        Args:
            descriptor: Any :data:`~envdefaults.descriptors.SettingDescriptor`.

        Returns:
            The stored descriptor.
        """
        with self._lock:
            replaced = descriptor.name in self._descriptors
            self._descriptors[descriptor.name] = descriptor
        logger.debug(
            "Registered %s default for %s%s",
            descriptor.type,
            descriptor.name,
            " (replaced)" if replaced else "",
        )
        return descriptor

    def default(self, name: str) -> SettingDescriptor | None:
        """Return the descriptor registered for ``name``, or None."""
        with self._lock:
            return self._descriptors.get(name)

    def descriptors(self) -> list[SettingDescriptor]:
        """Snapshot of all descriptors sorted by name."""
        with self._lock:
            snapshot = list(self._descriptors.values())
        return sorted(snapshot, key=lambda d: d.name)

    def unregister(self, name: str) -> SettingDescriptor | None:
        """Remove and return the descriptor for ``name``, if any."""
        with self._lock:
            return self._descriptors.pop(name, None)

    def clear(self) -> None:
        with self._lock:
            self._descriptors.clear()

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._descriptors

    def __len__(self) -> int:
        with self._lock:
            return len(self._descriptors)

    def __repr__(self) -> str:
        return f"DefaultRegistry({len(self)} settings)"
