"""envdefaults -- typed environment settings with registered defaults.

Loads ``KEY=VALUE`` overrides from ``.env`` files in the home and working
directories into the process environment, and resolves typed values with
a fallback to defaults registered at start-up.
"""

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
from envdefaults.environment import EnvironmentSource, MappingEnvironment, ProcessEnvironment
from envdefaults.errors import (
    BadLocalFileError,
    BadUserFileError,
    EnvAssignmentError,
    EnvDefaultsError,
    EnvFileError,
    EnvFileSyntaxError,
    LoadError,
    RegistrationError,
)
from envdefaults.loader import load_file, parse_lines
from envdefaults.process import (
    default,
    get_bool,
    get_duration,
    get_float,
    get_int,
    get_int64,
    get_registry,
    get_resolver,
    get_string,
    get_string_list,
    load,
    print_help,
    register,
    register_setting,
)
from envdefaults.registry import DefaultRegistry
from envdefaults.resolver import ConfigResolver
from envdefaults.settings import EnvDefaultsSettings, get_settings

__all__ = [
    "BadLocalFileError",
    "BadUserFileError",
    "BoolSetting",
    "ConfigResolver",
    "DefaultRegistry",
    "DurationSetting",
    "EnvAssignmentError",
    "EnvDefaultsError",
    "EnvDefaultsSettings",
    "EnvFileError",
    "EnvFileSyntaxError",
    "EnvironmentSource",
    "FloatSetting",
    "Int64Setting",
    "IntSetting",
    "LoadError",
    "MappingEnvironment",
    "ProcessEnvironment",
    "RegistrationError",
    "SettingDescriptor",
    "SettingType",
    "StringListSetting",
    "StringSetting",
    "default",
    "descriptor_for",
    "get_bool",
    "get_duration",
    "get_float",
    "get_int",
    "get_int64",
    "get_registry",
    "get_resolver",
    "get_settings",
    "get_string",
    "get_string_list",
    "load",
    "load_file",
    "parse_lines",
    "print_help",
    "register",
    "register_setting",
]
