# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

import os
from typing import Optional, TypeVar, overload

TRUTHY_VALUES = ("1", "true", "yes", "on")
FALSY_VALUES = ("0", "false", "no", "off")


DF_BOOL_T = TypeVar("DF_BOOL_T", bound="Optional[bool]")


@overload
def get_env_bool(var_name: str, default: None = None) -> bool | None: ...


@overload
def get_env_bool(var_name: str, default: DF_BOOL_T) -> DF_BOOL_T | bool: ...


def get_env_bool(
    var_name: str, default: DF_BOOL_T | None = None
) -> DF_BOOL_T | bool | None:
    value = os.getenv(var_name)
    if value is None or not value.strip():
        return default
    value_lower = value.strip().lower()
    if value_lower in TRUTHY_VALUES:
        return True
    if value_lower in FALSY_VALUES:
        return False
    raise ValueError(f"{var_name} must be a boolean, got {value!r}")


DF_INT_T = TypeVar("DF_INT_T", bound="Optional[int]")


@overload
def get_env_int(var_name: str, default: None = None) -> int | None: ...


@overload
def get_env_int(var_name: str, default: DF_INT_T) -> DF_INT_T | int: ...


def get_env_int(
    var_name: str, default: DF_INT_T | None = None
) -> DF_INT_T | int | None:
    value = os.getenv(var_name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{var_name} must be an integer, got {value!r}") from None


DF_FLOAT_T = TypeVar("DF_FLOAT_T", bound="Optional[float]")


@overload
def get_env_float(var_name: str, default: None = None) -> float | None: ...


@overload
def get_env_float(var_name: str, default: DF_FLOAT_T) -> DF_FLOAT_T | float: ...


def get_env_float(
    var_name: str, default: DF_FLOAT_T | None = None
) -> DF_FLOAT_T | float | None:
    value = os.getenv(var_name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{var_name} must be a number, got {value!r}") from None


DF_STR_T = TypeVar("DF_STR_T", bound="Optional[str]")


@overload
def get_env_str(var_name: str, default: None = None) -> str | None: ...


@overload
def get_env_str(var_name: str, default: DF_STR_T) -> DF_STR_T | str: ...


def get_env_str(
    var_name: str, default: DF_STR_T | None = None
) -> DF_STR_T | str | None:
    value = os.getenv(var_name)
    if value is None:
        return default
    return value
