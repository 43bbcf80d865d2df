# dataseries/core/exceptions.py
from __future__ import annotations


class CoreError(Exception):
    """Base error for all core-domain exceptions."""


# ---- Construction / configuration errors ----
class InvalidLabel(CoreError, TypeError):
    """Raised when a label does not match the label type of its series."""


class ConfigError(CoreError, ValueError):
    """Raised when environment configuration values are invalid."""


# ---- Access contract errors ----
class TypeContractViolation(CoreError, TypeError):
    """Raised when a slot is written with a type other than the stored one."""


class StaleHandle(CoreError, RuntimeError):
    """Raised when a mutable handle is used after its series changed shape."""
