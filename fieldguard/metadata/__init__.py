"""Type metadata providers: the registration table and constraint files."""

from .registry import (
    build_metadata,
    clear,
    get_metadata,
    is_validatable,
    register,
    registered_types,
    unregister,
    validatable,
)
from .files import load_constraint_file, locate_constraint_file

__all__ = [
    "build_metadata",
    "clear",
    "get_metadata",
    "is_validatable",
    "load_constraint_file",
    "locate_constraint_file",
    "register",
    "registered_types",
    "unregister",
    "validatable",
]
