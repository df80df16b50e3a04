"""Enum conversion utilities"""

from enum import Enum
from typing import Any, List, Type, TypeVar

# Generic type for any Enum subclass
E = TypeVar("E", bound=Enum)


class EnumHelper:
    """
    Utility class for working with Enums:
    - Parse config strings to enum members (case-insensitive)
    - List member names
    """

    @staticmethod
    def list_names(enum_class: Type[E], lowercase: bool = False) -> List[str]:
        """
        List all Enum member names.

        Args:
            enum_class: Enum class to inspect
            lowercase: Return lowercase names (as written in config files)
        """
        if lowercase:
            return [member.name.lower() for member in enum_class]
        return [member.name for member in enum_class]

    @staticmethod
    def to_enum(enum_class: Type[E], value: Any) -> E:
        """
        Convert a member or its name (any case) to an enum member.

        Raises ValueError for unknown names and unsupported types, so it
        can back pydantic validators.
        """
        if isinstance(value, enum_class):
            return value
        if isinstance(value, str):
            try:
                return enum_class[value.upper()]
            except KeyError:
                choices = ", ".join(EnumHelper.list_names(enum_class, lowercase=True))
                raise ValueError(f"Invalid {enum_class.__name__} '{value}' (expected one of: {choices})")
        raise ValueError(f"Expected str or {enum_class.__name__}, got {type(value).__name__}")
