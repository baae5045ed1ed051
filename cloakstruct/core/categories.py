"""Masking categories that can be declared on record fields."""

from enum import Enum
from typing import Any, Optional, Union

from .exceptions import PolicyError


class MaskCategory(Enum):
    """Kinds of masking that can be attached to a field.

    Every member except ``STRUCT`` selects a leaf masker. ``STRUCT`` marks a
    field holding a nested record that is masked recursively.

    Lookup is forgiving about spelling so that tags written as plain strings
    in field metadata or policy files resolve to the same member:

        >>> MaskCategory("tel")
        <MaskCategory.TELEPHONE: 'telephone'>
        >>> MaskCategory("Credit-Card")
        <MaskCategory.CREDIT_CARD: 'credit_card'>
    """

    PASSWORD = "password"
    NAME = "name"
    ADDRESS = "address"
    EMAIL = "email"
    MOBILE = "mobile"
    TELEPHONE = "telephone"
    ID = "id"
    CREDIT_CARD = "credit_card"
    STRUCT = "struct"

    @classmethod
    def _missing_(cls, value: object) -> Optional["MaskCategory"]:
        if not isinstance(value, str):
            return None
        key = value.strip().lower().replace("-", "_")
        key = _ALIASES.get(key, key)
        for member in cls:
            if member.value == key:
                return member
        return None

    @property
    def is_leaf(self) -> bool:
        """True for categories handled by a string masker."""
        return self is not MaskCategory.STRUCT


# Short tag spellings used by struct tags in older masking libraries
_ALIASES = {
    "addr": "address",
    "tel": "telephone",
    "phone": "telephone",
    "credit": "credit_card",
    "nested": "struct",
    "nested_record": "struct",
}


def resolve_category(value: Union[MaskCategory, str, Any]) -> MaskCategory:
    """Coerce a category tag to a ``MaskCategory``.

    Raises:
        PolicyError: If the tag does not name a known category.
    """
    if isinstance(value, MaskCategory):
        return value
    try:
        return MaskCategory(value)
    except ValueError as e:
        valid = [c.value for c in MaskCategory]
        raise PolicyError(
            f"Unknown mask category {value!r}. Valid categories: {valid}",
            context={"category": str(value)},
        ) from e
