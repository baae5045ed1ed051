"""Protocol definitions and field helpers for declaring maskable records."""

import dataclasses
from typing import Any, Mapping, Optional, Protocol, Union, runtime_checkable

from pydantic import Field

from ..core.categories import MaskCategory, resolve_category

# Key under which dataclass field metadata and pydantic json_schema_extra
# carry a field's mask category
MASK_METADATA_KEY = "mask"

CategoryTag = Union[MaskCategory, str]


@runtime_checkable
class Maskable(Protocol):
    """
    Protocol for records that declare their own masking layout.

    ``__mask_fields__`` lists every field of the record in declaration order,
    mapped to its category or to ``None`` for fields that are copied as-is.
    Field values are read with ``getattr`` and written onto a shallow copy
    of the record.

    Example:
        >>> class Account:
        ...     __mask_fields__ = {"owner": "name", "pin": "password", "note": None}
        ...
        ...     def __init__(self, owner, pin, note=""):
        ...         self.owner, self.pin, self.note = owner, pin, note
        >>> isinstance(Account("Ann", "1234"), Maskable)
        True
    """

    __mask_fields__: Mapping[str, Optional[CategoryTag]]


def masked_field(category: CategoryTag, **kwargs: Any) -> Any:
    """
    Declare a dataclass field with a mask category.

    Accepts the same keyword arguments as ``dataclasses.field``; any
    ``metadata`` passed in is preserved alongside the category.

    Example:
        >>> @dataclasses.dataclass
        ... class User:
        ...     email: str = masked_field("email")
        ...     nickname: str = ""
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[MASK_METADATA_KEY] = resolve_category(category)
    return dataclasses.field(metadata=metadata, **kwargs)


def masked_model_field(
    category: CategoryTag, default: Any = ..., **kwargs: Any
) -> Any:
    """
    Declare a pydantic model field with a mask category.

    The category is stored in ``json_schema_extra`` so it also shows up in
    the model's JSON schema.

    Example:
        >>> class Customer(BaseModel):
        ...     phone: str = masked_model_field("mobile")
    """
    extra = dict(kwargs.pop("json_schema_extra", None) or {})
    extra[MASK_METADATA_KEY] = resolve_category(category).value
    return Field(default, json_schema_extra=extra, **kwargs)
