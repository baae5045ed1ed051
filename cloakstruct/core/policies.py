"""Policy tables mapping record fields to masking categories."""

from dataclasses import dataclass, field
from typing import Iterator, Mapping, Optional, Union

from .categories import MaskCategory, resolve_category
from .exceptions import PolicyError


@dataclass(frozen=True)
class FieldPolicy:
    """
    Caller-supplied table of which fields to mask and how.

    Keys are either bare field names, which apply at every nesting level,
    or dotted paths from the root record (``"contact.email"``), which apply
    only at that exact position. When both match, the dotted path wins.
    Entries in a policy table take precedence over categories declared on
    the record type itself.

    Attributes:
        fields: Field name or dotted path to category mappings
        name: Optional label used in logs and error context

    Examples:
        >>> policy = FieldPolicy.from_mapping({
        ...     "name": "name",
        ...     "contact.email": "email",
        ...     "contact": "struct",
        ... })
        >>> policy.category_for("contact.email", "email")
        <MaskCategory.EMAIL: 'email'>
    """

    fields: dict[str, MaskCategory] = field(default_factory=dict)
    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate and normalize policy entries."""
        normalized: dict[str, MaskCategory] = {}
        for path, category in self.fields.items():
            if not isinstance(path, str) or not path.strip():
                raise PolicyError(
                    f"Policy field keys must be non-empty strings, got {path!r}",
                    context={"policy": self.name},
                )
            if any(not part for part in path.strip().split(".")):
                raise PolicyError(
                    f"Invalid field path '{path}'",
                    context={"policy": self.name},
                )
            normalized[path.strip()] = resolve_category(category)
        object.__setattr__(self, "fields", normalized)

    @classmethod
    def from_mapping(
        cls,
        fields: Mapping[str, Union[MaskCategory, str]],
        name: Optional[str] = None,
    ) -> "FieldPolicy":
        """Build a policy from a plain mapping of tags."""
        return cls(fields=dict(fields), name=name)

    def category_for(self, path: str, field_name: str) -> Optional[MaskCategory]:
        """Return the category for a field, or ``None`` if the table is silent."""
        category = self.fields.get(path)
        if category is None:
            category = self.fields.get(field_name)
        return category

    def merge(self, other: "FieldPolicy") -> "FieldPolicy":
        """Create a new policy with ``other``'s entries layered on top."""
        return FieldPolicy(
            fields={**self.fields, **other.fields},
            name=other.name or self.name,
        )

    def __hash__(self) -> int:
        return hash((frozenset(self.fields.items()), self.name))

    def __contains__(self, path: object) -> bool:
        return path in self.fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)


EMPTY_POLICY = FieldPolicy()
