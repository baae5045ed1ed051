"""Record adapters that expose an arbitrary record's fields to the walker.

The walker never inspects records directly. It asks an adapter to list the
record's fields in declaration order, to report the category the record
type declares for a field, to read a field value, and finally to build a
new record of the same type from a dict of output values.
"""

import copy
import dataclasses
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, MutableMapping
from typing import Any, Optional

from pydantic import BaseModel

from ..core.categories import MaskCategory, resolve_category
from .protocols import MASK_METADATA_KEY, Maskable

logger = logging.getLogger(__name__)


class RecordAdapter(ABC):
    """Capability interface the walker depends on for one record shape."""

    @classmethod
    @abstractmethod
    def supports(cls, record: Any) -> bool:
        """Return True if this adapter can read ``record``."""

    @abstractmethod
    def field_names(self, record: Any) -> list[str]:
        """List field names in declaration order."""

    def declared_category(self, record: Any, field_name: str) -> Optional[MaskCategory]:
        """Category declared on the record type itself, if any."""
        return None

    def get_value(self, record: Any, field_name: str) -> Any:
        return getattr(record, field_name)

    @abstractmethod
    def rebuild(self, record: Any, values: dict[str, Any]) -> Any:
        """Create a new record like ``record`` holding ``values``.

        ``record`` itself must not be modified.
        """


def _copy_with_attributes(record: Any, values: dict[str, Any]) -> Any:
    """Shallow-copy ``record`` and assign ``values`` on the copy.

    ``object.__setattr__`` is used so frozen dataclasses and classes with a
    guarded ``__setattr__`` can still be rebuilt.
    """
    new_record = copy.copy(record)
    for field_name, value in values.items():
        object.__setattr__(new_record, field_name, value)
    return new_record


class MaskableAdapter(RecordAdapter):
    """Records that list their fields in ``__mask_fields__``."""

    @classmethod
    def supports(cls, record: Any) -> bool:
        return not isinstance(record, type) and isinstance(record, Maskable)

    def field_names(self, record: Any) -> list[str]:
        return list(record.__mask_fields__)

    def declared_category(self, record: Any, field_name: str) -> Optional[MaskCategory]:
        tag = record.__mask_fields__.get(field_name)
        return None if tag is None else resolve_category(tag)

    def rebuild(self, record: Any, values: dict[str, Any]) -> Any:
        return _copy_with_attributes(record, values)


class PydanticAdapter(RecordAdapter):
    """Pydantic models with categories in ``json_schema_extra``."""

    @classmethod
    def supports(cls, record: Any) -> bool:
        return isinstance(record, BaseModel)

    def field_names(self, record: Any) -> list[str]:
        return list(type(record).model_fields)

    def declared_category(self, record: Any, field_name: str) -> Optional[MaskCategory]:
        extra = type(record).model_fields[field_name].json_schema_extra
        if not isinstance(extra, dict):
            return None
        tag = extra.get(MASK_METADATA_KEY)
        return None if tag is None else resolve_category(tag)

    def rebuild(self, record: Any, values: dict[str, Any]) -> Any:
        # model_copy skips validation so masked values are stored verbatim
        new_record = record.model_copy(update=values)
        # update marks every key as explicitly set; keep the input's set
        object.__setattr__(
            new_record, "__pydantic_fields_set__", set(record.model_fields_set)
        )
        return new_record


class DataclassAdapter(RecordAdapter):
    """Dataclass instances with categories in field metadata."""

    @classmethod
    def supports(cls, record: Any) -> bool:
        return dataclasses.is_dataclass(record) and not isinstance(record, type)

    def field_names(self, record: Any) -> list[str]:
        return [f.name for f in dataclasses.fields(record)]

    def declared_category(self, record: Any, field_name: str) -> Optional[MaskCategory]:
        for f in dataclasses.fields(record):
            if f.name == field_name:
                tag = f.metadata.get(MASK_METADATA_KEY)
                return None if tag is None else resolve_category(tag)
        return None

    def rebuild(self, record: Any, values: dict[str, Any]) -> Any:
        return _copy_with_attributes(record, values)


class MappingAdapter(RecordAdapter):
    """Mappings; keys are field names and categories come from a policy table."""

    @classmethod
    def supports(cls, record: Any) -> bool:
        return isinstance(record, Mapping)

    def field_names(self, record: Any) -> list[str]:
        return list(record.keys())

    def get_value(self, record: Any, field_name: str) -> Any:
        return record[field_name]

    def rebuild(self, record: Any, values: dict[str, Any]) -> Any:
        if isinstance(record, MutableMapping):
            new_record = copy.copy(record)
            for key, value in values.items():
                new_record[key] = value
            return new_record
        # Read-only mappings are rebuilt through their constructor
        return type(record)(values)


class ObjectAdapter(RecordAdapter):
    """Plain objects, read through their instance ``__dict__``.

    Plain objects carry no category declarations, so this adapter is only
    offered when the walker has a policy table.
    """

    @classmethod
    def supports(cls, record: Any) -> bool:
        return not isinstance(record, type) and hasattr(record, "__dict__")

    def field_names(self, record: Any) -> list[str]:
        return list(vars(record))

    def rebuild(self, record: Any, values: dict[str, Any]) -> Any:
        return _copy_with_attributes(record, values)


# Checked in order; the first adapter that supports a record is used
DECLARING_ADAPTERS: tuple[RecordAdapter, ...] = (
    MaskableAdapter(),
    PydanticAdapter(),
    DataclassAdapter(),
    MappingAdapter(),
)
OBJECT_ADAPTER = ObjectAdapter()


def adapter_for(record: Any, allow_plain_objects: bool = False) -> Optional[RecordAdapter]:
    """Pick the adapter for ``record``, or ``None`` if its shape is unsupported."""
    for adapter in DECLARING_ADAPTERS:
        if adapter.supports(record):
            return adapter
    if allow_plain_objects and OBJECT_ADAPTER.supports(record):
        return OBJECT_ADAPTER
    logger.debug(f"No record adapter for {type(record).__name__}")
    return None
