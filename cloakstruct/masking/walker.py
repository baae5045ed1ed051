"""Struct walker: masks annotated fields of a record into a new record."""

import copy
import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from ..core.categories import MaskCategory
from ..core.config import MaskingConfig, get_masking_config
from ..core.exceptions import (
    CloakStructError,
    UnsupportedFieldError,
    UnsupportedRecordError,
)
from ..core.maskers import apply_mask
from ..core.policies import EMPTY_POLICY, FieldPolicy
from .adapters import RecordAdapter, adapter_for

logger = logging.getLogger(__name__)

# Unannotated values of these types are shallow-copied into the output
_MUTABLE_CONTAINERS = (list, dict, set, bytearray)

PolicyLike = Union[FieldPolicy, Mapping[str, Any]]


class StructWalker:
    """
    Produce masked copies of records.

    For every field of the record, in declaration order:

    - a leaf category replaces the value with the matching leaf masker's
      output (``None`` stays ``None``);
    - ``MaskCategory.STRUCT`` masks the nested record recursively
      (``None`` stays ``None``);
    - an unannotated field is carried over with the same value.

    The input record is never modified. Any failure aborts the whole call
    with an exception and no partial record is returned. Nesting depth is
    bounded only by the data; cyclic records are the caller's
    responsibility.

    The walker holds no mutable state and can be shared between threads.

    Examples:
        >>> @dataclass
        ... class Contact:
        ...     email: str = masked_field("email")
        ...     phone: str = masked_field("mobile")
        >>> StructWalker().mask(Contact("ggw.chang@gmail.com", "0987654321"))
        Contact(email='ggw****@gmail.com', phone='0987***321')
    """

    def __init__(
        self,
        policy: Optional[PolicyLike] = None,
        config: Optional[MaskingConfig] = None,
    ):
        """
        Initialize the walker.

        Args:
            policy: Optional policy table; its entries override categories
                declared on the record types
            config: Behavior switches; defaults to the global configuration
        """
        if policy is None:
            policy = EMPTY_POLICY
        elif not isinstance(policy, FieldPolicy):
            policy = FieldPolicy.from_mapping(policy)
        self.policy: FieldPolicy = policy
        self._config = config

    @property
    def config(self) -> MaskingConfig:
        return self._config if self._config is not None else get_masking_config()

    def mask(self, record: Any) -> Any:
        """
        Return a masked copy of ``record``.

        Raises:
            UnsupportedRecordError: If ``record`` (or a nested STRUCT value)
                is not a supported record shape
            UnsupportedFieldError: If a leaf-annotated field is not text and
                the configuration says to raise
            PolicyError: If a declared category tag is unknown
        """
        try:
            return self._mask_record(record, "", self.config)
        except CloakStructError as e:
            logger.debug(f"Masking {type(record).__name__} failed: {e.to_dict()}")
            raise

    def _mask_record(self, record: Any, path: str, config: MaskingConfig) -> Any:
        adapter = adapter_for(record, allow_plain_objects=len(self.policy) > 0)
        if adapter is None:
            location = f" at '{path}'" if path else ""
            raise UnsupportedRecordError(
                f"Cannot mask value of type {type(record).__name__}{location}",
                record_type=type(record).__name__,
                field_path=path or None,
            )

        field_names = adapter.field_names(record)
        logger.debug(
            f"Masking {type(record).__name__} record with {len(field_names)} fields"
            + (f" at '{path}'" if path else "")
        )

        values: dict[str, Any] = {}
        for field_name in field_names:
            field_path = f"{path}.{field_name}" if path else str(field_name)
            category = self._category_for(adapter, record, field_name, field_path)
            value = adapter.get_value(record, field_name)
            values[field_name] = self._mask_value(
                value, category, field_path, config, record
            )

        return adapter.rebuild(record, values)

    def _category_for(
        self, adapter: RecordAdapter, record: Any, field_name: str, field_path: str
    ) -> Optional[MaskCategory]:
        category = self.policy.category_for(field_path, str(field_name))
        if category is None:
            category = adapter.declared_category(record, field_name)
        return category

    def _mask_value(
        self,
        value: Any,
        category: Optional[MaskCategory],
        field_path: str,
        config: MaskingConfig,
        record: Any,
    ) -> Any:
        if category is None:
            if config.copy_unannotated and isinstance(value, _MUTABLE_CONTAINERS):
                return copy.copy(value)
            return value

        if value is None:
            return None

        if category is MaskCategory.STRUCT:
            logger.debug(f"Descending into nested record at '{field_path}'")
            return self._mask_record(value, field_path, config)

        if not isinstance(value, str):
            if config.skip_non_text:
                logger.warning(
                    f"Field '{field_path}' is declared as {category.value} but holds "
                    f"{type(value).__name__}; copying it unmasked"
                )
                return value
            raise UnsupportedFieldError(
                f"Field '{field_path}' is declared as {category.value} but holds "
                f"{type(value).__name__}, not str",
                record_type=type(record).__name__,
                field_path=field_path,
                category=category.value,
                actual_type=type(value).__name__,
            )

        return apply_mask(category, value)


_default_walker = StructWalker()


def mask_record(
    record: Any,
    policy: Optional[PolicyLike] = None,
    config: Optional[MaskingConfig] = None,
) -> Any:
    """
    Return a masked copy of ``record``.

    Shortcut for ``StructWalker(policy, config).mask(record)``; without a
    policy or config it reuses a shared stateless walker.
    """
    if policy is None and config is None:
        return _default_walker.mask(record)
    return StructWalker(policy=policy, config=config).mask(record)
