"""Struct masking: walker, record adapters and field declaration helpers."""

from .adapters import RecordAdapter, adapter_for
from .protocols import Maskable, masked_field, masked_model_field
from .walker import StructWalker, mask_record

__all__ = [
    "Maskable",
    "RecordAdapter",
    "StructWalker",
    "adapter_for",
    "mask_record",
    "masked_field",
    "masked_model_field",
]
