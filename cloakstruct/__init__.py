"""CloakStruct: field-level masking of sensitive values in structured records.

CloakStruct produces display- and log-safe copies of records. Callers
declare which fields hold names, IDs, addresses, emails, phone numbers,
card numbers or passwords, and the struct walker returns a new record with
those fields redacted by fixed, character-based rules. Nested records are
masked recursively and the original record is never modified.
"""

__version__ = "0.1.0"

from .core import (
    LEAF_MASKERS,
    CloakStructError,
    FieldPolicy,
    MaskCategory,
    MaskingConfig,
    MaskingError,
    PolicyError,
    PolicyInheritanceError,
    PolicyLoader,
    PolicyValidationError,
    UnsupportedFieldError,
    UnsupportedRecordError,
    address,
    apply_mask,
    credit_card,
    email,
    get_masking_config,
    id_number,
    load_policy,
    mobile,
    name,
    overlay,
    password,
    reset_masking_config,
    telephone,
)

# Struct masking
from .masking import Maskable, StructWalker, mask_record, masked_field, masked_model_field

__all__ = [
    "__version__",
    # Struct masking
    "StructWalker",
    "mask_record",
    "Maskable",
    "masked_field",
    "masked_model_field",
    # Leaf maskers
    "overlay",
    "password",
    "name",
    "id_number",
    "address",
    "email",
    "mobile",
    "telephone",
    "credit_card",
    "apply_mask",
    "LEAF_MASKERS",
    # Categories
    "MaskCategory",
    # Policy system
    "FieldPolicy",
    "PolicyLoader",
    "load_policy",
    # Configuration
    "MaskingConfig",
    "get_masking_config",
    "reset_masking_config",
    # Errors
    "CloakStructError",
    "MaskingError",
    "UnsupportedRecordError",
    "UnsupportedFieldError",
    "PolicyError",
    "PolicyValidationError",
    "PolicyInheritanceError",
]
