"""Core functionality: categories, leaf maskers, policies and configuration."""

from .categories import MaskCategory, resolve_category
from .config import MaskingConfig, get_masking_config, reset_masking_config
from .exceptions import (
    CloakStructError,
    MaskingError,
    PolicyError,
    PolicyInheritanceError,
    PolicyValidationError,
    UnsupportedFieldError,
    UnsupportedRecordError,
)
from .maskers import (
    LEAF_MASKERS,
    address,
    apply_mask,
    credit_card,
    email,
    id_number,
    mobile,
    name,
    overlay,
    password,
    telephone,
)
from .policies import FieldPolicy
from .policy_loader import PolicyLoader, load_policy

__all__ = [
    "MaskCategory",
    "resolve_category",
    "MaskingConfig",
    "get_masking_config",
    "reset_masking_config",
    "CloakStructError",
    "MaskingError",
    "PolicyError",
    "PolicyInheritanceError",
    "PolicyValidationError",
    "UnsupportedFieldError",
    "UnsupportedRecordError",
    "LEAF_MASKERS",
    "address",
    "apply_mask",
    "credit_card",
    "email",
    "id_number",
    "mobile",
    "name",
    "overlay",
    "password",
    "telephone",
    "FieldPolicy",
    "PolicyLoader",
    "load_policy",
]
