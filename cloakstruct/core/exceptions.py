"""CloakStruct exception hierarchy.

Every error raised by the package derives from ``CloakStructError`` and
carries structured context (error code, component, field path, recovery
hints) so callers can log it without ever touching the masked values.
"""

from typing import Any, Dict, List, Optional


class CloakStructError(Exception):
    """Base exception for all CloakStruct errors.

    Subclasses set ``default_error_code`` and ``default_component``; both
    can be overridden per instance.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error identifier
        context: Field paths, type names and other non-sensitive details
        recovery_suggestions: Suggested recovery actions
        component: ``"masking"``, ``"policy"`` or ``"core"``
    """

    default_error_code = "CLOAKSTRUCT_ERROR"
    default_component = "core"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        recovery_suggestions: Optional[List[str]] = None,
        component: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.context = dict(context or {})
        self.recovery_suggestions = list(recovery_suggestions or [])
        self.component = component or self.default_component

    def add_context(self, key: str, value: Any) -> None:
        self.context[key] = value

    def add_recovery_suggestion(self, suggestion: str) -> None:
        if suggestion not in self.recovery_suggestions:
            self.recovery_suggestions.append(suggestion)

    def to_dict(self) -> Dict[str, Any]:
        """Structured form for logging; holds no field values."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "error_code": self.error_code,
            "component": self.component,
            "context": self.context,
            "recovery_suggestions": self.recovery_suggestions,
        }


class MaskingError(CloakStructError):
    """Raised when a record cannot be masked."""

    default_error_code = "MASKING_ERROR"
    default_component = "masking"

    def __init__(
        self,
        message: str,
        record_type: Optional[str] = None,
        field_path: Optional[str] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        if record_type:
            self.add_context("record_type", record_type)
        if field_path:
            self.add_context("field_path", field_path)


class UnsupportedRecordError(MaskingError):
    """Raised when a value handed to the walker is not a record it can read.

    Supported shapes are dataclass instances, pydantic models, ``Maskable``
    objects, mappings, and plain objects when a policy table is supplied.
    """

    default_error_code = "UNSUPPORTED_RECORD"

    def __init__(self, message: str, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.add_recovery_suggestion(
            "Pass a dataclass, pydantic model, mapping or Maskable object"
        )


class UnsupportedFieldError(MaskingError):
    """Raised when a field annotated with a leaf category does not hold text."""

    default_error_code = "UNSUPPORTED_FIELD"

    def __init__(
        self,
        message: str,
        category: Optional[str] = None,
        actual_type: Optional[str] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        if category:
            self.add_context("category", category)
        if actual_type:
            self.add_context("actual_type", actual_type)
        self.add_recovery_suggestion(
            "Only annotate str fields with a leaf category, or set "
            "non_text_fields='skip' to copy such values unchanged"
        )


class PolicyError(CloakStructError):
    """Raised for invalid category tags or policy table entries."""

    default_error_code = "POLICY_ERROR"
    default_component = "policy"


class PolicyValidationError(PolicyError):
    """Raised when a policy file fails YAML parsing or schema validation."""

    default_error_code = "POLICY_VALIDATION_ERROR"

    def __init__(self, message: str, policy_file: Optional[str] = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        if policy_file:
            self.add_context("policy_file", policy_file)


class PolicyInheritanceError(PolicyError):
    """Raised when policy ``extends`` chains cannot be resolved."""

    default_error_code = "POLICY_INHERITANCE_ERROR"

    def __init__(
        self,
        message: str,
        inheritance_chain: Optional[List[str]] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        if inheritance_chain:
            self.add_context("inheritance_chain", inheritance_chain)
