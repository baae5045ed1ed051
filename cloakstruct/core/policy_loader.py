"""Loading field policy tables from YAML files with inheritance support."""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .categories import MaskCategory
from .exceptions import PolicyError, PolicyInheritanceError, PolicyValidationError
from .policies import FieldPolicy

logger = logging.getLogger(__name__)


@dataclass
class PolicyLoadContext:
    """Context for loading policies, tracks inheritance chain."""

    current_file: Path
    inheritance_chain: list[Path]

    def derive_path(self, relative_path: str) -> Path:
        """Resolve relative path from current policy file location."""
        if Path(relative_path).is_absolute():
            return Path(relative_path)
        return (self.current_file.parent / relative_path).resolve()


class PolicyFileSchema(BaseModel):
    """Pydantic model for policy file schema validation."""

    version: Optional[str] = Field("1.0", description="Policy schema version")
    name: Optional[str] = Field(None, description="Policy name")
    description: Optional[str] = Field(None, description="Policy description")
    extends: Optional[Union[str, list[str]]] = Field(
        None, description="Base policy files to inherit from"
    )
    fields: dict[str, str] = Field(
        default_factory=dict, description="Field path to mask category mappings"
    )

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: Any) -> Any:
        """Validate version format."""
        if v is not None:
            version_pattern = r"^\d+\.\d+(\.\d+)?$"
            if not re.match(version_pattern, v):
                raise ValueError(
                    f"Version must follow format 'x.y' or 'x.y.z', got '{v}'"
                )
        return v

    @field_validator("fields")
    @classmethod
    def validate_fields(cls, v: Any) -> Any:
        """Validate field paths and that every entry names a known mask category."""
        for path, tag in v.items():
            if not path.strip() or any(not part for part in path.strip().split(".")):
                raise ValueError(
                    f"Invalid field path '{path}': use a field name or "
                    f"dot-separated field names"
                )
            try:
                MaskCategory(tag)
            except ValueError as e:
                valid = [c.value for c in MaskCategory]
                raise ValueError(
                    f"Invalid mask category '{tag}' for field '{path}'. "
                    f"Valid categories: {valid}"
                ) from e
        return v


class PolicyLoader:
    """
    Policy loader with inheritance and validation support.

    Features:
    - YAML policy file loading with schema validation
    - Inheritance from base policy files via ``extends``
    - Child entries override inherited ones
    """

    def __init__(self, base_path: Optional[Path] = None):
        """
        Initialize policy loader.

        Args:
            base_path: Base directory for resolving relative policy paths
        """
        self.base_path = base_path or Path.cwd()
        self._policy_cache: dict[Path, PolicyFileSchema] = {}

    def load_policy(self, policy_path: Union[str, Path]) -> FieldPolicy:
        """
        Load a field policy from file with full inheritance support.

        Args:
            policy_path: Path to policy YAML file

        Returns:
            Fully resolved FieldPolicy instance

        Raises:
            PolicyValidationError: If policy validation fails
            PolicyInheritanceError: If inheritance cannot be resolved
            FileNotFoundError: If policy file doesn't exist
        """
        policy_path = Path(policy_path)
        if not policy_path.is_absolute():
            policy_path = self.base_path / policy_path

        context = PolicyLoadContext(current_file=policy_path, inheritance_chain=[])
        schema = self._load_policy_file(policy_path, context)

        logger.debug(
            f"Loaded policy '{schema.name or policy_path.name}' "
            f"with {len(schema.fields)} field entries"
        )
        return FieldPolicy.from_mapping(schema.fields, name=schema.name)

    def load_policy_from_string(self, content: str) -> FieldPolicy:
        """Load a policy from YAML text. ``extends`` resolves against base_path."""
        schema = self._parse(content, source="<string>")
        if schema.extends:
            context = PolicyLoadContext(
                current_file=self.base_path / "<string>", inheritance_chain=[]
            )
            schema = self._resolve_inheritance(schema, context)
        return FieldPolicy.from_mapping(schema.fields, name=schema.name)

    def _load_policy_file(
        self, policy_path: Path, context: PolicyLoadContext
    ) -> PolicyFileSchema:
        """Load and resolve a single policy file, following ``extends``."""
        resolved_policy_path = policy_path.resolve()
        resolved_chain = [p.resolve() for p in context.inheritance_chain]

        if resolved_policy_path in resolved_chain:
            chain = [str(p) for p in context.inheritance_chain + [policy_path]]
            raise PolicyInheritanceError(
                f"Circular inheritance detected: {' -> '.join(chain)}",
                inheritance_chain=chain,
            )

        if resolved_policy_path in self._policy_cache:
            return self._policy_cache[resolved_policy_path]

        if not policy_path.exists():
            raise FileNotFoundError(f"Policy file not found: {policy_path}")

        with open(policy_path, encoding="utf-8") as f:
            content = f.read()
        schema = self._parse(content, source=str(policy_path))

        if schema.extends:
            new_context = PolicyLoadContext(
                current_file=policy_path,
                inheritance_chain=context.inheritance_chain + [policy_path],
            )
            schema = self._resolve_inheritance(schema, new_context)

        self._policy_cache[resolved_policy_path] = schema
        return schema

    def _parse(self, content: str, source: str) -> PolicyFileSchema:
        """Parse YAML text and validate it against the policy schema."""
        try:
            policy_data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise PolicyValidationError(
                f"Invalid YAML in {source}: {e}", policy_file=source
            ) from e

        if not isinstance(policy_data, dict):
            raise PolicyValidationError(
                f"Policy in {source} must be a mapping, got {type(policy_data).__name__}",
                policy_file=source,
            )

        try:
            return PolicyFileSchema(**policy_data)
        except ValidationError as e:
            raise PolicyValidationError(
                f"Schema validation failed for {source}: {e}", policy_file=source
            ) from e

    def _resolve_inheritance(
        self, schema: PolicyFileSchema, context: PolicyLoadContext
    ) -> PolicyFileSchema:
        """Load base policies and merge ``schema`` on top of them."""
        extends_list = (
            schema.extends if isinstance(schema.extends, list) else [schema.extends]
        )

        base_policies = []
        for base_path_str in extends_list:
            base_path = context.derive_path(base_path_str)
            base_policies.append(self._load_policy_file(base_path, context))

        return self._merge_policies(base_policies + [schema])

    def _merge_policies(self, policies: list[PolicyFileSchema]) -> PolicyFileSchema:
        """
        Merge policy schemas in inheritance order.

        Base policies come first and the child last; later field entries
        override earlier ones and the child's metadata wins.
        """
        if not policies:
            raise ValueError("Cannot merge empty policy list")

        result = policies[0].model_copy(deep=True)
        for policy in policies[1:]:
            result = result.model_copy(
                update={
                    "version": policy.version or result.version,
                    "name": policy.name or result.name,
                    "description": policy.description or result.description,
                    "fields": {**result.fields, **policy.fields},
                }
            )
        return result.model_copy(update={"extends": None})

    def validate_policy_file(self, policy_path: Union[str, Path]) -> list[str]:
        """
        Validate a policy file and return any validation errors.

        Returns:
            List of validation error messages (empty if valid)
        """
        try:
            self.load_policy(policy_path)
            return []
        except (PolicyError, FileNotFoundError) as e:
            return [str(e)]


def load_policy(policy_path: Union[str, Path]) -> FieldPolicy:
    """Load a policy file using a fresh ``PolicyLoader``."""
    return PolicyLoader().load_policy(policy_path)
