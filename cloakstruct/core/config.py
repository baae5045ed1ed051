"""Runtime masking configuration from environment variables."""

import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

logger = logging.getLogger(__name__)

NON_TEXT_RAISE = "raise"
NON_TEXT_SKIP = "skip"


@dataclass(frozen=True)
class MaskingConfig:
    """Behavior switches for the struct walker.

    Attributes:
        non_text_fields: What to do when a field annotated with a leaf
            category holds something other than ``str``. ``"raise"`` fails
            the whole record with ``UnsupportedFieldError``; ``"skip"``
            copies the value unchanged and logs a warning.
        copy_unannotated: Shallow-copy unannotated field values so mutable
            containers in the output are independent of the input.
    """

    non_text_fields: str = NON_TEXT_RAISE
    copy_unannotated: bool = True

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate_non_text_fields()

    def _validate_non_text_fields(self) -> None:
        """Validate and normalize non_text_fields."""
        value = str(self.non_text_fields).strip().lower()
        valid = {NON_TEXT_RAISE, NON_TEXT_SKIP}

        if value not in valid:
            logger.warning(
                f"Invalid non_text_fields '{self.non_text_fields}', "
                f"using '{NON_TEXT_RAISE}'. Valid: {valid}"
            )
            value = NON_TEXT_RAISE
        object.__setattr__(self, "non_text_fields", value)

    @property
    def skip_non_text(self) -> bool:
        return self.non_text_fields == NON_TEXT_SKIP

    @classmethod
    def from_environment(cls) -> "MaskingConfig":
        """Load configuration from environment variables.

        Environment Variables:
            CLOAKSTRUCT_NON_TEXT_FIELDS: raise|skip
            CLOAKSTRUCT_COPY_UNANNOTATED: true|false

        Invalid values log a warning and fall back to defaults.
        """
        config = cls(
            non_text_fields=cls._get_env_string(
                "CLOAKSTRUCT_NON_TEXT_FIELDS", NON_TEXT_RAISE
            ),
            copy_unannotated=cls._get_env_bool("CLOAKSTRUCT_COPY_UNANNOTATED", True),
        )
        logger.debug(f"Loaded masking configuration from environment: {config}")
        return config

    @staticmethod
    def _get_env_string(key: str, default: str) -> str:
        """Get string value from environment with default fallback."""
        value = os.getenv(key)
        if value is None:
            return default
        return value.strip()

    @staticmethod
    def _get_env_bool(key: str, default: bool) -> bool:
        """Get boolean value from environment with default fallback.

        Only 'true' and 'false' (case insensitive) are recognized.
        """
        value = os.getenv(key)
        if value is None:
            return default

        cleaned_value = value.strip().lower()
        if cleaned_value == "true":
            return True
        elif cleaned_value == "false":
            return False

        logger.warning(
            f"Environment variable {key}={value} is not 'true' or 'false', "
            f"using default {default}"
        )
        return default

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary for serialization."""
        return {
            "non_text_fields": self.non_text_fields,
            "copy_unannotated": self.copy_unannotated,
        }


# Loaded lazily so tests can patch the environment first
_masking_config: Optional[MaskingConfig] = None


def get_masking_config() -> MaskingConfig:
    """Get the global masking configuration, creating it if needed."""
    global _masking_config
    if _masking_config is None:
        _masking_config = MaskingConfig.from_environment()
    return _masking_config


def reset_masking_config() -> None:
    """Reset the global configuration for testing purposes."""
    global _masking_config
    _masking_config = None
