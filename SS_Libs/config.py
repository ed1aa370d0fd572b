"""
Runtime configuration for Sculpt Studio.

Values default to the module constants and can be overridden from the
environment, which is also where the caller-supplied credential comes from
when the desktop editor is started.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from SS_Libs.constants import (
    PRIMARY_MODEL,
    SECONDARY_MODEL,
    DEFAULT_LOG_LEVEL,
    ENV_API_KEY,
    ENV_API_KEY_FALLBACK,
    ENV_PRIMARY_MODEL,
    ENV_SECONDARY_MODEL,
    ENV_LOG_LEVEL,
)

logger = logging.getLogger(__name__)


@dataclass
class StudioConfig:
    """Configuration for a studio session.

    Attributes:
        api_key: Credential passed to the remote model client (may be None)
        primary_model: Highest-quality model, tried first
        secondary_model: Widely available model used as fallback
        log_level: Name of the root logging level
    """
    api_key: Optional[str] = None
    primary_model: str = PRIMARY_MODEL
    secondary_model: str = SECONDARY_MODEL
    log_level: str = DEFAULT_LOG_LEVEL

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (the credential is never included)."""
        return {
            "primary_model": self.primary_model,
            "secondary_model": self.secondary_model,
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StudioConfig":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                    if k in cls.__dataclass_fields__}
        return cls(**filtered)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "StudioConfig":
        """
        Build a configuration from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            StudioConfig with overrides applied
        """
        env = os.environ if environ is None else environ

        api_key = env.get(ENV_API_KEY) or env.get(ENV_API_KEY_FALLBACK) or None
        if api_key is None:
            logger.info("No API key found in environment")

        return cls(
            api_key=api_key,
            primary_model=env.get(ENV_PRIMARY_MODEL) or PRIMARY_MODEL,
            secondary_model=env.get(ENV_SECONDARY_MODEL) or SECONDARY_MODEL,
            log_level=(env.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper(),
        )
