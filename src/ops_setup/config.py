"""Configuration management using Pydantic BaseSettings.

This module provides the environment-driven defaults for the ``ops`` CLI
using Pydantic BaseSettings for validation and automatic environment
variable loading (including a ``.env`` file in the working directory).
"""

import logging
from functools import lru_cache
from typing import Any

from pydantic import Field, SecretStr, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

FONT_AWESOME_ACCOUNT_URL = "fontawesome.com/account"
DEFAULT_NODE_ENV = "development"


class OpsSettings(BaseSettings):
    """Defaults for the setup commands.

    Environment Variables:
        FONT_AWESOME_TOKEN: Default Font Awesome npm token (optional)
        FONT_AWESOME_TOKEN_LOCATION: Where to obtain the token
            (default: "fontawesome.com/account")
        OPS_NODE_ENV: Default NODE_ENV value (default: "development")
        OPS_PROJECT_KEY: Default .firebaserc project key (optional; the CLI
            falls back to the first key in the file)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True,
        frozen=True,
    )

    font_awesome_token: SecretStr | None = Field(
        default=None,
        description="Default value offered when prompting for the Font Awesome token",
    )
    font_awesome_token_location: str = Field(
        default=FONT_AWESOME_ACCOUNT_URL,
        description="Where developers obtain the Font Awesome token",
    )
    ops_node_env: str = Field(
        default=DEFAULT_NODE_ENV,
        description="Default NODE_ENV value for the setup command",
    )
    ops_project_key: str | None = Field(
        default=None,
        description="Default property name in the .firebaserc projects mapping",
    )

    @field_validator("font_awesome_token", mode="before")
    @classmethod
    def blank_token_to_none(cls, v: Any) -> Any:
        """Treat a whitespace-only token as unset."""
        if isinstance(v, SecretStr):
            v = v.get_secret_value()
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("ops_node_env", "font_awesome_token_location", mode="before")
    @classmethod
    def blank_to_default(cls, v: Any, info: ValidationInfo) -> Any:
        """Fall back to the field default for empty values."""
        if v is None or (isinstance(v, str) and not v.strip()):
            default: str = cls.model_fields[info.field_name].default
            logger.debug("%s is empty; using %r", info.field_name, default)
            return default
        return v.strip() if isinstance(v, str) else v

    @field_validator("ops_project_key", mode="before")
    @classmethod
    def blank_project_key_to_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip() or None
        return v

    @property
    def font_awesome_token_value(self) -> str:
        """The default token as plain text, empty when unset."""
        if self.font_awesome_token is None:
            return ""
        return self.font_awesome_token.get_secret_value()


@lru_cache
def get_settings() -> OpsSettings:
    """Get or create the settings instance loaded from the environment."""
    return OpsSettings()
