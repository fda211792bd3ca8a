"""
Configuration Management Module

This module handles all application configuration using Pydantic Settings.
Configuration is loaded from environment variables with strong typing and validation.

Design Decisions:
- Use Pydantic Settings for automatic environment variable loading
- Read the standard GitHub Actions variables (GITHUB_TOKEN, GITHUB_EVENT_PATH, ...)
  under their own names so the helper runs unchanged inside a workflow
- Validate configuration at startup (fail-fast approach)
- The token stays optional here; it is only required once a comment is posted
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All sensitive values are loaded from environment variables only,
    never hardcoded or logged.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore"
    )

    # =========================================================================
    # GitHub Configuration
    # =========================================================================
    github_token: Optional[str] = Field(
        default=None,
        description="Token used to post the preview comment"
    )

    github_api_url: str = Field(
        default="https://api.github.com",
        description="Base URL of the GitHub REST API"
    )

    github_repository: Optional[str] = Field(
        default=None,
        description="Repository in owner/repo format"
    )

    github_event_path: Optional[str] = Field(
        default=None,
        description="Path to the workflow event payload JSON"
    )

    issue_number: Optional[int] = Field(
        default=None,
        ge=1,
        description="Issue or pull request number, overrides the event payload"
    )

    # =========================================================================
    # Input Files
    # =========================================================================
    updates_path: str = Field(
        description="Path to the JSON output of `eas update --json`"
    )

    app_config_path: str = Field(
        default="app.json",
        description="Path to the Expo app config JSON"
    )

    project_root: str = Field(
        default=".",
        description="Project directory containing package.json"
    )

    # =========================================================================
    # Preview Options
    # =========================================================================
    qr_target: Optional[str] = Field(
        default=None,
        description="QR code target: dev-build, dev-client or expo-go"
    )

    branch_qr: bool = Field(
        default=False,
        description="Render a QR code for the branch instead of the update group"
    )

    branch_id: Optional[str] = Field(
        default=None,
        description="EAS branch ID used by branch QR codes"
    )

    app_scheme: Optional[str] = Field(
        default=None,
        description="Deep link scheme override for development builds"
    )

    comment_id: Optional[str] = Field(
        default=None,
        description="Marker used to find and update an existing comment"
    )

    # =========================================================================
    # Outputs
    # =========================================================================
    github_output: Optional[str] = Field(
        default=None,
        description="Path to the GitHub Actions outputs file"
    )

    github_step_summary: Optional[str] = Field(
        default=None,
        description="Path to the GitHub Actions job summary file"
    )

    # =========================================================================
    # Logging Configuration
    # =========================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    log_json_format: bool = Field(
        default=False,
        description="Enable JSON logging format"
    )

    # =========================================================================
    # Feature Flags
    # =========================================================================
    enable_github_comments: bool = Field(
        default=True,
        description="Enable posting the preview comment to GitHub"
    )

    # =========================================================================
    # Validators
    # =========================================================================
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("github_repository")
    @classmethod
    def validate_repository(cls, v: Optional[str]) -> Optional[str]:
        """Ensure the repository is in owner/repo format."""
        if v is None:
            return v
        owner, _, repo = v.partition("/")
        if not owner or not repo or "/" in repo:
            raise ValueError(f"Invalid repository: {v}. Must be in owner/repo format")
        return v


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once,
    which is important for performance and consistency.

    Returns:
        Settings instance
    """
    return Settings()
