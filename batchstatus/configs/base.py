"""
Shared settings plumbing.

Every settings group reads the same .env file and differs only in its
environment prefix; settings_config() builds that model_config.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


def settings_config(env_prefix: str = "", **overrides) -> SettingsConfigDict:
    """
    Build the model_config for a settings group.

    Args:
        env_prefix: Environment variable prefix of the group (e.g. "RETENTION_")
        **overrides: Extra SettingsConfigDict keys, such as populate_by_name

    Returns:
        SettingsConfigDict: Config reading .env, case-insensitive, ignoring unknown keys
    """
    return SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix=env_prefix,
        case_sensitive=False,
        extra="ignore",
        **overrides,
    )


class BaseSettings(PydanticBaseSettings):
    """Base class for settings groups without a prefix."""

    model_config = settings_config()
