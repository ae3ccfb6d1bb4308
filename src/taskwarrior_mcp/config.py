"""Configuration for the Taskwarrior MCP server.

Settings are loaded from (highest to lowest priority):
    1. Constructor arguments
    2. Environment variables (TASKWARRIOR_MCP_* prefix)
    3. .env file
    4. Default values

Settings Management:
    settings = get_settings()      # lazily created singleton
    set_settings(my_settings)      # replace it (tests, embedding)
    reload_settings()              # drop it and load again
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "Settings",
    "get_settings",
    "set_settings",
    "reload_settings",
]


class Settings(BaseSettings):
    """Settings for the Taskwarrior MCP server.

    Only ``task_data`` changes what the external tool sees; everything else
    about Taskwarrior (its rc file, urgency coefficients, reports) stays
    governed by the user's own Taskwarrior configuration.
    """

    model_config = SettingsConfigDict(
        env_prefix="TASKWARRIOR_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # External tool
    task_command: str = Field(
        default="task",
        title="Task Command",
        description="Taskwarrior executable to invoke",
    )
    task_data: Path | None = Field(
        default=None,
        title="Task Data Directory",
        description="Data directory passed to Taskwarrior as TASKDATA (unset = Taskwarrior default)",
    )

    # Server identity
    server_name: str = Field(
        default="taskwarrior-mcp",
        title="Server Name",
        description="Name reported to MCP clients",
    )

    # Logging configuration
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        title="Log Level",
        description="Logging verbosity level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        title="Log Format",
        description="Log output format (console for dev, json for production)",
    )

    @field_validator("task_data", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path | None) -> Path | None:
        """Expand ~ in the data directory; treat an empty value as unset."""
        if v is None:
            return None
        if isinstance(v, str):
            if not v.strip():
                return None
            return Path(v).expanduser()
        return v.expanduser()

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip().lower()
        return v


# Global settings instance holder
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get the current settings instance, creating it on first access."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def set_settings(settings: Settings) -> None:
    """Set the global settings instance.

    Args:
        settings: Settings instance to use globally
    """
    global _settings_instance
    _settings_instance = settings


def reload_settings() -> Settings:
    """Discard the global settings and load them again.

    Returns:
        Fresh Settings instance
    """
    global _settings_instance
    _settings_instance = None
    return get_settings()
