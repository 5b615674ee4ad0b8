"""
Configuration management for xrun.

Implements multi-level configuration loading with precedence:
1. Environment variables (highest priority)
2. Project config (./.xrun/config.yaml)
3. User config (~/.xrun/config.yaml)
4. System config (/etc/xrun/config.yaml)
"""

from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict, YamlConfigSettingsSource

BUNDLED_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


class Config(BaseSettings):
    """Configuration schema for xrun."""

    model_config = SettingsConfigDict(
        # Load from .env files in order of precedence (lowest to highest)
        env_file=[
            ".env",
            str(Path.home() / ".xrun" / ".env"),
        ],
        # Load from YAML files in order of precedence (lowest to highest)
        yaml_file=[
            "/etc/xrun/config.yaml",
            str(Path.home() / ".xrun" / "config.yaml"),
            str(Path.cwd() / ".xrun" / "config.yaml"),
        ],
        env_prefix="XRUN_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        env_file_encoding="utf-8",
    )

    # =================================================================
    # Templates
    # =================================================================
    templates: List[str] = Field(
        default_factory=lambda: [str(BUNDLED_TEMPLATES_DIR)],
        description="Template references: YAML files, directories or http(s) URLs",
    )
    templates_download_timeout_seconds: float = Field(
        default=10.0, gt=0, description="Timeout for downloading remote templates"
    )

    # =================================================================
    # Command execution
    # =================================================================
    dependency_dir: Optional[str] = Field(
        default=None, description="Directory with the binaries allowed to run"
    )
    command_timeout_seconds: float = Field(
        default=30.0, gt=0, description="Timeout for the wrapped command in seconds"
    )

    # =================================================================
    # Logging
    # =================================================================
    log_level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML support."""
        yaml_settings = YamlConfigSettingsSource(settings_cls)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            yaml_settings,
            file_secret_settings,
        )


def load_config() -> Config:
    """
    Load configuration from all sources with proper precedence.

    Examples:
        >>> config = load_config()
        >>> config.command_timeout_seconds
        30.0

        # export XRUN_DEPENDENCY_DIR=/opt/xrun/bin
        >>> load_config().dependency_dir
        '/opt/xrun/bin'
    """
    return Config()
