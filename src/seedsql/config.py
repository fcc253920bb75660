"""
Configuration management for seedsql.

Loads and validates configuration from seedsql.toml files using Pydantic.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from seedsql.state import DEFAULT_MAX_ATTEMPTS

CONFIG_FILENAME = "seedsql.toml"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class GenerationConfig(BaseSettings):
    """Value generation configuration."""

    model_config = SettingsConfigDict(env_prefix="SEEDSQL_GENERATION_")

    max_attempts: Optional[int] = Field(
        default=DEFAULT_MAX_ATTEMPTS,
        ge=1,
        description="Resampling cap per value before giving up (None retries forever)",
    )
    order_by_dependencies: bool = Field(
        default=True,
        description="Generate referenced tables before the tables referencing them",
    )


class OutputConfig(BaseSettings):
    """Output file configuration."""

    model_config = SettingsConfigDict(env_prefix="SEEDSQL_OUTPUT_")

    path: str = Field(
        default="~/Documents/sample-data.sql",
        description="File receiving the generated INSERT statements",
    )
    truncate: bool = Field(
        default=True, description="Empty the output file before generating"
    )
    log_level: str = Field(default="WARNING", description="Logging level for the CLI")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize to an upper-case standard logging level name."""
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got '{value}'"
            )
        return level


class Config(BaseSettings):
    """Main configuration for seedsql."""

    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def from_toml(cls, path: Path | str) -> Config:
        """
        Load configuration from TOML file.

        Args:
            path: Path to seedsql.toml file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        return cls(
            generation=GenerationConfig(**data.get("generation", {})),
            output=OutputConfig(**data.get("output", {})),
        )

    @classmethod
    def find_and_load(cls, start_dir: Optional[Path] = None) -> Config:
        """
        Find and load configuration from seedsql.toml.

        Searches for seedsql.toml starting from start_dir and walking up
        parent directories until found or reaching filesystem root.

        Args:
            start_dir: Directory to start search (defaults to current directory)

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If no config file found
        """
        if start_dir is None:
            start_dir = Path.cwd()

        current = Path(start_dir).resolve()

        while True:
            config_path = current / CONFIG_FILENAME
            if config_path.exists():
                return cls.from_toml(config_path)

            parent = current.parent
            if parent == current:
                break
            current = parent

        raise FileNotFoundError(
            f"No {CONFIG_FILENAME} found in {start_dir} or parent directories."
        )

    def to_toml(self, path: Path | str) -> None:
        """
        Write configuration to TOML file.

        TOML has no null, so an unbounded ``max_attempts`` (None) is not
        written; loading the file back yields the default cap.

        Args:
            path: Path to write seedsql.toml
        """
        config_path = Path(path)

        max_attempts = self.generation.max_attempts
        attempts_line = (
            f"max_attempts = {max_attempts}\n" if max_attempts is not None else ""
        )
        toml_content = f"""# seedsql configuration

[generation]
{attempts_line}order_by_dependencies = {str(self.generation.order_by_dependencies).lower()}

[output]
path = "{self.output.path}"
truncate = {str(self.output.truncate).lower()}
log_level = "{self.output.log_level}"
"""

        config_path.write_text(toml_content)

    def get_output_path(self) -> Path:
        """Get the output file as an expanded Path object."""
        return Path(self.output.path).expanduser()

