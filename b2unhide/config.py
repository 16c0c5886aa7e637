"""Configuration management for the unhide tool."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""
    
    model_config = SettingsConfigDict(
        env_prefix="B2UNHIDE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
    
    # B2 command line tool
    b2_binary: str = Field(
        default="b2",
        min_length=1,
        description="Name or path of the B2 command line tool",
    )
    required_commands: list[str] = Field(
        default_factory=list,
        description="Extra executables that must be on PATH before any work starts",
    )
    
    # Logging
    log_level: str = Field(
        default="WARNING",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level",
    )
    log_format: str = Field(
        default="console",
        pattern="^(console|json)$",
        description="Log format: console or json",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional JSON log file path",
    )
    
    @property
    def commands_to_check(self) -> list[str]:
        """B2 binary first, then any extra required commands, without repeats."""
        commands = [self.b2_binary]
        for command in self.required_commands:
            if command not in commands:
                commands.append(command)
        return commands


# Global settings instance
settings = Settings()
