"""Configuration management for feednorm."""

import os
from dataclasses import dataclass

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class ParserConfig:
    """Configuration for batch feed parsing."""

    extract_content: bool = True
    log_level: str = "INFO"


def parse_bool(value: str, name: str) -> bool:
    """Interpret an environment flag value."""
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value for {name}: {value!r}")


class Config:
    """Main configuration manager."""

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.extract_content = parse_bool(
            os.getenv("FEEDNORM_EXTRACT_CONTENT", "true"), "FEEDNORM_EXTRACT_CONTENT"
        )
        self.log_level = os.getenv("LOG_LEVEL", "INFO")

    def get_parser_config(self) -> ParserConfig:
        """Get feed parser configuration."""
        return ParserConfig(
            extract_content=self.extract_content,
            log_level=self.log_level,
        )
