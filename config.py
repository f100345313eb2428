"""
Configuration module for the vote tally tools.

Centralizes all settings and environment variables for easy configuration.
Only the command-line layer reads it; tally and report functions receive
their settings as arguments.

Usage:
    from config import get_config

    config = get_config()
    print(config.token_length)
    print(config.resolution_policy)
"""

import os
from dataclasses import dataclass

from tally_types import OutputFormat, ResolutionPolicy

TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class Config:
    """
    Application configuration loaded from environment variables.

    All settings can be overridden via environment variables.
    """

    # Token Settings
    token_length: int = 7
    generate_pdfs: bool = True
    pdf_dir: str = "pdfs"

    # Tally Settings
    resolution: str = "last"  # "last" or "first"
    output_format: str = "text"  # "text" or "json"

    # Logging Settings
    log_level: str = "INFO"

    def __post_init__(self):
        """Load configuration from environment variables."""
        # Tokens
        self.token_length = int(os.environ.get("VOTE_TALLY_TOKEN_LENGTH", "7"))
        self.generate_pdfs = os.environ.get("VOTE_TALLY_GENERATE_PDFS", "true").strip().lower() in TRUE_VALUES
        self.pdf_dir = os.environ.get("VOTE_TALLY_PDF_DIR", "pdfs")

        # Tally
        self.resolution = os.environ.get("VOTE_TALLY_RESOLUTION", "last")
        self.output_format = os.environ.get("VOTE_TALLY_OUTPUT_FORMAT", "text")

        # Logging
        self.log_level = os.environ.get("LOG_LEVEL", "INFO")

    @property
    def resolution_policy(self) -> ResolutionPolicy:
        return ResolutionPolicy.from_name(self.resolution)

    @property
    def report_format(self) -> OutputFormat:
        return OutputFormat.from_name(self.output_format)

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of issues.

        Returns:
            List of configuration issues (empty if valid)
        """
        issues = []

        if self.token_length < 1:
            issues.append(f"VOTE_TALLY_TOKEN_LENGTH must be at least 1, got {self.token_length}")

        try:
            self.resolution_policy
        except ValueError:
            issues.append(f"VOTE_TALLY_RESOLUTION must be 'first' or 'last', got {self.resolution!r}")

        try:
            self.report_format
        except ValueError:
            issues.append(f"VOTE_TALLY_OUTPUT_FORMAT must be 'text' or 'json', got {self.output_format!r}")

        return issues

    def to_dict(self) -> dict:
        """Convert configuration to dictionary (safe for logging)."""
        return {
            "token_length": self.token_length,
            "generate_pdfs": self.generate_pdfs,
            "pdf_dir": self.pdf_dir,
            "resolution": self.resolution,
            "output_format": self.output_format,
            "log_level": self.log_level,
        }


# Global configuration instance
config = Config()


def get_config() -> Config:
    """Get the global configuration instance."""
    return config


def reload_config() -> Config:
    """Reload configuration from environment variables."""
    global config
    config = Config()
    return config
