"""Configuration loading and validation."""

import logging
import os
import sys
from dataclasses import dataclass
from dotenv import load_dotenv


@dataclass
class Config:
    """Economy store configuration."""
    data_file: str
    log_level: str


def load_config() -> Config:
    """Load and validate configuration from environment variables."""
    load_dotenv()

    data_file = os.getenv("DATABASE", "economy.db")
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    if not isinstance(logging.getLevelName(log_level), int):
        sys.stderr.write(f"Unknown LOG_LEVEL: {log_level}\n")
        sys.exit(1)

    return Config(
        data_file=data_file,
        log_level=log_level,
    )


config = load_config()
