import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

DEFAULT_KEY_FILE = "key.txt"
DEFAULT_MODEL = "gpt-4o-mini"


@dataclass
class Settings:
    """Runtime settings, read from PHONEBOOK_* environment variables."""

    log_level: str = "WARNING"
    log_file: Optional[str] = None
    openai_key_file: str = DEFAULT_KEY_FILE
    openai_model: str = DEFAULT_MODEL

    def __post_init__(self) -> None:
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level)


def load_settings(dotenv: bool = True) -> Settings:
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True))
    return Settings(
        log_level=os.getenv("PHONEBOOK_LOG_LEVEL", "WARNING"),
        log_file=os.getenv("PHONEBOOK_LOG_FILE") or None,
        openai_key_file=os.getenv("PHONEBOOK_OPENAI_KEY_FILE", DEFAULT_KEY_FILE),
        openai_model=os.getenv("PHONEBOOK_OPENAI_MODEL", DEFAULT_MODEL),
    )
