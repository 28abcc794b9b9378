"""
Runtime configuration loaded from the environment (and .env when present)
"""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

MAX_EXAM_QUESTIONS = 150

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _env_bool(name: str, default: str = "true") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str = "") -> List[str]:
    val = os.getenv(name, default)
    return [x.strip() for x in val.split(";") if x.strip()]


@dataclass
class Settings:
    admin_username: str = field(default_factory=lambda: os.getenv("ADMIN_USERNAME", "admin"))
    admin_password: Optional[str] = field(default_factory=lambda: os.getenv("ADMIN_PASSWORD") or None)
    exam_duration_seconds: int = field(
        default_factory=lambda: int(os.getenv("EXAM_DURATION_SECONDS", str(3 * 60 * 60)))
    )
    seed_sample_data: bool = field(default_factory=lambda: _env_bool("SEED_SAMPLE_DATA"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    cors_origins: List[str] = field(default_factory=lambda: _env_list("CORS_ORIGINS", "*"))


def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once; repeated calls only adjust the level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level.upper(), format=_LOG_FORMAT)
    root.setLevel(level.upper())
