import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    # API settings
    api_host: str = os.getenv("API_HOST", "127.0.0.1")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    cors_origins: List[str] = field(
        default_factory=lambda: _env_list("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")
    )

    # Database settings
    database_file: str = os.getenv("LIBRARY_DB_FILE", "library.db")
    seed_database: bool = _env_flag("SEED_DATABASE", "True")

    # Terminal client settings
    api_base_url: str = os.getenv("LIBRARY_API_URL", "http://127.0.0.1:8000")
    api_timeout: float = float(os.getenv("LIBRARY_API_TIMEOUT", "10"))

    # Application settings
    app_name: str = os.getenv("APP_NAME", "Library Catalog")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG", "False")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()

_handler: Optional[logging.Handler] = None


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a rich handler to the root logger (once) and set its level."""
    global _handler
    root = logging.getLogger()
    if _handler is None:
        _handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)
        _handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        root.addHandler(_handler)
    root.setLevel((level or settings.log_level).upper())
