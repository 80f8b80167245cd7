# deploy_config.py
import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


@dataclass(frozen=True)
class Config:
    # Salesforce credentials (password flow)
    SF_USERNAME: str | None = None
    SF_PASSWORD: str | None = None
    SF_SECURITY_TOKEN: str | None = None
    SF_DOMAIN: str = "login"

    # Salesforce session (reuse an existing access token instead of logging in)
    SF_INSTANCE_URL: str | None = None
    SF_ACCESS_TOKEN: str | None = None

    # Optional: JSON file holding the keys above
    SF_CONFIG_JSON: str | None = None

    # API version used for the deployRequest call, e.g. "60.0"
    SF_API_VERSION: str | None = None

    # HTTP timeout (seconds)
    SF_TIMEOUT: float = 30.0

    # Report defaults (the CLI flags still win)
    REPORT_NO_COLORS: bool = False
    REPORT_NO_GLYPHS: bool = False

    LOG_LEVEL: str = "INFO"

    # Flask server
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 5000


_cfg: Config | None = None


def _get_int(name: str, default: int) -> int:
    try:
        v = int(os.getenv(name, str(default)))
        return v
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    try:
        v = float(os.getenv(name, str(default)))
        return v
    except ValueError:
        return default


def _get_bool(name: str, default: bool) -> bool:
    """Get boolean from environment variable"""
    value = os.getenv(name, str(default)).lower()
    if value in ('true', '1', 'yes', 'on'):
        return True
    elif value in ('false', '0', 'no', 'off'):
        return False
    return default


def get_config() -> Config:
    global _cfg
    if _cfg is not None:
        return _cfg

    _cfg = Config(
        SF_USERNAME=os.getenv("SF_USERNAME"),
        SF_PASSWORD=os.getenv("SF_PASSWORD"),
        SF_SECURITY_TOKEN=os.getenv("SF_SECURITY_TOKEN"),
        SF_DOMAIN=os.getenv("SF_DOMAIN", "login"),
        SF_INSTANCE_URL=os.getenv("SF_INSTANCE_URL"),
        SF_ACCESS_TOKEN=os.getenv("SF_ACCESS_TOKEN"),
        SF_CONFIG_JSON=os.getenv("SF_CONFIG_JSON"),
        SF_API_VERSION=os.getenv("SF_API_VERSION"),
        SF_TIMEOUT=_get_float("SF_TIMEOUT", 30.0),
        REPORT_NO_COLORS=_get_bool("REPORT_NO_COLORS", False),
        REPORT_NO_GLYPHS=_get_bool("REPORT_NO_GLYPHS", False),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        APP_HOST=os.getenv("APP_HOST", "127.0.0.1"),
        APP_PORT=_get_int("APP_PORT", 5000),
    )
    return _cfg


def reset_config() -> None:
    """Forget the cached config so the next get_config() re-reads the environment."""
    global _cfg
    _cfg = None


def setup_logging(level: str | None = None):
    """
    Configure consistent logging for all modules.
    Set LOG_LEVEL=DEBUG in your environment to see debug logs.
    """
    log_level = (level or get_config().LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s]: %(message)s",
    )

    # Silence noisy libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("simple_salesforce").setLevel(logging.WARNING)
    logging.getLogger("werkzeug").setLevel(logging.INFO)

    logging.getLogger(__name__).debug("Logging initialized at %s level", log_level)
