"""Configuration management for Sleng."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

SLENG_HOME = Path(os.environ.get("SLENG_HOME", Path.home() / "sleng"))
CONFIG_FILE = SLENG_HOME / "config" / "sleng.conf"
DATA_DIR = SLENG_HOME / "data"
DEFAULT_DATA_FILE = DATA_DIR / "slang.json"


@dataclass
class Config:
    """Sleng configuration."""

    data_file: str = ""
    api_host: str = "127.0.0.1"
    api_port: int = 8080
    log_level: str = "WARNING"

    @property
    def data_path(self) -> Path:
        """Resolved path of the backing document."""
        if self.data_file:
            return Path(self.data_file).expanduser()
        return DEFAULT_DATA_FILE


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from unquoted values."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from sleng.conf file."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "data_file":
                config.data_file = value
            case "api_host":
                config.api_host = value
            case "api_port":
                try:
                    config.api_port = int(value)
                except ValueError:
                    logger.warning(f"Invalid API_PORT {value!r}, using {config.api_port}")
            case "log_level":
                config.log_level = value.upper()
            case _:
                logger.debug(f"Ignoring unknown config key: {key}")

    return config
