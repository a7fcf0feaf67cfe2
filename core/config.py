import sys
import tomllib
from typing import Any, Dict

from loguru import logger

CONFIG_PATH = "config.toml"


def load_config(path: str = CONFIG_PATH) -> Dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def configure_logging(cfg: Dict[str, Any]) -> None:
    level = str(cfg.get("logging", {}).get("level", "INFO")).upper()
    logger.remove()
    logger.add(sys.stderr, level=level)
