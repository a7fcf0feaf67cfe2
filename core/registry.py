from typing import Any, Dict, List, Optional
from importlib import import_module

from loguru import logger

from core.config import load_config
from core.types import ResultModule


def load_enabled_modules(cfg: Optional[Dict[str, Any]] = None) -> List[ResultModule]:
    if cfg is None:
        cfg = load_config()
    mods = []
    mod_cfg = cfg.get("modules", {})
    ordered = sorted(((m, v.get("order", 999)) for m, v in mod_cfg.items() if v.get("enabled", True)), key=lambda x: x[1])
    for name, _ in ordered:
        mod = import_module(f"modules.{name}.{name}")
        mods.append(mod)
    logger.debug(f"Enabled modules: {[m.id for m in mods]}")
    return mods
