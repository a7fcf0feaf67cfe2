# tests/test_registry.py
"""config.toml loading and module registry."""
from pathlib import Path

import pytest

from core.config import configure_logging, load_config
from core.registry import load_enabled_modules


def test_load_config(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[logging]\nlevel = "debug"\n\n[modules.sti]\nenabled = true\n')
    cfg = load_config(str(path))
    assert cfg["logging"]["level"] == "debug"
    assert cfg["modules"]["sti"]["enabled"] is True
    configure_logging(cfg)


def test_missing_config_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.toml"))


def test_modules_load_in_configured_order():
    cfg = {"modules": {"sti": {"order": 5}, "status": {"order": 1}}}
    assert [m.id for m in load_enabled_modules(cfg)] == ["status", "sti"]


def test_disabled_modules_are_skipped():
    cfg = {"modules": {"sti": {"enabled": True}, "status": {"enabled": False}}}
    assert [m.id for m in load_enabled_modules(cfg)] == ["sti"]


def test_unknown_module_raises():
    with pytest.raises(ModuleNotFoundError):
        load_enabled_modules({"modules": {"nope": {}}})


def test_default_config_file_is_valid():
    cfg = load_config(str(Path(__file__).resolve().parents[1] / "config.toml"))
    assert [m.id for m in load_enabled_modules(cfg)] == ["sti", "status"]
