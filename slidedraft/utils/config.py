from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Dict


CONFIG_DIR = Path.home() / ".config" / "slidedraft"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.toml"
CONFIG_ENV = "SLIDEDRAFT_CONFIG"

SECRET_KEYS = {"api_key"}


def get_default_config_path() -> Path:
    env = os.environ.get(CONFIG_ENV)
    return Path(env) if env else DEFAULT_CONFIG_PATH


def _resolve_path(config_path: str | Path | None) -> Path:
    path = Path(config_path) if config_path else get_default_config_path()
    if path.is_dir():
        path = path / "config.toml"
    return path


def _toml_value(v: Any) -> str:
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, (int, float)):
        return str(v)
    if v is None:
        return '""'
    sval = str(v).replace("\\", "\\\\").replace('"', '\\"')
    return f"\"{sval}\""


def _toml_dump(data: Dict[str, Dict[str, Any]]) -> str:
    lines: list[str] = []
    for section, values in data.items():
        tables = {k: v for k, v in values.items() if isinstance(v, dict)}
        lines.append(f"[{section}]")
        for k, v in values.items():
            if k not in tables:
                lines.append(f"{k} = {_toml_value(v)}")
        lines.append("")
        for name, table in tables.items():
            lines.append(f"[{section}.{name}]")
            for k, v in table.items():
                lines.append(f"{k} = {_toml_value(v)}")
            lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def load_config(config_path: str | Path | None, profile: str = "default") -> dict[str, Any]:
    path = _resolve_path(config_path)
    cfg: dict[str, Any] = {}
    meta = {"source": "defaults", "config_path": str(path), "profile": profile}
    if path.exists():
        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise SystemExit(f"Cannot read config {path}: {e}")
        if profile in data:
            cfg.update(data.get(profile, {}))
            meta["source"] = "file"
        elif "default" in data:
            cfg.update(data.get("default", {}))
            meta["source"] = "file"
            meta["profile"] = "default"
    cfg["_meta"] = meta
    return cfg


def save_config(config_path: str | Path, profile: str, updates: Dict[str, Any], *, replace_profile: bool = False) -> None:
    path = _resolve_path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    existing: Dict[str, Dict[str, Any]] = {}
    if path.exists():
        existing = tomllib.loads(path.read_text(encoding="utf-8"))

    updates = {k: v for k, v in updates.items() if k != "_meta"}
    if replace_profile:
        existing[profile] = dict(updates)
    else:
        current = existing.get(profile, {})
        current.update(updates)
        existing[profile] = current

    if "default" not in existing:
        existing.setdefault("default", {})

    path.write_text(_toml_dump(existing), encoding="utf-8")


def debug_dump_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of cfg with secrets masked, safe to print."""
    def _redact(d: Dict[str, Any]) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for k, v in d.items():
            if isinstance(v, dict):
                out[k] = _redact(v)
            elif k in SECRET_KEYS and v:
                out[k] = "***"
            else:
                out[k] = v
        return out
    return _redact(cfg)


def resolve_setting(key: str, value: Any, cfg: dict, default: Any = None) -> Any:
    """
    Prefer an explicit CLI value; otherwise fall back to the profile, then to default.
    """
    if value is not None and value != "":
        return value
    if key in cfg and cfg[key] not in (None, ""):
        return cfg[key]
    return default
