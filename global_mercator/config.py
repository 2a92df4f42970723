#!/usr/bin/env python3
# global_mercator/config.py
"""
Config loader/saver and defaults for the Global Mercator CLI and shell.

Goals:
- Single JSON file per user.
- Safe atomic writes.
- Deep-merge of user config over defaults.
- Basic validation with sane fallbacks.
- No external deps.

Projection constants (tile size, earth radius) live in
global_mercator.geodesy and are not configurable.

Usage:
    from global_mercator.config import Config, DEFAULT_CONFIG
    cfg = Config.load()                 # ~/.config/global_mercator/global_mercator.json
    bulk = cfg["grid"]["bulk_size"]
    cfg["output"]["format"] = "text"
    cfg.save()
"""

from __future__ import annotations

import json
import logging
import os
import platform
import shutil
import tempfile
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from global_mercator.geodesy import MAX_ZOOM

log = logging.getLogger(__name__)

# ----------------------------
# Defaults
# ----------------------------

DEFAULT_CONFIG: Dict[str, Any] = {
    "grid": {
        "min_zoom": 0,
        "max_zoom": 8,
        "bulk_size": 5000,                # tiles per grid --bulk batch
        "limit": 10000,                   # max tiles printed by `grid` when no --limit
    },
    "output": {
        "format": "json",                 # json | text
        "precision": 6,                   # decimals for text output
    },
    "shell": {
        "prompt": "mercator> ",
        "history_file": None,             # path or None (in-memory history)
        "theme": "auto",                  # auto | light | dark
    },
    "logging": {
        "level": "WARNING",
        "file": None,                     # path or None
        "rotate_bytes": 5 * 1024 * 1024,
        "rotate_keep": 3,
    },
}

CONFIG_ENV = "GLOBAL_MERCATOR_CONFIG"

# ----------------------------
# Helpers
# ----------------------------

def _os_config_home() -> str:
    """Return per-OS config base directory."""
    if platform.system() == "Windows":
        base = os.environ.get("APPDATA") or os.path.expanduser("~\\AppData\\Roaming")
        return os.path.join(base, "GlobalMercator")
    # macOS: ~/Library/Application Support/GlobalMercator
    if platform.system() == "Darwin":
        return os.path.join(os.path.expanduser("~/Library/Application Support"), "GlobalMercator")
    # Linux and others: ~/.config/global_mercator
    return os.path.join(os.path.expanduser("~/.config"), "global_mercator")

def _default_config_path() -> str:
    """Resolve default config path, honoring GLOBAL_MERCATOR_CONFIG env override."""
    env = os.environ.get(CONFIG_ENV)
    if env:
        return os.path.expanduser(env)
    return os.path.join(_os_config_home(), "global_mercator.json")

def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """Return deep-merged copy of dicts: values in b override a."""
    out = dict(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out

def _atomic_write_json(path: str, data: Dict[str, Any]) -> None:
    directory = os.path.dirname(path) or "."
    os.makedirs(directory, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=".tmp_cfg_", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=True)
            f.write("\n")
        os.replace(tmp, path)
    except Exception:
        # Clean temp on error
        if os.path.exists(tmp):
            os.remove(tmp)
        raise

def _coerce_int(v: Any, default: int, minmax: Optional[Tuple[int, int]] = None) -> int:
    try:
        x = int(v)
    except (TypeError, ValueError):
        return int(default)
    if minmax:
        lo, hi = minmax
        x = max(lo, min(hi, x))
    return x

def _coerce_str(v: Any, default: Optional[str]) -> Optional[str]:
    return str(v) if v else default

# ----------------------------
# Validation
# ----------------------------

def _validate(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Return validated copy with fallbacks applied."""
    # round-trip so nested sections never alias DEFAULT_CONFIG
    c = json.loads(json.dumps(_deep_merge(DEFAULT_CONFIG, cfg or {})))

    # grid
    g = c["grid"]
    g["min_zoom"]  = _coerce_int(g.get("min_zoom"), 0, (0, MAX_ZOOM))
    g["max_zoom"]  = _coerce_int(g.get("max_zoom"), 8, (g["min_zoom"], MAX_ZOOM))
    g["bulk_size"] = _coerce_int(g.get("bulk_size"), 5000, (1, 10_000_000))
    g["limit"]     = _coerce_int(g.get("limit"), 10000, (0, 10_000_000))

    # output
    o = c["output"]
    if o.get("format") not in ("json", "text"):
        o["format"] = DEFAULT_CONFIG["output"]["format"]
    o["precision"] = _coerce_int(o.get("precision"), 6, (0, 15))

    # shell
    s = c["shell"]
    s["prompt"] = _coerce_str(s.get("prompt"), DEFAULT_CONFIG["shell"]["prompt"])
    s["history_file"] = _coerce_str(s.get("history_file"), None)
    if s.get("theme") not in ("auto", "light", "dark"):
        s["theme"] = DEFAULT_CONFIG["shell"]["theme"]

    # logging
    lg = c["logging"]
    level = str(lg.get("level") or "").upper()
    if level not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"):
        level = DEFAULT_CONFIG["logging"]["level"]
    lg["level"] = level
    lg["file"] = _coerce_str(lg.get("file"), None)
    lg["rotate_bytes"] = _coerce_int(lg.get("rotate_bytes"), DEFAULT_CONFIG["logging"]["rotate_bytes"], (256 * 1024, 50 * 1024 * 1024))
    lg["rotate_keep"]  = _coerce_int(lg.get("rotate_keep"), DEFAULT_CONFIG["logging"]["rotate_keep"], (0, 50))

    return c

# ----------------------------
# Public API
# ----------------------------

@dataclass
class Config:
    """Thin wrapper around a nested dict with load/save/merge."""
    data: Dict[str, Any] = field(default_factory=lambda: _validate({}))
    path: str = field(default_factory=_default_config_path)

    # --- Mapping-style access
    def __getitem__(self, k: str) -> Any:
        return self.data[k]

    def __setitem__(self, k: str, v: Any) -> None:
        self.data[k] = v

    def get(self, k: str, default: Any = None) -> Any:
        return self.data.get(k, default)

    # --- Ops
    @classmethod
    def load(cls, path: Optional[str] = None, create_if_missing: bool = False) -> "Config":
        cfg_path = os.path.expanduser(path) if path else _default_config_path()
        if not os.path.exists(cfg_path):
            cfg = _validate(DEFAULT_CONFIG)
            if create_if_missing:
                _atomic_write_json(cfg_path, cfg)
            return cls(cfg, cfg_path)

        try:
            with open(cfg_path, "r", encoding="utf-8") as f:
                user_cfg = json.load(f)
            if not isinstance(user_cfg, dict):
                raise ValueError("config root must be an object")
        except (OSError, ValueError) as exc:
            # Corrupt file. Backup and fall back to defaults.
            log.warning("Ignoring unreadable config %s: %s", cfg_path, exc)
            backup = cfg_path + ".corrupt.bak"
            try:
                shutil.copyfile(cfg_path, backup)
            except OSError:
                log.warning("Could not back up config to %s", backup)
            user_cfg = {}

        return cls(_validate(user_cfg), cfg_path)

    def save(self) -> None:
        """Persist to JSON atomically."""
        full = _validate(self.data)
        _atomic_write_json(self.path, full)
        self.data = full  # sync in-memory with normalized values

    def update(self, partial: Dict[str, Any]) -> None:
        """Deep-merge a partial config then validate."""
        merged = _deep_merge(self.data, partial)
        self.data = _validate(merged)

    def diff(self) -> Dict[str, Any]:
        """Keys that differ from the defaults."""
        return _diff(DEFAULT_CONFIG, self.data)

    # Convenience getters
    @property
    def output_format(self) -> str:
        return self.data["output"]["format"]

    @property
    def bulk_size(self) -> int:
        return self.data["grid"]["bulk_size"]


def _diff(base: Dict[str, Any], cur: Dict[str, Any]) -> Dict[str, Any]:
    """Return nested dictionary of keys where cur differs from base."""
    out: Dict[str, Any] = {}
    for k in cur.keys() | base.keys():
        if k not in base:
            out[k] = cur[k]
            continue
        if k not in cur:
            continue
        vb = base[k]
        vc = cur[k]
        if isinstance(vb, dict) and isinstance(vc, dict):
            d = _diff(vb, vc)
            if d:
                out[k] = d
        elif vb != vc:
            out[k] = vc
    return out

__all__ = [
    "Config",
    "DEFAULT_CONFIG",
    "CONFIG_ENV",
    "_default_config_path",
]
