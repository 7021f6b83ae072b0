"""Minimal structured logging helper.

Emits key=value pairs with a timestamp and level, or one JSON object per
line when ``LEVELGEN_LOG_JSON`` is set. Level threshold comes from
``LEVELGEN_LOG_LEVEL`` (debug, info, warn, error).

Usage:
    from levelgen.logging_utils import get_logger
    log = get_logger("levelgen.dungeon.rooms")
    log.info(event="room_placed", x=3, y=4, size=5)

    run_log = log.bind(seed=1234)  # seed=1234 on every line

Non-numeric values are stringified with spaces replaced. Reserved keys: level, ts.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}


def _current_level() -> int:
    return LEVELS.get(os.getenv("LEVELGEN_LOG_LEVEL", "info").lower(), 20)


def _json_mode() -> bool:
    return os.getenv("LEVELGEN_LOG_JSON", "0") in ("1", "true", "TRUE", "yes", "on")


def _format(level: str, **fields):
    if _json_mode():
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        try:
            return json.dumps(rec, separators=(",", ":"), default=str)
        except (TypeError, ValueError):
            return json.dumps({"level": level, "ts": int(time.time()), "error": "json_encode_failed"})
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            s = str(v).replace(" ", "_")
            parts.append(f"{k}={s}")
    return " ".join(parts)


class _Logger:
    """Named emitter. ``bind`` returns a child that stamps fixed fields on every record.

    A generation run binds its seed once, so every stage line can be
    correlated with the map it belongs to.
    """

    def __init__(self, name: str | None = None, context: dict | None = None):
        self.name = name or "levelgen"
        self.context = dict(context or {})

    def bind(self, **context) -> "_Logger":
        merged = dict(self.context)
        merged.update(context)
        return _Logger(self.name, merged)

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < _current_level():
            return
        record = {"logger": self.name}
        record.update(self.context)
        record.update(fields)
        print(_format(lvl, **record), file=sys.stdout if lvl != "error" else sys.stderr)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str, **context):
    """Cached logger for ``name``; extra keyword fields return a bound child instead."""
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    if context:
        return _LOGGER_CACHE[name].bind(**context)
    return _LOGGER_CACHE[name]
