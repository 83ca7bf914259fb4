"""Minimal structured logging helper.

Emits key=value pairs (or one JSON object per line) through the stdlib
``logging`` module so the rotating file handler configured by
``asa_service.server.configure_logging`` captures them too.

Usage:
    from asa_service.logging_utils import log
    log.info(event="population_start", type="all")

All non-str key/value values are str()'d. Reserved keys: level, ts.
"""

from __future__ import annotations

import json
import logging
import os
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("LOG_LEVEL", "info").lower(), 20)
JSON_MODE = os.getenv("LOG_JSON", "0") in ("1", "true", "TRUE", "yes", "on")

_STDLIB_LEVELS = {"debug": logging.DEBUG, "info": logging.INFO, "warn": logging.WARNING, "error": logging.ERROR}


def set_level(name: str) -> None:
    global CURRENT_LEVEL
    CURRENT_LEVEL = LEVELS.get((name or "info").lower(), 20)


def set_json_mode(enabled: bool) -> None:
    global JSON_MODE
    JSON_MODE = bool(enabled)


def _format(level: str, **fields):
    if JSON_MODE:
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
    def __init__(self, name: str | None = None):
        self.name = name or "asa_service"
        self._logger = logging.getLogger(self.name)

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < CURRENT_LEVEL:
            return
        if "logger" not in fields:
            fields["logger"] = self.name
        self._logger.log(_STDLIB_LEVELS[lvl], _format(lvl, **fields))

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str):
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("asa_service")
