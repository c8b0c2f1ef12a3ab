from __future__ import annotations

import importlib
import importlib.util
import json
import os
import sys
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol

from architecture_api.platform.observability.request_logging import get_request_id


class _SmartLoggerLike(Protocol):
    @classmethod
    def log(
        cls,
        level: str,
        message: str,
        category: str | None = None,
        params: dict | None = None,
        max_inline_chars: int = 100,
    ) -> None: ...


_LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40, "CRITICAL": 50}


def _safe_setdefault_env(key: str, value: str) -> None:
    # Don't override user-provided settings.
    if os.environ.get(key) is None:
        os.environ[key] = value


def _load_smart_logger_from_file(py_file: Path) -> type[_SmartLoggerLike]:
    spec = importlib.util.spec_from_file_location("private_smart_logger", str(py_file))
    if spec is None or spec.loader is None:
        raise ImportError(f"Failed to create import spec from file: {py_file}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)  # type: ignore[call-arg]
    cls = getattr(module, "SmartLogger", None)
    if cls is None:
        raise ImportError(f"`SmartLogger` not found in {py_file}")
    if not hasattr(cls, "log") or not callable(getattr(cls, "log")):
        raise TypeError(f"`SmartLogger.log` missing or not callable in {py_file}")
    return cls


def _load_smart_logger_from_module(module_path: str) -> type[_SmartLoggerLike]:
    module = importlib.import_module(module_path)
    cls = getattr(module, "SmartLogger", None)
    if cls is None:
        raise ImportError(f"`SmartLogger` not found in module: {module_path}")
    if not hasattr(cls, "log") or not callable(getattr(cls, "log")):
        raise TypeError(f"`SmartLogger.log` missing or not callable in module: {module_path}")
    return cls


class _ConsoleLogger:
    """
    Single-line console logger used when no private implementation is configured.

    Format: ``<ts> <LEVEL> [category] message | {params}`` with params rendered
    as compact JSON and cut at ``max_inline_chars``.
    """

    @classmethod
    def log(
        cls,
        level: str,
        message: str,
        category: str | None = None,
        params: dict | None = None,
        max_inline_chars: int = 100,
    ) -> None:
        level = (level or "INFO").upper()
        min_level = (os.getenv("SMART_LOGGER_MIN_LEVEL") or "INFO").upper()
        if _LEVELS.get(level, 20) < _LEVELS.get(min_level, 20):
            return

        ts = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
        cat = f"[{category}] " if category else ""
        line = f"{ts} {level} {cat}{message}"

        payload = dict(params or {})
        rid = get_request_id()
        if rid and "request_id" not in payload:
            payload["request_id"] = rid
        if payload:
            rendered = json.dumps(payload, ensure_ascii=False, default=str)
            include_all = (os.getenv("SMART_LOGGER_INCLUDE_ALL_MIN_LEVEL") or "ERROR").upper()
            if _LEVELS.get(level, 20) < _LEVELS.get(include_all, 40) and len(rendered) > max_inline_chars:
                rendered = rendered[:max_inline_chars] + "...(truncated)"
            line = f"{line} | {rendered}"

        stream = sys.stderr if _LEVELS.get(level, 20) >= _LEVELS["WARNING"] else sys.stdout
        print(line, file=stream)


def _resolve_impl() -> tuple[type[_SmartLoggerLike], str]:
    """
    Returns (SmartLoggerClass, source_description)
    """
    private = (os.getenv("PRIVATE_LOGGER_PATH") or "").strip()
    if private:
        # 1) Try file path
        p = Path(private)
        if p.exists() and p.is_file():
            return _load_smart_logger_from_file(p), f"PRIVATE_LOGGER_PATH(file)={p}"
        # 2) Try module import path
        return _load_smart_logger_from_module(private), f"PRIVATE_LOGGER_PATH(module)={private}"

    _safe_setdefault_env("SMART_LOGGER_MIN_LEVEL", "INFO")
    _safe_setdefault_env("SMART_LOGGER_INCLUDE_ALL_MIN_LEVEL", "ERROR")
    return _ConsoleLogger, "console"


_IMPL, _IMPL_SOURCE = _resolve_impl()


class SmartLogger:
    """
    Project-wide logger entry point.

    Always import and use this class:
        from architecture_api.platform.observability.smart_logger import SmartLogger
        SmartLogger.log("INFO", "message", category="...", params={...})
    """

    impl_source: str = _IMPL_SOURCE

    @classmethod
    def log(
        cls,
        level: str,
        message: str,
        category: str | None = None,
        params: dict | None = None,
        max_inline_chars: int = 200,
    ) -> None:
        try:
            _IMPL.log(level, message, category=category, params=params, max_inline_chars=max_inline_chars)
        except Exception:
            # Last-ditch fallback: keep the app running and still emit something.
            err = traceback.format_exc()
            cat = f"[{category}] " if category else ""
            print(f"{level}: {cat}{message}")
            print(f"LOGGER_ERROR: {err}")
