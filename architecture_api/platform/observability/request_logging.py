from __future__ import annotations

import contextvars
import time
import uuid
from typing import Any, Mapping, Sequence

from starlette.requests import Request


_request_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def new_request_id(prefix: str = "req") -> str:
    """Create a short, human-friendly request id for log correlation."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def set_request_id(request_id: str | None) -> None:
    _request_id_var.set(request_id)


def get_request_id() -> str | None:
    return _request_id_var.get()


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def summarize_for_log(value: Any, *, max_depth: int = 4, max_str: int = 400, max_list: int = 50) -> Any:
    """
    Summarize potentially-large payloads (context lists, entity dumps) for logging:
    - Long strings: keep len + preview
    - Large lists/dicts: truncate with counts
    """
    if max_depth <= 0:
        return {"__truncated__": True, "__type__": type(value).__name__}

    if value is None or isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, str):
        if len(value) <= max_str:
            return value
        return {"__type__": "str", "__len__": len(value), "__preview__": value[:max_str]}

    if isinstance(value, Mapping):
        items = list(value.items())
        out: dict[str, Any] = {
            str(k): summarize_for_log(v, max_depth=max_depth - 1, max_str=max_str, max_list=max_list)
            for k, v in items[:max_list]
        }
        if len(items) > max_list:
            out["__truncated_items__"] = len(items) - max_list
        return out

    if _is_sequence(value):
        seq = list(value)
        out_list = [
            summarize_for_log(x, max_depth=max_depth - 1, max_str=max_str, max_list=max_list)
            for x in seq[:max_list]
        ]
        if len(seq) > max_list:
            out_list.append({"__truncated_items__": len(seq) - max_list})
        return out_list

    return {"__type__": type(value).__name__, "__repr__": repr(value)[:max_str]}


def http_context(request: Request) -> dict[str, Any]:
    """
    Common request context for all API logs.
    NOTE: Do not include raw headers by default to avoid leaking secrets.
    """
    rid = get_request_id()
    client_host = getattr(getattr(request, "client", None), "host", None)
    return {
        "request_id": rid,
        "http": {
            "method": getattr(request, "method", None),
            "path": str(getattr(getattr(request, "url", None), "path", None)),
            "query": dict(getattr(request, "query_params", {}) or {}),
            "path_params": dict(getattr(request, "path_params", {}) or {}),
            "client_host": client_host,
        },
    }


class RequestTimer:
    """Small helper for measuring durations in middleware and routes."""

    def __init__(self) -> None:
        self._t0 = time.perf_counter()

    def ms(self) -> int:
        return int((time.perf_counter() - self._t0) * 1000)
