from __future__ import annotations

from typing import Any


def success(data: Any = None, message: str | None = None) -> dict:
    body: dict[str, Any] = {"status": "success"}
    if message:
        body["message"] = message
    body["data"] = data
    return body
