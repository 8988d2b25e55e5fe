from __future__ import annotations

from typing import Any

from django.http import QueryDict
from rest_framework.exceptions import ParseError
from rest_framework.parsers import BaseParser


class PlainTextParser(BaseParser):
    """Accept ``text/plain`` bodies such as a bare token or session id."""

    media_type = "text/plain"

    def parse(self, stream, media_type=None, parser_context=None):
        parser_context = parser_context or {}
        encoding = parser_context.get("encoding", "utf-8")
        try:
            return stream.read().decode(encoding).strip()
        except UnicodeDecodeError as exc:
            msg = f"Plain text parse error - {exc}"
            raise ParseError(msg) from exc


def read_scalar(data: Any, *keys: str) -> str | None:
    """Extract a single string value from a flexible request payload.

    Supported shapes:
    - plain text or a bare JSON string: ``"abc"``
    - JSON object / form data with any of ``keys``: ``{"sessionId": "abc"}``
    """
    if isinstance(data, str):
        return data.strip() or None
    if isinstance(data, QueryDict):
        data = data.dict()
    if isinstance(data, dict):
        for key in keys:
            value = data.get(key)
            if value is None or isinstance(value, (dict, list, bool)):
                continue
            text = str(value).strip()
            if text:
                return text
    return None
