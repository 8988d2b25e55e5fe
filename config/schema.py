"""drf-spectacular post-processing hooks.

The API router is mounted twice (``/api/v1/`` and the bare legacy paths), so
the raw schema lists every operation twice. These hooks publish only the
versioned copy and group operations by feature in Swagger UI.
"""

from __future__ import annotations

from typing import Any

VERSIONED_PREFIX = "/api/v1/"

_OPERATION_KEYS = {"get", "post", "put", "patch", "delete", "options", "head"}

# (path prefix, tag, tag description); first match wins
PATTERN_TAGS = [
    ("/api/v1/users", "Attendees", "App installation registration"),
    ("/api/v1/all", "Conference", "Launch payload for the mobile app"),
    ("/api/v1/sessionizeSync", "Conference", "Launch payload for the mobile app"),
    ("/api/v1/favorites", "Favorites", "Sessions bookmarked by an attendee"),
    ("/api/v1/votes", "Votes", "Session ratings, open from session start"),
    ("/api/v1/time", "Time", "Demo clock used by the vote gate"),
    ("/api/v1/live", "Live", "Per-room live streams"),
    ("/api/v1/feed", "Feed", "Cached social feed"),
    ("/api/v1/audit", "Audit", "Operator action log"),
]


def assign_group_tag(path: str) -> str | None:
    for prefix, tag, _ in PATTERN_TAGS:
        if path.startswith(prefix):
            return tag
    return None


def group_tags(result: dict[str, Any], **kwargs: Any) -> dict[str, Any]:
    paths = result.get("paths", {})
    result["paths"] = {
        path: item for path, item in paths.items() if path.startswith(VERSIONED_PREFIX)
    }

    for path, path_item in result["paths"].items():
        tag = assign_group_tag(path)
        if tag is None:
            continue
        for key, operation in path_item.items():
            if key.lower() in _OPERATION_KEYS and isinstance(operation, dict):
                operation["tags"] = [tag]

    declared = {t.get("name") for t in result.get("tags", [])}
    tags = result.setdefault("tags", [])
    for _, tag, description in PATTERN_TAGS:
        if tag not in declared:
            tags.append({"name": tag, "description": description})
            declared.add(tag)
    return result
