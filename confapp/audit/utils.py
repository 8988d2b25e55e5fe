from __future__ import annotations

from .models import AuditLog


def get_remote_ip(request) -> str:
    """Best-effort remote client IP extraction.

    Prefers `X-Forwarded-For` (first hop) when present, otherwise falls back to
    `REMOTE_ADDR`.
    """
    meta = getattr(request, "META", {}) or {}
    xff = meta.get("HTTP_X_FORWARDED_FOR")
    if xff:
        # XFF format: client, proxy1, proxy2
        first = str(xff).split(",")[0].strip()
        if first:
            return first
    real_ip = meta.get("HTTP_X_REAL_IP")
    if real_ip:
        return str(real_ip).strip()
    ra = meta.get("REMOTE_ADDR")
    return str(ra).strip() if ra else ""


def log_action(
    action: str,
    *,
    actor: object | None = None,
    message: str = "",
    before: dict | list | None = None,
    after: dict | list | None = None,
    ip_address: str = "",
) -> AuditLog:
    label = getattr(actor, "label", None) or "system"
    return AuditLog.objects.create(
        action=action,
        actor=label,
        message=message,
        before=before,
        after=after,
        ip_address=ip_address,
    )
