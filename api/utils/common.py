"""
Common utility functions used across multiple routes.
"""

from datetime import datetime
from typing import Optional

from fastapi import HTTPException

from api.schemas.result_schemas import ErrorKind, ServiceResult


def iso_format(dt: Optional[datetime]) -> Optional[str]:
    """Format datetime as ISO string with Z suffix."""
    if dt is None:
        return None
    return dt.isoformat() + "Z"


def display_name(email: str, preferences: Optional[dict] = None) -> str:
    """Get display name from user preferences or email."""
    prefs = preferences or {}
    name = None
    if isinstance(prefs, dict):
        name = prefs.get("name") or prefs.get("full_name")
    if isinstance(name, str) and name.strip():
        return name.strip()
    # fallback: email prefix
    return email.split("@", 1)[0]


def normalize_slug(slug: str) -> str:
    return (slug or "").strip().lower()


def strip_answer_key(questions: object) -> list[dict]:
    """Drop correctness flags so quiz content can be sent to the learner."""
    out: list[dict] = []
    if not isinstance(questions, list):
        return out
    for q in questions:
        if not isinstance(q, dict):
            continue
        options = q.get("options") if isinstance(q.get("options"), list) else []
        out.append(
            {
                "id": str(q.get("id", "")),
                "type": str(q.get("type", "")),
                "question": str(q.get("question") or q.get("prompt") or ""),
                "options": [
                    {"id": str(o.get("id", "")), "text": str(o.get("text", ""))}
                    for o in options
                    if isinstance(o, dict)
                ],
            }
        )
    return out


_STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.PERSISTENCE: 503,
}


class ServiceResultError(HTTPException):
    """HTTPException carrying the failed ServiceResult so the handler can return it as-is."""

    def __init__(self, result: ServiceResult):
        super().__init__(status_code=_STATUS_BY_KIND.get(result.error_kind, 500), detail=result.error)
        self.result = result


def unwrap(result: ServiceResult):
    """Return the data of a successful result or raise ServiceResultError."""
    if result.success:
        return result.data
    raise ServiceResultError(result)
