import logging

from fastapi import Header, HTTPException
from gazetteer.core.security import verify_token

logger = logging.getLogger("gazetteer.auth")

_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail, headers=_CHALLENGE)


def extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise _unauthorized("Not authenticated")

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise _unauthorized("Invalid Authorization header format")

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise _unauthorized("Authorization must be: Bearer <token>")
    return token


def get_current_subject(authorization: str | None = Header(default=None)) -> str:
    """Resolve the caller from the bearer credential; never touches the database."""
    token = extract_bearer_token(authorization)
    payload = verify_token(token)
    if not payload or not str(payload.get("sub") or "").strip():
        logger.debug("Rejected bearer token")
        raise _unauthorized("Invalid token")
    return str(payload["sub"])
