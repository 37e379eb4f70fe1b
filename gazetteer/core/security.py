from __future__ import annotations

from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from gazetteer.core.config import settings

# Signed bearer token (stateless). Issuing tokens to users happens outside this service.
serializer = URLSafeTimedSerializer(settings.SECRET_KEY, salt="gazetteer_api")


def sign_token(subject: str) -> str:
    return serializer.dumps({"sub": str(subject)})


def verify_token(token: str, max_age_seconds: int | None = None) -> dict | None:
    try:
        payload = serializer.loads(token, max_age=max_age_seconds or settings.TOKEN_MAX_AGE_SECONDS)
    except (BadSignature, SignatureExpired):
        return None
    return payload if isinstance(payload, dict) else None
