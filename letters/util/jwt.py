"""Student session tokens.

Sessions are HS256 JWTs carrying the student's ID and email. The platform's
auth service issues them; this service verifies them and, for scripts and
tests, can mint one with the same secret.
"""

from datetime import UTC, datetime, timedelta

import jwt
from pydantic import BaseModel

from letters.config import AuthSettings


class TokenPayload(BaseModel):
    """Claims of a session token."""

    student_id: str
    email: str
    exp: datetime


class JWTError(Exception):
    """Session token could not be trusted."""

    pass


def create_token(student_id: str, email: str, settings: AuthSettings) -> str:
    """Sign a session token valid for ``settings.jwt_expiry_days``."""
    claims = {
        "student_id": student_id,
        "email": email,
        "exp": datetime.now(UTC) + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check signature and expiry, then parse the claims.

    Raises:
        JWTError: If the token is expired, tampered with or malformed
    """
    try:
        claims = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Session expired")
    except jwt.InvalidTokenError as e:
        raise JWTError(f"Invalid session token: {e}")
    return TokenPayload.model_validate(claims)
