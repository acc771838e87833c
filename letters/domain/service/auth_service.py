"""Student authentication domain service."""

from uuid import UUID

import logfire
from pydantic import ValidationError as PydanticValidationError

from letters.config import AuthSettings
from letters.domain.error import UnauthorizedError
from letters.domain.value import StudentId
from letters.util.jwt import JWTError, create_token, verify_token

from .base import Service


class StudentAuthenticator(Service):
    """Resolves a session token to the student it was issued for."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize authenticator.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def authenticate(self, token: str | None) -> StudentId:
        """Verify a session token.

        Args:
            token: JWT from the Authorization header or auth cookie

        Returns:
            The authenticated student's ID

        Raises:
            UnauthorizedError: If the token is missing, invalid or expired
        """
        if not token:
            raise UnauthorizedError("Not authenticated")

        with logfire.span("student_authenticator.authenticate"):
            try:
                payload = verify_token(token, self.auth_settings)
                student_id = StudentId(UUID(payload.student_id))
            except (JWTError, PydanticValidationError, ValueError) as e:
                logfire.warn("Student token rejected", error=str(e))
                raise UnauthorizedError("Invalid or expired session")

            logfire.debug("Student authenticated", student_id=str(student_id))
            return student_id

    def issue(self, student_id: StudentId, email: str) -> str:
        """Create a session token (used by scripts and tests)."""
        return create_token(str(student_id), email, self.auth_settings)
