"""Invitation token domain service."""

import secrets

import logfire
from pydantic import ValidationError as PydanticValidationError

from letters.domain.error import NotFoundError
from letters.domain.model.invitation import Invitation
from letters.domain.repository import InvitationRepository
from letters.domain.value import InvitationStatus, InvitationToken

from .base import Service


class TokenService(Service):
    """Issues invitation tokens and resolves them back to invitations.

    Tokens are random and opaque. A token that is malformed, unknown or
    belongs to a deleted invitation is reported as not found, so the caller
    cannot tell which of those it was.
    """

    def __init__(
        self, invitation_repository: InvitationRepository, token_bytes: int
    ) -> None:
        """Initialize token service.

        Args:
            invitation_repository: Invitation repository
            token_bytes: Bytes of randomness per token
        """
        self.invitation_repository = invitation_repository
        self.token_bytes = token_bytes

    def issue(self) -> InvitationToken:
        """Generate a fresh token.

        Returns:
            New URL-safe token
        """
        return InvitationToken(secrets.token_urlsafe(self.token_bytes))

    async def validate(self, raw_token: str) -> Invitation:
        """Resolve a token to its invitation.

        Args:
            raw_token: Token as received in the URL

        Returns:
            The invitation the token indexes, in whatever status it is

        Raises:
            NotFoundError: If the token is malformed, unknown or deleted
        """
        try:
            token = InvitationToken(raw_token)
        except PydanticValidationError:
            logfire.warn("Malformed invitation token", length=len(raw_token))
            raise NotFoundError("Invitation", "token")

        with logfire.span("token_service.validate", token=token.redacted):
            invitation = await self.invitation_repository.find_by_token(token)
            if invitation is None or invitation.status == InvitationStatus.DELETED:
                logfire.warn("Invitation token not found", token=token.redacted)
                raise NotFoundError("Invitation", "token")

            logfire.info(
                "Invitation token resolved",
                invitation_id=str(invitation.id),
                status=invitation.status.value,
            )
            return invitation
