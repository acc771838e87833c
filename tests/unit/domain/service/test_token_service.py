"""Unit tests for TokenService."""

from uuid import uuid4

import pytest

from letters.domain.error import NotFoundError
from letters.domain.repository import InvitationRepository
from letters.domain.service import InvitationStateMachine, TokenService
from letters.domain.value import ApplicationId, InvitationStatus, RecommenderEmail
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestTokenService:
    """Tests for TokenService."""

    @pytest.mark.asyncio
    async def test_issue_produces_distinct_url_safe_tokens(self, unit_env):
        """Should issue unguessable, URL-safe, unique tokens."""
        # Arrange
        token_service = await unit_env.get(TokenService)

        # Act
        tokens = {token_service.issue().root for _ in range(50)}

        # Assert
        assert len(tokens) == 50
        for token in tokens:
            assert len(token) >= 43
            assert all(c.isalnum() or c in "-_" for c in token)

    @pytest.mark.asyncio
    async def test_validate_resolves_token(self, unit_env):
        """Should return the invitation a token indexes."""
        # Arrange
        token_service = await unit_env.get(TokenService)
        state_machine = await unit_env.get(InvitationStateMachine)
        invitation_repo = await unit_env.get(InvitationRepository)
        invitation = await invitation_repo.insert(
            state_machine.open(
                application_id=ApplicationId(uuid4()),
                email=RecommenderEmail("prof@university.edu"),
                token=token_service.issue(),
                custom_message=None,
            )
        )

        # Act
        resolved = await token_service.validate(invitation.token.root)

        # Assert
        assert resolved.id == invitation.id

    @pytest.mark.asyncio
    async def test_validate_unknown_token(self, unit_env):
        """Should report an unknown token as not found."""
        # Arrange
        token_service = await unit_env.get(TokenService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await token_service.validate(token_service.issue().root)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["", "short", "has spaces in it!!", "x" * 300])
    async def test_validate_malformed_token(self, unit_env, raw):
        """Should report a malformed token as not found."""
        # Arrange
        token_service = await unit_env.get(TokenService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await token_service.validate(raw)

    @pytest.mark.asyncio
    async def test_validate_deleted_invitation(self, unit_env):
        """Should stop resolving a token once its invitation is deleted."""
        # Arrange
        token_service = await unit_env.get(TokenService)
        state_machine = await unit_env.get(InvitationStateMachine)
        invitation_repo = await unit_env.get(InvitationRepository)
        invitation = await invitation_repo.insert(
            state_machine.open(
                application_id=ApplicationId(uuid4()),
                email=RecommenderEmail("prof@university.edu"),
                token=token_service.issue(),
                custom_message=None,
            )
        )
        deleted = await state_machine.delete(invitation)
        assert deleted.status == InvitationStatus.DELETED

        # Act & Assert
        with pytest.raises(NotFoundError):
            await token_service.validate(invitation.token.root)
