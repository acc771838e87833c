"""Confirmation provisioner domain service."""

from typing import Any, Mapping
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from letters.domain.error import InvalidStateError
from letters.domain.model.invitation import Invitation
from letters.domain.model.recommender_profile import RecommenderProfile
from letters.domain.repository import RecommenderProfileRepository
from letters.domain.value import InvitationStatus, RecommenderProfileId

from .application_service import ApplicationService
from .base import Service
from .clock import Clock
from .password_hasher import PasswordHasher
from .profile_validator import ProfileValidator
from .state_machine import InvitationStateMachine
from .token_service import TokenService


class ConfirmationProvisioner(Service):
    """Turns an accepted invitation into a recommender profile.

    All writes happen in the caller's transaction: the invitation moves to
    ``confirmed`` first (a conditional update, so only one concurrent
    confirmation can win) and the profile is inserted after it. The caller
    commits once both succeed; any failure rolls both back.
    """

    def __init__(
        self,
        token_service: TokenService,
        state_machine: InvitationStateMachine,
        profile_validator: ProfileValidator,
        password_hasher: PasswordHasher,
        application_service: ApplicationService,
        recommender_profile_repository: RecommenderProfileRepository,
        clock: Clock,
    ) -> None:
        self.token_service = token_service
        self.state_machine = state_machine
        self.profile_validator = profile_validator
        self.password_hasher = password_hasher
        self.application_service = application_service
        self.recommender_profile_repository = recommender_profile_repository
        self.clock = clock

    async def confirm(
        self, raw_token: str, fields: Mapping[str, Any]
    ) -> tuple[RecommenderProfile, Invitation]:
        """Confirm an invitation and create the recommender's profile.

        Args:
            raw_token: Invitation token from the link
            fields: Submitted profile fields and password

        Returns:
            The new profile and the confirmed invitation

        Raises:
            NotFoundError: If the token is malformed, unknown or deleted
            InvalidStateError: If the invitation is not pending, is overdue,
                or another confirmation won the race
            ValidationError: If the fields fail validation
        """
        invitation = await self.token_service.validate(raw_token)

        with logfire.span(
            "confirmation_provisioner.confirm", invitation_id=str(invitation.id)
        ):
            status = invitation.effective_status(self.clock.now())
            if status != InvitationStatus.INVITED:
                logfire.warn(
                    "Confirmation of non-pending invitation",
                    invitation_id=str(invitation.id),
                    status=status.value,
                )
                raise InvalidStateError(
                    f"Invitation is {status.value} and cannot be confirmed",
                    current_status=status.value,
                )

            profile_fields = self.profile_validator.validate(fields)
            password_hash = await self.password_hasher.hash(profile_fields.password)
            application = await self.application_service.get(
                invitation.application_id
            )

            profile_id = RecommenderProfileId(uuid4())
            invitation = await self.state_machine.refresh(invitation)
            confirmed = await self.state_machine.confirm(invitation, profile_id)

            profile = RecommenderProfile(
                id=profile_id,
                invitation_id=confirmed.id,
                application_id=confirmed.application_id,
                email=confirmed.recommender_email,
                first_name=profile_fields.first_name,
                last_name=profile_fields.last_name,
                title=profile_fields.title,
                organization=profile_fields.organization,
                relationship_duration=profile_fields.relationship_duration,
                relationship_type=profile_fields.relationship_type,
                mobile_phone=profile_fields.mobile_phone,
                password_hash=password_hash,
                university_ids=application.university_ids,
                confirmed_at=confirmed.confirmed_at,
            )

            try:
                saved = await self.recommender_profile_repository.insert(profile)
            except IntegrityError:
                logfire.error(
                    "Profile already exists for invitation",
                    invitation_id=str(confirmed.id),
                )
                raise InvalidStateError(
                    "Invitation has already been confirmed",
                    current_status=InvitationStatus.CONFIRMED.value,
                )

            logfire.info(
                "Invitation confirmed",
                invitation_id=str(confirmed.id),
                profile_id=str(saved.id),
                universities=len(saved.university_ids),
            )
            return saved, confirmed
