"""Confirm invitation use case."""

import asyncio
from datetime import datetime
from typing import Any
from uuid import UUID

import logfire
from pydantic import BaseModel

from letters.application.usecase.base import BaseUseCase
from letters.config import Settings
from letters.domain.repository import UnitOfWork
from letters.domain.service import ConfirmationProvisioner, NotificationService
from letters.domain.value import NotificationKind


class ConfirmInvitationRequest(BaseModel):
    """Recommender's confirmation submission."""

    token: str
    fields: dict[str, Any]  # Profile fields and password, validated downstream


class ConfirmInvitationResponse(BaseModel):
    """Created recommender profile (credential excluded)."""

    profile_id: UUID
    invitation_id: UUID
    application_id: UUID
    email: str
    first_name: str
    last_name: str
    title: str
    organization: str
    relationship_duration: str
    relationship_type: str
    mobile_phone: str | None = None
    university_ids: list[UUID]
    confirmed_at: datetime


class ConfirmInvitationUseCase(BaseUseCase):
    """Use case for a recommender accepting an invitation.

    The profile and the status change commit together; the confirmation
    email is sent only after that commit.
    """

    def __init__(
        self,
        confirmation_provisioner: ConfirmationProvisioner,
        notification_service: NotificationService,
        unit_of_work: UnitOfWork,
        settings: Settings,
    ) -> None:
        self.confirmation_provisioner = confirmation_provisioner
        self.notification_service = notification_service
        self.unit_of_work = unit_of_work
        self.settings = settings

    async def execute(
        self, request: ConfirmInvitationRequest
    ) -> ConfirmInvitationResponse:
        """Execute confirmation flow.

        Args:
            request: Token and submitted fields

        Returns:
            The created profile

        Raises:
            NotFoundError: If the token is malformed, unknown or deleted
            ValidationError: If the fields fail validation
            InvalidStateError: If the invitation is not pending or is overdue
            TimeoutError: If the operation does not commit in time
        """
        with logfire.span("confirm_invitation"):
            async with (
                self.unit_of_work.rollback_on_error(),
                asyncio.timeout(self.settings.invitations.operation_timeout_seconds),
            ):
                profile, _ = await self.confirmation_provisioner.confirm(
                    request.token, request.fields
                )
                await self.unit_of_work.commit()

            await self.notification_service.notify(
                NotificationKind.CONFIRMATION,
                profile.email,
                {
                    "first_name": profile.first_name,
                    "full_name": profile.full_name,
                    "login_url": f"{self.settings.frontend_url}/login",
                    "university_count": len(profile.university_ids),
                },
            )

            return ConfirmInvitationResponse(
                profile_id=profile.id,
                invitation_id=profile.invitation_id,
                application_id=profile.application_id,
                email=profile.email.root,
                first_name=profile.first_name,
                last_name=profile.last_name,
                title=profile.title,
                organization=profile.organization,
                relationship_duration=profile.relationship_duration,
                relationship_type=profile.relationship_type,
                mobile_phone=profile.mobile_phone,
                university_ids=list(profile.university_ids),
                confirmed_at=profile.confirmed_at,
            )
