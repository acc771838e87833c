"""Expire overdue invitations use case."""

import logfire
from pydantic import BaseModel

from letters.application.usecase.base import BaseUseCase
from letters.domain.repository import UnitOfWork
from letters.domain.service import InvitationStateMachine


class ExpireInvitationsRequest(BaseModel):
    """Sweep request (no parameters; time comes from the server clock)."""

    pass


class ExpireInvitationsResponse(BaseModel):
    """Sweep result."""

    expired_count: int


class ExpireInvitationsUseCase(BaseUseCase):
    """Periodic sweep that persists expiry for every overdue invitation."""

    def __init__(
        self, state_machine: InvitationStateMachine, unit_of_work: UnitOfWork
    ) -> None:
        self.state_machine = state_machine
        self.unit_of_work = unit_of_work

    async def execute(
        self, request: ExpireInvitationsRequest
    ) -> ExpireInvitationsResponse:
        with logfire.span("expire_invitations"):
            async with self.unit_of_work.rollback_on_error():
                count = await self.state_machine.sweep_expired()
                await self.unit_of_work.commit()
            return ExpireInvitationsResponse(expired_count=count)
