"""Application layer DI providers."""

from dishka import Scope, provide

from letters.application.usecase.invitation import (
    ConfirmInvitationUseCase,
    DeleteInvitationUseCase,
    ExpireInvitationsUseCase,
    GetInvitationDetailsUseCase,
    ListInvitationsUseCase,
    ResendInvitationUseCase,
    SendInvitationUseCase,
)
from letters.config import Settings
from letters.domain.repository import UnitOfWork
from letters.domain.service import (
    ApplicationService,
    Clock,
    ConfirmationProvisioner,
    DuplicateGuard,
    InvitationStateMachine,
    NotificationService,
    TokenService,
)
from letters.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production use case provider - concrete, no mocks needed.

    Use cases are REQUEST-scoped like the services they orchestrate.
    """

    scope = Scope.REQUEST

    @provide
    def get_send_invitation_use_case(
        self,
        application_service: ApplicationService,
        token_service: TokenService,
        state_machine: InvitationStateMachine,
        duplicate_guard: DuplicateGuard,
        notification_service: NotificationService,
        unit_of_work: UnitOfWork,
        clock: Clock,
        settings: Settings,
    ) -> SendInvitationUseCase:
        return SendInvitationUseCase(
            application_service=application_service,
            token_service=token_service,
            state_machine=state_machine,
            duplicate_guard=duplicate_guard,
            notification_service=notification_service,
            unit_of_work=unit_of_work,
            clock=clock,
            settings=settings,
        )

    @provide
    def get_list_invitations_use_case(
        self, application_service: ApplicationService, clock: Clock
    ) -> ListInvitationsUseCase:
        return ListInvitationsUseCase(
            application_service=application_service, clock=clock
        )

    @provide
    def get_invitation_details_use_case(
        self,
        token_service: TokenService,
        application_service: ApplicationService,
        clock: Clock,
    ) -> GetInvitationDetailsUseCase:
        return GetInvitationDetailsUseCase(
            token_service=token_service,
            application_service=application_service,
            clock=clock,
        )

    @provide
    def get_confirm_invitation_use_case(
        self,
        confirmation_provisioner: ConfirmationProvisioner,
        notification_service: NotificationService,
        unit_of_work: UnitOfWork,
        settings: Settings,
    ) -> ConfirmInvitationUseCase:
        return ConfirmInvitationUseCase(
            confirmation_provisioner=confirmation_provisioner,
            notification_service=notification_service,
            unit_of_work=unit_of_work,
            settings=settings,
        )

    @provide
    def get_resend_invitation_use_case(
        self,
        application_service: ApplicationService,
        state_machine: InvitationStateMachine,
        notification_service: NotificationService,
        unit_of_work: UnitOfWork,
        settings: Settings,
    ) -> ResendInvitationUseCase:
        return ResendInvitationUseCase(
            application_service=application_service,
            state_machine=state_machine,
            notification_service=notification_service,
            unit_of_work=unit_of_work,
            settings=settings,
        )

    @provide
    def get_delete_invitation_use_case(
        self,
        application_service: ApplicationService,
        state_machine: InvitationStateMachine,
        unit_of_work: UnitOfWork,
    ) -> DeleteInvitationUseCase:
        return DeleteInvitationUseCase(
            application_service=application_service,
            state_machine=state_machine,
            unit_of_work=unit_of_work,
        )

    @provide
    def get_expire_invitations_use_case(
        self, state_machine: InvitationStateMachine, unit_of_work: UnitOfWork
    ) -> ExpireInvitationsUseCase:
        return ExpireInvitationsUseCase(
            state_machine=state_machine, unit_of_work=unit_of_work
        )
