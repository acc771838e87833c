"""Domain layer DI providers."""

from datetime import timedelta

from dishka import Scope, provide

from letters.config import AuthSettings, InvitationSettings, NotificationSettings
from letters.domain.repository import (
    ApplicationRepository,
    InvitationRepository,
    RecommenderProfileRepository,
)
from letters.domain.service import (
    ApplicationService,
    Clock,
    ConfirmationProvisioner,
    DuplicateGuard,
    InvitationStateMachine,
    NotificationDispatcher,
    NotificationService,
    PasswordHasher,
    ProfileValidator,
    StudentAuthenticator,
    TokenService,
)
from letters.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_student_authenticator(
        self, auth_settings: AuthSettings
    ) -> StudentAuthenticator:
        return StudentAuthenticator(auth_settings=auth_settings)

    @provide
    def get_application_service(
        self,
        application_repository: ApplicationRepository,
        invitation_repository: InvitationRepository,
        recommender_profile_repository: RecommenderProfileRepository,
    ) -> ApplicationService:
        return ApplicationService(
            application_repository=application_repository,
            invitation_repository=invitation_repository,
            recommender_profile_repository=recommender_profile_repository,
        )

    @provide
    def get_token_service(
        self,
        invitation_repository: InvitationRepository,
        invitation_settings: InvitationSettings,
    ) -> TokenService:
        return TokenService(
            invitation_repository=invitation_repository,
            token_bytes=invitation_settings.token_bytes,
        )

    @provide
    def get_state_machine(
        self,
        invitation_repository: InvitationRepository,
        clock: Clock,
        invitation_settings: InvitationSettings,
    ) -> InvitationStateMachine:
        """Provide invitation state machine with the configured expiry window."""
        return InvitationStateMachine(
            invitation_repository=invitation_repository,
            clock=clock,
            expiry_window=timedelta(days=invitation_settings.expiry_days),
        )

    @provide
    def get_duplicate_guard(
        self,
        invitation_repository: InvitationRepository,
        state_machine: InvitationStateMachine,
    ) -> DuplicateGuard:
        return DuplicateGuard(
            invitation_repository=invitation_repository, state_machine=state_machine
        )

    @provide
    def get_profile_validator(self) -> ProfileValidator:
        return ProfileValidator()

    @provide
    def get_password_hasher(
        self, invitation_settings: InvitationSettings
    ) -> PasswordHasher:
        return PasswordHasher(rounds=invitation_settings.bcrypt_rounds)

    @provide
    def get_confirmation_provisioner(
        self,
        token_service: TokenService,
        state_machine: InvitationStateMachine,
        profile_validator: ProfileValidator,
        password_hasher: PasswordHasher,
        application_service: ApplicationService,
        recommender_profile_repository: RecommenderProfileRepository,
        clock: Clock,
    ) -> ConfirmationProvisioner:
        """Provide confirmation provisioner."""
        return ConfirmationProvisioner(
            token_service=token_service,
            state_machine=state_machine,
            profile_validator=profile_validator,
            password_hasher=password_hasher,
            application_service=application_service,
            recommender_profile_repository=recommender_profile_repository,
            clock=clock,
        )

    @provide
    def get_notification_service(
        self,
        dispatcher: NotificationDispatcher,
        notification_settings: NotificationSettings,
    ) -> NotificationService:
        return NotificationService(
            dispatcher=dispatcher,
            timeout_seconds=notification_settings.timeout_seconds,
        )
