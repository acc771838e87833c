"""Domain services."""

from .application_service import ApplicationService
from .auth_service import StudentAuthenticator
from .base import Service
from .clock import Clock, FixedClock, SystemClock
from .confirmation_provisioner import ConfirmationProvisioner
from .duplicate_guard import DuplicateGuard
from .notification_service import NotificationDispatcher, NotificationService
from .password_hasher import PasswordHasher
from .profile_validator import ProfileValidator, ValidatedProfile
from .state_machine import InvitationStateMachine
from .token_service import TokenService

__all__ = [
    "ApplicationService",
    "Clock",
    "ConfirmationProvisioner",
    "DuplicateGuard",
    "FixedClock",
    "InvitationStateMachine",
    "NotificationDispatcher",
    "NotificationService",
    "PasswordHasher",
    "ProfileValidator",
    "Service",
    "StudentAuthenticator",
    "SystemClock",
    "TokenService",
    "ValidatedProfile",
]
