"""Invitation use cases."""

from letters.application.usecase.invitation.common import (
    InvitationItem,
    RecommenderSummary,
)
from letters.application.usecase.invitation.confirm_invitation import (
    ConfirmInvitationRequest,
    ConfirmInvitationResponse,
    ConfirmInvitationUseCase,
)
from letters.application.usecase.invitation.delete_invitation import (
    DeleteInvitationRequest,
    DeleteInvitationResponse,
    DeleteInvitationUseCase,
)
from letters.application.usecase.invitation.expire_invitations import (
    ExpireInvitationsRequest,
    ExpireInvitationsResponse,
    ExpireInvitationsUseCase,
)
from letters.application.usecase.invitation.get_invitation_details import (
    GetInvitationDetailsRequest,
    GetInvitationDetailsResponse,
    GetInvitationDetailsUseCase,
)
from letters.application.usecase.invitation.list_invitations import (
    ListInvitationsRequest,
    ListInvitationsResponse,
    ListInvitationsUseCase,
)
from letters.application.usecase.invitation.resend_invitation import (
    ResendInvitationRequest,
    ResendInvitationResponse,
    ResendInvitationUseCase,
)
from letters.application.usecase.invitation.send_invitation import (
    SendInvitationRequest,
    SendInvitationResponse,
    SendInvitationUseCase,
)

__all__ = [
    "ConfirmInvitationRequest",
    "ConfirmInvitationResponse",
    "ConfirmInvitationUseCase",
    "DeleteInvitationRequest",
    "DeleteInvitationResponse",
    "DeleteInvitationUseCase",
    "ExpireInvitationsRequest",
    "ExpireInvitationsResponse",
    "ExpireInvitationsUseCase",
    "GetInvitationDetailsRequest",
    "GetInvitationDetailsResponse",
    "GetInvitationDetailsUseCase",
    "InvitationItem",
    "ListInvitationsRequest",
    "ListInvitationsResponse",
    "ListInvitationsUseCase",
    "RecommenderSummary",
    "ResendInvitationRequest",
    "ResendInvitationResponse",
    "ResendInvitationUseCase",
    "SendInvitationRequest",
    "SendInvitationResponse",
    "SendInvitationUseCase",
]
