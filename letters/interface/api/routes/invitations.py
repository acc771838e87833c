"""Invitation routes.

Student routes live under the application they manage and need a session
token (``Authorization: Bearer`` or the ``auth_token`` cookie). Token routes
are public: holding the link is the credential.
"""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel

from letters.application.usecase.invitation import (
    ConfirmInvitationRequest,
    ConfirmInvitationResponse,
    ConfirmInvitationUseCase,
    DeleteInvitationRequest,
    DeleteInvitationResponse,
    DeleteInvitationUseCase,
    GetInvitationDetailsRequest,
    GetInvitationDetailsResponse,
    GetInvitationDetailsUseCase,
    ListInvitationsRequest,
    ListInvitationsResponse,
    ListInvitationsUseCase,
    ResendInvitationRequest,
    ResendInvitationResponse,
    ResendInvitationUseCase,
    SendInvitationRequest,
    SendInvitationResponse,
    SendInvitationUseCase,
)
from letters.domain.error import DomainError
from letters.domain.service import StudentAuthenticator
from letters.domain.value import StudentId
from letters.interface.error import ErrorCode, to_http_error

router = APIRouter(tags=["invitations"], route_class=DishkaRoute)


class SendInvitationAPIRequest(BaseModel):
    """API request for inviting a recommender."""

    # Plain str so a bad address gets INVALID_EMAIL rather than a 422
    recommender_email: str
    custom_message: str | None = None


class ResendInvitationAPIRequest(BaseModel):
    """API request for resending an invitation."""

    custom_message: str | None = None


class ConfirmInvitationAPIRequest(BaseModel):
    """API request for confirming an invitation.

    Every field is optional here; missing or invalid fields are reported
    together as a VALIDATION_ERROR with a per-field list.
    """

    first_name: str | None = None
    last_name: str | None = None
    title: str | None = None
    organization: str | None = None
    relationship_duration: str | None = None
    relationship_type: str | None = None
    mobile_phone: str | None = None
    password: str | None = None


def _authenticate(
    authenticator: StudentAuthenticator,
    authorization: str | None,
    auth_token: str | None,
) -> StudentId:
    """Resolve the calling student from the bearer header or auth cookie."""
    token = auth_token
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials:
            token = credentials.strip()
    try:
        return authenticator.authenticate(token)
    except DomainError as e:
        raise to_http_error(e)


@router.post(
    "/applications/{application_id}/invitations",
    response_model=SendInvitationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_invitation(
    application_id: UUID,
    request: SendInvitationAPIRequest,
    send_invitation_use_case: FromDishka[SendInvitationUseCase],
    authenticator: FromDishka[StudentAuthenticator],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> SendInvitationResponse:
    """Invite a recommender to an application.

    Raises:
        HTTPException: 401 unauthenticated, 404 unknown application,
            400 INVALID_EMAIL/VALIDATION_ERROR, 409 ALREADY_INVITED
    """
    student_id = _authenticate(authenticator, authorization, auth_token)

    try:
        return await send_invitation_use_case.execute(
            SendInvitationRequest(
                student_id=student_id,
                application_id=application_id,
                recommender_email=request.recommender_email,
                custom_message=request.custom_message,
            )
        )
    except (DomainError, TimeoutError) as e:
        raise to_http_error(e)


@router.get(
    "/applications/{application_id}/invitations",
    response_model=ListInvitationsResponse,
)
async def list_invitations(
    application_id: UUID,
    list_invitations_use_case: FromDishka[ListInvitationsUseCase],
    authenticator: FromDishka[StudentAuthenticator],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ListInvitationsResponse:
    """List every invitation of an application, newest first."""
    student_id = _authenticate(authenticator, authorization, auth_token)

    try:
        return await list_invitations_use_case.execute(
            ListInvitationsRequest(student_id=student_id, application_id=application_id)
        )
    except DomainError as e:
        raise to_http_error(e)


@router.get("/invitations/{token}", response_model=GetInvitationDetailsResponse)
async def get_invitation_details(
    token: str,
    get_invitation_details_use_case: FromDishka[GetInvitationDetailsUseCase],
) -> GetInvitationDetailsResponse:
    """Show an invitation to the recommender holding its link.

    Raises:
        HTTPException: 404 INVALID_TOKEN if unknown, deleted or expired
    """
    try:
        return await get_invitation_details_use_case.execute(
            GetInvitationDetailsRequest(token=token)
        )
    except DomainError as e:
        raise to_http_error(e, not_found_code=ErrorCode.INVALID_TOKEN)


@router.post(
    "/invitations/{token}/confirm",
    response_model=ConfirmInvitationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def confirm_invitation(
    token: str,
    request: ConfirmInvitationAPIRequest,
    confirm_invitation_use_case: FromDishka[ConfirmInvitationUseCase],
) -> ConfirmInvitationResponse:
    """Confirm an invitation and create the recommender profile.

    Raises:
        HTTPException: 404 INVALID_TOKEN, 400 VALIDATION_ERROR with field
            errors, 400 INVALID_STATE if already confirmed or expired
    """
    try:
        return await confirm_invitation_use_case.execute(
            ConfirmInvitationRequest(
                token=token, fields=request.model_dump(exclude_none=True)
            )
        )
    except (DomainError, TimeoutError) as e:
        raise to_http_error(e, not_found_code=ErrorCode.INVALID_TOKEN)


@router.post(
    "/applications/{application_id}/invitations/{invitation_id}/resend",
    response_model=ResendInvitationResponse,
)
async def resend_invitation(
    application_id: UUID,
    invitation_id: UUID,
    resend_invitation_use_case: FromDishka[ResendInvitationUseCase],
    authenticator: FromDishka[StudentAuthenticator],
    request: ResendInvitationAPIRequest | None = None,
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ResendInvitationResponse:
    """Resend a pending invitation and restart its confirmation window."""
    student_id = _authenticate(authenticator, authorization, auth_token)

    try:
        return await resend_invitation_use_case.execute(
            ResendInvitationRequest(
                student_id=student_id,
                application_id=application_id,
                invitation_id=invitation_id,
                custom_message=request.custom_message if request else None,
            )
        )
    except DomainError as e:
        raise to_http_error(e)


@router.delete(
    "/applications/{application_id}/invitations/{invitation_id}",
    response_model=DeleteInvitationResponse,
)
async def delete_invitation(
    application_id: UUID,
    invitation_id: UUID,
    delete_invitation_use_case: FromDishka[DeleteInvitationUseCase],
    authenticator: FromDishka[StudentAuthenticator],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> DeleteInvitationResponse:
    """Withdraw a pending invitation."""
    student_id = _authenticate(authenticator, authorization, auth_token)

    try:
        return await delete_invitation_use_case.execute(
            DeleteInvitationRequest(
                student_id=student_id,
                application_id=application_id,
                invitation_id=invitation_id,
            )
        )
    except DomainError as e:
        raise to_http_error(e)
