"""Fixtures shared by invitation use case tests."""

import pytest_asyncio

from letters.application.usecase.invitation import (
    SendInvitationRequest,
    SendInvitationUseCase,
)
from letters.domain.repository import ApplicationRepository
from tests.factories import make_application


@pytest_asyncio.fixture
async def invite(unit_env):
    """Create an application and invite a recommender onto it.

    Returns a coroutine function ``invite(email=..., application=None)``
    yielding ``(application, send_response)``.
    """
    application_repo = await unit_env.get(ApplicationRepository)
    use_case = await unit_env.get(SendInvitationUseCase)

    async def _invite(email: str = "prof@university.edu", application=None):
        if application is None:
            application = await application_repo.save(make_application())
        response = await use_case.execute(
            SendInvitationRequest(
                student_id=application.student_id,
                application_id=application.id,
                recommender_email=email,
                custom_message="Thank you for supporting my application",
            )
        )
        return application, response

    return _invite
