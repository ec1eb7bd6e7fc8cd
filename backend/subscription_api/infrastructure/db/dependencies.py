"""
Dependency Injection Providers for the Subscription API

Provides FastAPI dependencies for database sessions, the subscription
repository and the subscription service. Tests override these through
``app.dependency_overrides``.
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from subscription_api.domain.services import SubscriptionService
from subscription_api.infrastructure.db.database import get_session
from subscription_api.infrastructure.db.repositories import SubscriptionRepository


# Type alias for session dependency
SessionDep = Annotated[AsyncSession, Depends(get_session)]


async def get_subscription_repository(
    session: SessionDep,
) -> AsyncGenerator[SubscriptionRepository, None]:
    """
    Dependency provider for SubscriptionRepository.

    Usage:
        @router.get("/subscriptions/{id}")
        async def get_subscription(
            repo: SubscriptionRepository = Depends(get_subscription_repository)
        ):
            ...
    """
    yield SubscriptionRepository(session)


SubscriptionRepoDep = Annotated[
    SubscriptionRepository,
    Depends(get_subscription_repository)
]


def get_subscription_service(repository: SubscriptionRepoDep) -> SubscriptionService:
    """Dependency provider for SubscriptionService."""
    return SubscriptionService(repository)


SubscriptionServiceDep = Annotated[
    SubscriptionService,
    Depends(get_subscription_service)
]
