"""
Subscription API Routes

CRUD and listing endpoints for subscriptions. Errors raised by the
service propagate to the application's exception handlers, which map
them to status codes.
"""

import logging
from typing import List

from fastapi import APIRouter, Query, status

from subscription_api.domain.services import DEFAULT_LIMIT, DEFAULT_PAGE
from subscription_api.domain.subscription import (
    CreateSubscriptionRequest,
    MessageResponse,
    Subscription,
    SubscriptionResponse,
    UpdateSubscriptionRequest,
    format_month_year,
)
from subscription_api.infrastructure.db.dependencies import SubscriptionServiceDep


logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Conversion
# =============================================================================

def _subscription_to_response(subscription: Subscription) -> SubscriptionResponse:
    """Render a domain entity with MM-YYYY dates and ISO timestamps."""
    return SubscriptionResponse(
        id=str(subscription.id),
        service_name=subscription.service_name,
        price=subscription.price,
        user_id=str(subscription.user_id),
        start_date=format_month_year(subscription.start_date),
        end_date=(
            format_month_year(subscription.end_date)
            if subscription.end_date is not None
            else None
        ),
        created_at=subscription.created_at.isoformat(),
        updated_at=subscription.updated_at.isoformat(),
    )


# =============================================================================
# Endpoints
# =============================================================================

@router.post(
    "/subscriptions",
    response_model=SubscriptionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_subscription(
    request: CreateSubscriptionRequest,
    service: SubscriptionServiceDep,
):
    """Create a subscription."""
    subscription = await service.create_subscription(request)
    return _subscription_to_response(subscription)


@router.get("/subscriptions/{id}", response_model=SubscriptionResponse)
async def get_subscription(id: str, service: SubscriptionServiceDep):
    """Get a subscription by ID."""
    subscription = await service.get_subscription(id)
    return _subscription_to_response(subscription)


@router.put("/subscriptions/{id}", response_model=MessageResponse)
async def update_subscription(
    id: str,
    request: UpdateSubscriptionRequest,
    service: SubscriptionServiceDep,
):
    """
    Partially update a subscription.

    Send ``"end_date": ""`` to clear the end date; omit it to keep it.
    """
    await service.update_subscription(id, request)
    return MessageResponse(message="Subscription updated successfully")


@router.delete("/subscriptions/{id}", response_model=MessageResponse)
async def delete_subscription(id: str, service: SubscriptionServiceDep):
    """Delete a subscription."""
    await service.delete_subscription(id)
    return MessageResponse(message="Subscription deleted successfully")


@router.get("/subscriptions", response_model=List[SubscriptionResponse])
async def list_subscriptions(
    service: SubscriptionServiceDep,
    page: int = Query(DEFAULT_PAGE, description="Page number, 1-based"),
    limit: int = Query(DEFAULT_LIMIT, description="Page size"),
):
    """List subscriptions, most recently created first."""
    subscriptions = await service.list_subscriptions(page, limit)
    logger.debug(f"Returning {len(subscriptions)} subscription(s) for page={page}")
    return [_subscription_to_response(s) for s in subscriptions]
