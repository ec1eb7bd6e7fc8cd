"""
Summary Routes

Aggregate cost of subscriptions over a month window.
"""

from fastapi import APIRouter

from subscription_api.domain.subscription import SubscriptionSummary, SummaryRequest
from subscription_api.infrastructure.db.dependencies import SubscriptionServiceDep


router = APIRouter()


@router.post("/summary", response_model=SubscriptionSummary)
async def get_summary(request: SummaryRequest, service: SubscriptionServiceDep):
    """
    Total price of subscriptions active at any point in the window.

    Optional ``user_id`` and ``service_name`` narrow the sum.
    """
    return await service.get_summary(request)
