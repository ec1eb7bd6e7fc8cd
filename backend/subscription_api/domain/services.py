"""
Subscription Service

Business rules for the subscription lifecycle: identifier and date
validation, pagination defaults, and orchestration of the repository.
"""

import logging
from typing import List, Optional, Protocol
from uuid import UUID

from subscription_api.domain.subscription import (
    CreateSubscriptionRequest,
    Subscription,
    SubscriptionSummary,
    SummaryRequest,
    UpdateSubscriptionRequest,
    parse_month_year,
    parse_uuid,
)
from subscription_api.infrastructure.exceptions import ValidationError


DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


class SubscriptionStore(Protocol):
    """Persistence operations the service depends on."""

    async def create(self, subscription: Subscription) -> Subscription: ...

    async def get_by_id(self, id: UUID) -> Subscription: ...

    async def update(self, id: UUID, update: UpdateSubscriptionRequest) -> None: ...

    async def delete(self, id: UUID) -> None: ...

    async def list(self, limit: int, offset: int) -> List[Subscription]: ...

    async def get_summary(self, request: SummaryRequest) -> int: ...


class SubscriptionService:
    """
    Service for managing subscriptions.

    Handles:
    - Subscription creation with UUID and MM-YYYY validation
    - Retrieval, partial update and deletion by ID
    - Paginated listing with defaults
    - Cost summary over a month window

    Errors raised by the repository are logged and re-raised unchanged.
    """

    def __init__(
        self,
        repository: SubscriptionStore,
        logger: Optional[logging.Logger] = None,
    ):
        self._repository = repository
        self._logger = logger or logging.getLogger(__name__)

    async def create_subscription(
        self,
        request: CreateSubscriptionRequest,
    ) -> Subscription:
        """
        Create a new subscription.

        Args:
            request: Wire-level creation data

        Returns:
            The stored subscription with server-assigned id and timestamps

        Raises:
            ValidationError: If user_id is not a UUID or a date is not MM-YYYY
            StoreError: If the insert fails
        """
        self._logger.info(
            f"Creating subscription service_name={request.service_name!r} "
            f"user_id={request.user_id} price={request.price}"
        )

        try:
            user_id = parse_uuid(request.user_id, "user_id")
            start_date = parse_month_year(request.start_date, "start_date")
            end_date = (
                parse_month_year(request.end_date, "end_date")
                if request.end_date is not None
                else None
            )
        except ValidationError as e:
            self._logger.error(f"create_subscription rejected: {e}")
            raise

        subscription = Subscription(
            service_name=request.service_name,
            price=request.price,
            user_id=user_id,
            start_date=start_date,
            end_date=end_date,
        )

        try:
            created = await self._repository.create(subscription)
        except Exception as e:
            self._logger.error(f"Failed to create subscription for user {user_id}: {e}")
            raise

        self._logger.info(f"Subscription {created.id} created")
        return created

    async def get_subscription(self, id: str) -> Subscription:
        """
        Retrieve a subscription by ID.

        Raises:
            ValidationError: If id is not a UUID
            NotFoundError: If no subscription has this ID
            StoreError: If the query fails
        """
        subscription_id = self._parse_id(id, "get_subscription")

        try:
            return await self._repository.get_by_id(subscription_id)
        except Exception as e:
            self._logger.warning(f"get_subscription failed for {subscription_id}: {e}")
            raise

    async def update_subscription(
        self,
        id: str,
        request: UpdateSubscriptionRequest,
    ) -> None:
        """
        Apply a partial update.

        The request is handed to the repository as-is; the end_date value
        is interpreted there.

        Raises:
            ValidationError: If id is not a UUID or end_date is malformed
            StoreError: If the update fails
        """
        subscription_id = self._parse_id(id, "update_subscription")

        self._logger.info(
            f"Updating subscription {subscription_id} "
            f"fields={sorted(request.model_dump(exclude_none=True))} "
            f"end_date_action={request.end_date_action.value}"
        )

        try:
            await self._repository.update(subscription_id, request)
        except Exception as e:
            self._logger.error(f"Failed to update subscription {subscription_id}: {e}")
            raise

    async def delete_subscription(self, id: str) -> None:
        """
        Delete a subscription.

        Raises:
            ValidationError: If id is not a UUID
            StoreError: If the delete fails
        """
        subscription_id = self._parse_id(id, "delete_subscription")

        try:
            await self._repository.delete(subscription_id)
        except Exception as e:
            self._logger.error(f"Failed to delete subscription {subscription_id}: {e}")
            raise

        self._logger.info(f"Subscription {subscription_id} deleted")

    async def list_subscriptions(self, page: int, limit: int) -> List[Subscription]:
        """
        List subscriptions, newest first.

        Non-positive page falls back to 1 and non-positive limit to 10.
        """
        if limit <= 0:
            limit = DEFAULT_LIMIT
        if page <= 0:
            page = DEFAULT_PAGE
        offset = (page - 1) * limit

        self._logger.debug(f"Listing subscriptions limit={limit} offset={offset}")

        try:
            subscriptions = await self._repository.list(limit, offset)
        except Exception as e:
            self._logger.error(f"Failed to list subscriptions page={page} limit={limit}: {e}")
            raise

        self._logger.info(f"Listed {len(subscriptions)} subscription(s) page={page} limit={limit}")
        return subscriptions

    async def get_summary(self, request: SummaryRequest) -> SubscriptionSummary:
        """
        Total cost of subscriptions active in the requested window.

        Raises:
            ValidationError: If dates or the user_id filter are malformed
            StoreError: If the query fails
        """
        self._logger.info(
            f"Summary window {request.start_date}..{request.end_date} "
            f"user_id={request.user_id} service_name={request.service_name!r}"
        )

        try:
            total_cost = await self._repository.get_summary(request)
        except Exception as e:
            self._logger.error(f"Failed to compute summary: {e}")
            raise

        return SubscriptionSummary(total_cost=total_cost)

    def _parse_id(self, id: str, operation: str) -> UUID:
        """Parse a subscription ID, logging the rejection."""
        try:
            return parse_uuid(id, "id")
        except ValidationError as e:
            self._logger.error(f"{operation} rejected: {e}")
            raise
