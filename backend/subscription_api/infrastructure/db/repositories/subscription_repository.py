"""
Subscription Repository

Data access layer for subscription persistence. Owns the two pieces of
dynamic SQL in the service: the partial UPDATE and the filtered cost
summary.
"""

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy import Table, func, insert, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select
from sqlalchemy.sql.dml import Update

from subscription_api.domain.subscription import (
    EndDateAction,
    Subscription,
    SummaryRequest,
    UpdateSubscriptionRequest,
    parse_month_year,
    parse_uuid,
)
from subscription_api.infrastructure.db.models import SubscriptionModel, utc_now
from subscription_api.infrastructure.db.query_builder import UpdateStatementBuilder
from subscription_api.infrastructure.db.repositories.base_repository import BaseRepository


subscriptions_table: Table = SubscriptionModel.__table__


# =============================================================================
# Statement Builders
# =============================================================================

def build_update_statement(
    subscription_id: UUID,
    update: UpdateSubscriptionRequest,
    now: datetime,
) -> Update:
    """
    Build the partial UPDATE for one subscription.

    updated_at is always set first, followed by service_name, price and
    end_date for whichever of them the request carries.

    Raises:
        ValidationError: If a non-empty end_date is not MM-YYYY
    """
    builder = UpdateStatementBuilder(subscriptions_table).set("updated_at", now)

    if update.service_name is not None:
        builder.set("service_name", update.service_name)

    if update.price is not None:
        builder.set("price", update.price)

    action = update.end_date_action
    if action is EndDateAction.CLEAR:
        builder.set("end_date", None)
    elif action is EndDateAction.SET:
        builder.set("end_date", parse_month_year(update.end_date, "end_date"))

    return builder.build(subscription_id)


def build_summary_statement(request: SummaryRequest) -> Select:
    """
    Build the cost summary query.

    A subscription counts when its active interval intersects the
    requested window; a NULL end_date is open-ended. user_id and
    service_name filters are added only when supplied.

    Raises:
        ValidationError: If a date is not MM-YYYY or user_id is not a UUID
    """
    window_start = parse_month_year(request.start_date, "start_date")
    window_end = parse_month_year(request.end_date, "end_date")

    t = subscriptions_table
    conditions = [
        t.c.start_date <= window_end,
        or_(t.c.end_date.is_(None), t.c.end_date >= window_start),
    ]

    if request.user_id is not None:
        conditions.append(t.c.user_id == parse_uuid(request.user_id, "user_id"))

    if request.service_name is not None:
        conditions.append(t.c.service_name == request.service_name)

    return select(func.coalesce(func.sum(t.c.price), 0)).where(*conditions)


# =============================================================================
# Repository
# =============================================================================

class SubscriptionRepository(BaseRepository[SubscriptionModel]):
    """
    Repository for subscription data access.

    Maps rows to the Subscription domain entity. Every method issues a
    single statement.
    """

    def __init__(
        self,
        session: AsyncSession,
        statement_timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(
            SubscriptionModel,
            session,
            statement_timeout=statement_timeout,
            logger=logger or logging.getLogger(__name__),
        )

    # =========================================================================
    # Query Methods
    # =========================================================================

    async def get_by_id(self, id: UUID) -> Subscription:
        """
        Get a subscription by ID.

        Raises:
            NotFoundError: If no subscription has this ID
            StoreError: If the query fails
        """
        model = await super().get_by_id(id)
        return self._to_domain(model)

    async def list(self, limit: int, offset: int) -> List[Subscription]:
        """
        Get one page of subscriptions, most recently created first.

        Args:
            limit: Page size
            offset: Rows to skip

        Returns:
            List of Subscription domain models (no total count)
        """
        stmt = (
            select(SubscriptionModel)
            .order_by(SubscriptionModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self._execute(stmt, "list")
        return [self._to_domain(model) for model in result.scalars().all()]

    async def get_summary(self, request: SummaryRequest) -> int:
        """
        Sum prices of subscriptions overlapping the requested window.

        Returns:
            Total cost, 0 when nothing matches
        """
        stmt = build_summary_statement(request)
        result = await self._execute(stmt, "summary")
        total = result.scalar_one()
        return int(total or 0)

    # =========================================================================
    # Command Methods
    # =========================================================================

    async def create(self, subscription: Subscription) -> Subscription:
        """
        Insert a new subscription.

        Any id or timestamps on the input are replaced: the row gets a
        fresh UUID and created_at == updated_at.

        Returns:
            The stored subscription
        """
        now = utc_now()
        stored = subscription.model_copy(
            update={"id": uuid4(), "created_at": now, "updated_at": now}
        )

        stmt = insert(subscriptions_table).values(
            id=stored.id,
            service_name=stored.service_name,
            price=stored.price,
            user_id=stored.user_id,
            start_date=stored.start_date,
            end_date=stored.end_date,
            created_at=stored.created_at,
            updated_at=stored.updated_at,
        )
        await self._execute(stmt, "insert", commit=True)

        self._logger.info(f"Created subscription {stored.id} for user {stored.user_id}")
        return stored

    async def update(self, id: UUID, update: UpdateSubscriptionRequest) -> None:
        """
        Apply a partial update.

        Only supplied fields change; updated_at always advances. Updating
        a missing ID affects no rows and is not an error.

        Raises:
            ValidationError: If end_date is malformed (nothing is executed)
            StoreError: If the statement fails
        """
        stmt = build_update_statement(id, update, utc_now())
        result = await self._execute(stmt, "update", commit=True)
        self._logger.info(f"Updated subscription {id} ({result.rowcount} row(s))")

    # =========================================================================
    # Mapping Methods
    # =========================================================================

    def _to_domain(self, model: SubscriptionModel) -> Subscription:
        """Convert database model to domain entity."""
        return Subscription.model_validate(model)
