"""
Subscription Database Model

SQLModel table for subscription data persistence.
"""

from datetime import date
from typing import Optional
from uuid import UUID

from sqlmodel import Field

from subscription_api.infrastructure.db.models.base import BaseModel


class SubscriptionModel(BaseModel, table=True):
    """
    Subscription table.

    Maps to the 'subscriptions' table. Dates are stored as the first day
    of their month; a NULL end_date means the subscription is ongoing.
    """

    __tablename__ = "subscriptions"

    service_name: str = Field(nullable=False, index=True)
    price: int = Field(nullable=False)
    user_id: UUID = Field(nullable=False, index=True)

    start_date: date = Field(nullable=False)
    end_date: Optional[date] = Field(default=None, nullable=True)
