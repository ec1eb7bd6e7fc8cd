"""
SQLModel ORM Models for the Subscription API

Import models here to register them with SQLModel.metadata.
"""

from subscription_api.infrastructure.db.models.base import (
    BaseModel,
    TimestampMixin,
    UUIDMixin,
    utc_now,
)
from subscription_api.infrastructure.db.models.subscription import SubscriptionModel


__all__ = [
    # Base
    "BaseModel",
    "TimestampMixin",
    "UUIDMixin",
    "utc_now",
    # Subscription
    "SubscriptionModel",
]
