"""
Repository Layer for the Subscription API

Exports repository classes for dependency injection.
"""

from subscription_api.infrastructure.db.repositories.base_repository import (
    BaseRepository,
)
from subscription_api.infrastructure.db.repositories.subscription_repository import (
    SubscriptionRepository,
    build_summary_statement,
    build_update_statement,
)


__all__ = [
    # Base
    "BaseRepository",
    # Repositories
    "SubscriptionRepository",
    # Statement builders
    "build_summary_statement",
    "build_update_statement",
]
