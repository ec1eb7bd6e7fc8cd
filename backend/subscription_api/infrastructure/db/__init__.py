"""
Database Infrastructure Package for the Subscription API

Exports database utilities and dependency providers.
"""

from subscription_api.infrastructure.db.database import (
    DatabaseManager,
    get_db_manager,
    get_session,
    init_db,
    close_db,
)

from subscription_api.infrastructure.db.dependencies import (
    SessionDep,
    get_subscription_repository,
    get_subscription_service,
    SubscriptionRepoDep,
    SubscriptionServiceDep,
)


__all__ = [
    # Database management
    "DatabaseManager",
    "get_db_manager",
    "get_session",
    "init_db",
    "close_db",
    # Dependencies
    "SessionDep",
    "get_subscription_repository",
    "get_subscription_service",
    "SubscriptionRepoDep",
    "SubscriptionServiceDep",
]
