# API Routes Module
from subscription_api.api.routes import (
    subscriptions,
    summary,
)

__all__ = [
    "subscriptions",
    "summary",
]
