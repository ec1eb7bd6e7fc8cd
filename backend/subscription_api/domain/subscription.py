"""
Subscription Domain Models

Domain entity, request/response DTOs and the month-year date contract
for the subscription bounded context.
"""

import re
from datetime import date, datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from subscription_api.infrastructure.exceptions import ValidationError


MONTH_YEAR_FORMAT = "%m-%Y"

_MONTH_YEAR_PATTERN = re.compile(r"\d{2}-\d{4}")


# =============================================================================
# Parsing Helpers
# =============================================================================

def parse_month_year(value: str, field: str) -> date:
    """
    Parse a strict "MM-YYYY" string into the first day of that month.

    Args:
        value: Wire value, e.g. "07-2025"
        field: Field name reported in the error details

    Returns:
        date pinned to day 1

    Raises:
        ValidationError: If the value is not exactly MM-YYYY or the month
            is out of range
    """
    if not isinstance(value, str) or not _MONTH_YEAR_PATTERN.fullmatch(value):
        raise ValidationError(
            f"Invalid {field} format, expected MM-YYYY",
            field=field,
            value=value,
        )
    try:
        return datetime.strptime(value, MONTH_YEAR_FORMAT).date()
    except ValueError as e:
        raise ValidationError(
            f"Invalid {field}: {e}",
            field=field,
            value=value,
            original_error=e,
        )


def format_month_year(value: date) -> str:
    """Render a date as "MM-YYYY"."""
    return value.strftime(MONTH_YEAR_FORMAT)


def parse_uuid(value: str, field: str) -> UUID:
    """
    Parse a UUID string.

    Raises:
        ValidationError: If the value is not a valid UUID
    """
    try:
        return UUID(str(value))
    except (ValueError, AttributeError, TypeError) as e:
        raise ValidationError(
            f"Invalid {field}: {value!r} is not a valid UUID",
            field=field,
            value=value,
            original_error=e,
        )


# =============================================================================
# Domain Entities
# =============================================================================

class Subscription(BaseModel):
    """Core subscription domain entity."""
    id: Optional[UUID] = None
    service_name: str
    price: int
    user_id: UUID
    start_date: date
    end_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class EndDateAction(str, Enum):
    """What a partial update does to the stored end date."""
    KEEP = "keep"
    CLEAR = "clear"
    SET = "set"


# =============================================================================
# Request/Response DTOs
# =============================================================================

class CreateSubscriptionRequest(BaseModel):
    """Request DTO for creating a subscription."""
    service_name: str = Field(..., min_length=1, description="Name of the paid service")
    price: int = Field(..., ge=1, description="Monthly price")
    user_id: str = Field(..., description="Owner's UUID")
    start_date: str = Field(..., description="Activation month, MM-YYYY")
    end_date: Optional[str] = Field(None, description="Last month, MM-YYYY")


class UpdateSubscriptionRequest(BaseModel):
    """
    Request DTO for a partial update.

    Omitted fields are left untouched. ``end_date`` is tri-state: omitted
    (or null) keeps the stored value, an empty string clears it, anything
    else must be a MM-YYYY month.
    """
    service_name: Optional[str] = Field(None, min_length=1)
    price: Optional[int] = Field(None, ge=1)
    end_date: Optional[str] = None

    @property
    def end_date_action(self) -> EndDateAction:
        if self.end_date is None:
            return EndDateAction.KEEP
        if self.end_date == "":
            return EndDateAction.CLEAR
        return EndDateAction.SET


class SummaryRequest(BaseModel):
    """Request DTO for the cost summary over a month window."""
    start_date: str = Field(..., description="Window start, MM-YYYY")
    end_date: str = Field(..., description="Window end, MM-YYYY")
    user_id: Optional[str] = Field(None, description="Restrict to one user")
    service_name: Optional[str] = Field(None, description="Restrict to one service")


class SubscriptionSummary(BaseModel):
    """Response DTO for the cost summary."""
    total_cost: int = Field(description="Sum of prices of matching subscriptions")


class SubscriptionResponse(BaseModel):
    """Subscription response model."""
    id: str
    service_name: str
    price: int
    user_id: str
    start_date: str
    end_date: Optional[str] = None
    created_at: str
    updated_at: str


class MessageResponse(BaseModel):
    """Plain acknowledgement for mutations without a body."""
    message: str
