"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import date
from decimal import Decimal
from typing import List, Optional
from obligation_reminders.domain.models import ObligationKind


class SweepRequest(BaseModel):
    """Optional body for POST /v1/reminders/sweep"""

    kinds: Optional[List[ObligationKind]] = Field(
        default=None, description="Obligation kinds to sweep (default: all)"
    )
    as_of: Optional[date] = Field(default=None, description="Calendar date to sweep for (default: today)")


class SweepResponse(BaseModel):
    """Summary returned by sweep endpoints"""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    obligations_checked: int = Field(alias="obligationsChecked")
    notifications_created: int = Field(alias="notificationsCreated")
    duplicates_skipped: int = Field(alias="duplicatesSkipped")
    write_failures: int = Field(alias="writeFailures")
    kinds: List[ObligationKind]


class NotificationItem(BaseModel):
    """Single reminder notification"""

    notification_id: str
    title: str
    message: str
    notification_type: str
    priority: Optional[str] = None
    related_entity_type: Optional[str] = None
    related_entity_id: Optional[str] = None
    action_url: Optional[str] = None
    is_read: bool
    created_date: date


class NotificationsResponse(BaseModel):
    """Response for GET /v1/notifications"""

    user_id: str
    notifications: List[NotificationItem]


class UpcomingPaymentItem(BaseModel):
    """Single upcoming or overdue payment"""

    obligation_id: str
    kind: ObligationKind
    name: str
    amount: Decimal
    currency: str
    due_date: date
    days_until_due: int
    overdue: bool


class UpcomingPaymentsResponse(BaseModel):
    """Response for GET /v1/obligations/upcoming"""

    user_id: str
    days: int
    total_amount: Decimal
    payments: List[UpcomingPaymentItem]
