"""GET /v1/obligations/upcoming - Payments due soon for a user"""

from datetime import date
from decimal import Decimal
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from obligation_reminders.api.dependencies import get_today
from obligation_reminders.api.v1.schemas import UpcomingPaymentsResponse, UpcomingPaymentItem
from obligation_reminders.infrastructure.database.session import get_db
from obligation_reminders.infrastructure.database.repositories import ObligationRepository
from obligation_reminders.domain.exceptions import StorageReadError
from obligation_reminders.domain.upcoming import list_upcoming_payments

router = APIRouter()


@router.get("/obligations/upcoming", response_model=UpcomingPaymentsResponse)
def get_upcoming_payments(
    user_id: str = Query(..., description="User identifier"),
    days: int = Query(7, ge=0, le=60, description="Lookahead in days"),
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    """List a user's payments due within the lookahead, plus overdue loans"""
    try:
        obligations = ObligationRepository(db).list_for_user(user_id)
    except StorageReadError:
        raise HTTPException(status_code=503, detail="Obligation storage unavailable")

    upcoming = list_upcoming_payments(obligations, today, days=days)

    return UpcomingPaymentsResponse(
        user_id=user_id,
        days=days,
        total_amount=sum((p.amount for p in upcoming), Decimal("0")),
        payments=[
            UpcomingPaymentItem(
                obligation_id=p.obligation_id,
                kind=p.kind,
                name=p.name,
                amount=p.amount,
                currency=p.currency,
                due_date=p.due_date,
                days_until_due=p.days_until_due,
                overdue=p.overdue,
            )
            for p in upcoming
        ],
    )
