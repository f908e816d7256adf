"""Upcoming payments view for a single user's dashboard"""

from datetime import date
from typing import Iterable, List
from obligation_reminders.domain.models import Obligation, ObligationKind, UpcomingPayment
from obligation_reminders.domain.reminders import is_eligible, next_due_date
from obligation_reminders.utils.date_utils import days_until


def list_upcoming_payments(
    obligations: Iterable[Obligation],
    today: date,
    days: int = 7,
) -> List[UpcomingPayment]:
    """
    Collect payments due within the next `days` days, soonest first.

    Overdue loans are included as well since they stay outstanding until
    paid; other kinds simply roll over to their next due date.
    """
    upcoming = []

    for obligation in obligations:
        if not is_eligible(obligation):
            continue

        try:
            due_date = next_due_date(obligation, today)
        except ValueError:
            continue

        remaining = days_until(due_date, today)
        overdue = remaining < 0
        if remaining > days or (overdue and obligation.kind != ObligationKind.LOAN):
            continue

        upcoming.append(
            UpcomingPayment(
                obligation_id=obligation.id,
                kind=obligation.kind,
                name=obligation.name,
                amount=obligation.amount_due,
                currency=obligation.currency,
                due_date=due_date,
                days_until_due=remaining,
                overdue=overdue,
            )
        )

    return sorted(upcoming, key=lambda p: (p.days_until_due, p.name))
