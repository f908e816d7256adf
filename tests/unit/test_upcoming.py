"""Unit tests for the upcoming payments view"""

from datetime import date
from obligation_reminders.domain.models import ObligationKind
from obligation_reminders.domain.upcoming import list_upcoming_payments

TODAY = date(2024, 3, 10)


def test_upcoming_payments_sorted_soonest_first(make_obligation):
    obligations = [
        make_obligation(ObligationKind.FIXED_PAYMENT, id="rent", anchor_day=15),
        make_obligation(ObligationKind.CREDIT_CARD, id="card", anchor_day=11),
        make_obligation(ObligationKind.INSTALLMENT, id="phone"),  # due 03-12
    ]

    upcoming = list_upcoming_payments(obligations, TODAY, days=7)

    assert [p.obligation_id for p in upcoming] == ["card", "phone", "rent"]
    assert [p.days_until_due for p in upcoming] == [1, 2, 5]


def test_upcoming_payments_respects_lookahead(make_obligation):
    obligations = [make_obligation(ObligationKind.FIXED_PAYMENT, anchor_day=20)]

    assert list_upcoming_payments(obligations, TODAY, days=7) == []
    assert len(list_upcoming_payments(obligations, TODAY, days=10)) == 1


def test_upcoming_payments_includes_overdue_loans_only(make_obligation):
    obligations = [
        make_obligation(ObligationKind.LOAN, id="loan", start_date=date(2024, 1, 5)),
        make_obligation(ObligationKind.INSTALLMENT, id="inst", start_date=date(2024, 1, 5)),
    ]

    upcoming = list_upcoming_payments(obligations, TODAY)

    assert len(upcoming) == 1
    assert upcoming[0].obligation_id == "loan"
    assert upcoming[0].overdue is True
    assert upcoming[0].due_date == date(2024, 3, 5)


def test_upcoming_payments_skips_ineligible(make_obligation):
    obligations = [
        make_obligation(ObligationKind.FIXED_PAYMENT, anchor_day=12, is_active=False),
        make_obligation(ObligationKind.CREDIT_CARD, anchor_day=12, amount_due=0),
        make_obligation(ObligationKind.FIXED_PAYMENT, anchor_day=None),
    ]

    assert list_upcoming_payments(obligations, TODAY) == []
