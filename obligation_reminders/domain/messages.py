"""Human-readable reminder titles and messages"""

from decimal import Decimal
from typing import Optional, Tuple
from obligation_reminders.domain.models import Obligation, ObligationKind

LOAN_TYPE_LABELS = {
    "housing": "Housing loan",
    "personal": "Personal loan",
    "education": "Education loan",
    "vehicle": "Vehicle loan",
}


def format_amount(amount: Optional[Decimal], currency: str) -> str:
    return f"{Decimal(amount or 0):,.2f} {currency}"


def relative_day_phrase(days_until_due: int) -> str:
    """'today', 'tomorrow', 'in N days' or 'N days overdue'"""
    if days_until_due < 0:
        overdue = -days_until_due
        return "1 day overdue" if overdue == 1 else f"{overdue} days overdue"
    if days_until_due == 0:
        return "today"
    if days_until_due == 1:
        return "tomorrow"
    return f"in {days_until_due} days"


def _credit_card(obligation: Obligation, phrase: str) -> Tuple[str, str]:
    label = " ".join(part for part in (obligation.bank_name, obligation.name) if part)
    if obligation.last_four_digits:
        label += f" (****{obligation.last_four_digits})"
    amount_text = f"Minimum payment: {format_amount(obligation.amount_due, obligation.currency)}"
    if obligation.balance is not None:
        amount_text += f" (Total: {format_amount(obligation.balance, obligation.currency)})"
    return (
        "Credit Card Payment Reminder",
        f"{label} payment is due {phrase}! {amount_text}",
    )


def _fixed_payment(obligation: Obligation, phrase: str) -> Tuple[str, str]:
    name = f"{obligation.name} ({obligation.category})" if obligation.category else obligation.name
    return (
        "Fixed Payment Reminder",
        f"{name}: {format_amount(obligation.amount_due, obligation.currency)} is due {phrase}.",
    )


def _installment(obligation: Obligation, phrase: str) -> Tuple[str, str]:
    progress = ""
    if obligation.total_periods is not None:
        progress = f" ({obligation.paid_periods + 1}/{obligation.total_periods})"
    return (
        "Installment Payment Reminder",
        f"{obligation.name}: installment of "
        f"{format_amount(obligation.amount_due, obligation.currency)} is due {phrase}.{progress}",
    )


def _loan(obligation: Obligation, phrase: str, overdue: bool) -> Tuple[str, str]:
    label = LOAN_TYPE_LABELS.get(obligation.loan_type or "", "Loan")
    monthly = f"Monthly payment: {format_amount(obligation.amount_due, obligation.currency)}"
    if overdue:
        return (
            f"Loan Payment Overdue: {obligation.name}",
            f"{obligation.name} ({label}) payment is {phrase}. {monthly}",
        )
    return (
        f"Loan Payment Reminder: {obligation.name}",
        f"{obligation.name} ({label}) payment is due {phrase}. {monthly}",
    )


def compose_message(obligation: Obligation, days_until_due: int) -> Tuple[str, str]:
    """Return (title, message) for a reminder about the given obligation"""
    phrase = relative_day_phrase(days_until_due)

    if obligation.kind == ObligationKind.CREDIT_CARD:
        return _credit_card(obligation, phrase)
    elif obligation.kind == ObligationKind.FIXED_PAYMENT:
        return _fixed_payment(obligation, phrase)
    elif obligation.kind == ObligationKind.INSTALLMENT:
        return _installment(obligation, phrase)
    else:
        return _loan(obligation, phrase, overdue=days_until_due < 0)
