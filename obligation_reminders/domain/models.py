"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List, NamedTuple, Optional


class ObligationKind(str, Enum):
    """Recurring obligation types tracked by the reminder engine"""

    CREDIT_CARD = "credit_card"
    FIXED_PAYMENT = "fixed_payment"
    INSTALLMENT = "installment"
    LOAN = "loan"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"


@dataclass
class Obligation:
    """
    A recurring financial commitment with a periodic due date.

    Anchor-day kinds (credit card, fixed payment) recur on anchor_day each
    month. Period kinds (installment, loan) are due start_date + paid_periods
    months; loans may also carry an explicit anchor_day (payment day).
    """

    id: str
    user_id: str
    kind: ObligationKind
    name: str
    amount_due: Decimal
    currency: str
    is_active: bool = True
    anchor_day: Optional[int] = None
    start_date: Optional[date] = None
    paid_periods: int = 0
    total_periods: Optional[int] = None

    # Display-only details used in reminder messages
    category: Optional[str] = None
    bank_name: Optional[str] = None
    last_four_digits: Optional[str] = None
    balance: Optional[Decimal] = None
    loan_type: Optional[str] = None


class ReminderKey(NamedTuple):
    """Dedup key: at most one reminder per obligation, type and calendar day"""

    user_id: str
    obligation_id: str
    notification_type: str
    created_date: date


@dataclass
class ReminderRecord:
    """Notification emitted for an upcoming or overdue obligation"""

    user_id: str
    obligation_id: str
    obligation_kind: ObligationKind
    notification_type: str
    days_until_due: int
    due_date: date
    priority: Priority
    title: str
    message: str
    action_url: str
    created_date: date

    @property
    def key(self) -> ReminderKey:
        return ReminderKey(
            self.user_id,
            self.obligation_id,
            self.notification_type,
            self.created_date,
        )


@dataclass
class SweepSummary:
    """Outcome counts of a single reminder sweep"""

    kinds: List[ObligationKind] = field(default_factory=list)
    obligations_checked: int = 0
    notifications_created: int = 0
    duplicates_skipped: int = 0
    write_failures: int = 0
    created: List[ReminderRecord] = field(default_factory=list)


@dataclass
class UpcomingPayment:
    """Single entry in a user's upcoming payments view"""

    obligation_id: str
    kind: ObligationKind
    name: str
    amount: Decimal
    currency: str
    due_date: date
    days_until_due: int
    overdue: bool
