"""Reminder engine - due-date, window and dedup logic for recurring obligations"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional, Protocol, Set

from obligation_reminders.domain.exceptions import StorageWriteError
from obligation_reminders.domain.messages import compose_message
from obligation_reminders.domain.models import (
    Obligation,
    ObligationKind,
    Priority,
    ReminderKey,
    ReminderRecord,
    SweepSummary,
)
from obligation_reminders.utils.date_utils import add_months_clamped, clamp_day, days_until

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReminderRule:
    """Per-kind reminder parameters"""

    window_days: int
    fires_when_overdue: bool
    notification_type: Callable[[int], str]
    entity_type: str
    action_url: str


REMINDER_RULES: Dict[ObligationKind, ReminderRule] = {
    ObligationKind.CREDIT_CARD: ReminderRule(
        window_days=5,
        fires_when_overdue=False,
        notification_type=lambda days: "card_payment_reminder",
        entity_type="credit_card",
        action_url="/cards",
    ),
    ObligationKind.FIXED_PAYMENT: ReminderRule(
        window_days=3,
        fires_when_overdue=False,
        notification_type=lambda days: "fixed_payment_reminder",
        entity_type="fixed_payment",
        action_url="/fixed-payments",
    ),
    ObligationKind.INSTALLMENT: ReminderRule(
        window_days=3,
        fires_when_overdue=False,
        notification_type=lambda days: "installment_reminder",
        entity_type="installment",
        action_url="/installments",
    ),
    ObligationKind.LOAN: ReminderRule(
        window_days=3,
        fires_when_overdue=True,
        notification_type=lambda days: "loan_overdue" if days < 0 else "loan_reminder",
        entity_type="loan",
        action_url="/loans",
    ),
}

PERIOD_KINDS = {ObligationKind.INSTALLMENT, ObligationKind.LOAN}


class ReminderStore(Protocol):
    """Storage operations the sweep depends on"""

    def list_active_obligations(self, kind: ObligationKind) -> List[Obligation]:
        ...

    def exists_reminder_today(
        self, user_id: str, obligation_id: str, notification_type: str, today: date
    ) -> bool:
        ...

    def insert_reminder(self, record: ReminderRecord) -> bool:
        ...


def is_eligible(obligation: Obligation) -> bool:
    """
    Skip conditions:
    - inactive obligations
    - credit cards with no minimum payment left (treated as settled)
    - installments/loans with every period paid
    """
    if not obligation.is_active:
        return False

    if obligation.kind == ObligationKind.CREDIT_CARD and (obligation.amount_due or 0) <= 0:
        return False

    if obligation.kind in PERIOD_KINDS:
        if obligation.total_periods is not None and obligation.paid_periods >= obligation.total_periods:
            return False

    return True


def next_due_date(obligation: Obligation, today: date) -> date:
    """
    Compute the next due date for an obligation relative to today.

    Anchor-day kinds: this month's anchor day, or next month's if it already
    passed. Period kinds: start_date advanced by paid_periods months.
    Short months clamp to their last day.
    """
    if obligation.kind in PERIOD_KINDS:
        if obligation.start_date is None:
            raise ValueError(f"{obligation.kind.value} {obligation.id} has no start date")

        due = add_months_clamped(obligation.start_date, obligation.paid_periods)
        if obligation.anchor_day:
            due = clamp_day(due.year, due.month, obligation.anchor_day)
        return due

    if not obligation.anchor_day:
        raise ValueError(f"{obligation.kind.value} {obligation.id} has no payment day")

    candidate = clamp_day(today.year, today.month, obligation.anchor_day)
    if candidate < today:
        next_month = add_months_clamped(date(today.year, today.month, 1), 1)
        candidate = clamp_day(next_month.year, next_month.month, obligation.anchor_day)
    return candidate


def in_window(kind: ObligationKind, days_until_due: int) -> bool:
    rule = REMINDER_RULES[kind]
    if days_until_due > rule.window_days:
        return False
    return days_until_due >= 0 or rule.fires_when_overdue


def priority_for(days_until_due: int) -> Priority:
    return Priority.HIGH if days_until_due <= 1 else Priority.MEDIUM


def evaluate_obligation(obligation: Obligation, today: date) -> Optional[ReminderRecord]:
    """Build the reminder an obligation needs today, or None"""
    if not is_eligible(obligation):
        logger.debug("Skipping ineligible obligation", extra={"obligation_id": obligation.id})
        return None

    due_date = next_due_date(obligation, today)
    remaining = days_until(due_date, today)
    if not in_window(obligation.kind, remaining):
        return None

    rule = REMINDER_RULES[obligation.kind]
    title, message = compose_message(obligation, remaining)

    return ReminderRecord(
        user_id=obligation.user_id,
        obligation_id=obligation.id,
        obligation_kind=obligation.kind,
        notification_type=rule.notification_type(remaining),
        days_until_due=remaining,
        due_date=due_date,
        priority=priority_for(remaining),
        title=title,
        message=message,
        action_url=rule.action_url,
        created_date=today,
    )


def run_reminder_sweep(
    today: date,
    obligations: Iterable[Obligation],
    existing_keys: Set[ReminderKey],
) -> List[ReminderRecord]:
    """
    Pure sweep: reminders due today that are not already in existing_keys.

    Keys emitted during this run are tracked too, so repeated obligations
    never yield two reminders for the same day.
    """
    seen = set(existing_keys)
    reminders = []

    for obligation in obligations:
        record = evaluate_obligation(obligation, today)
        if record is None or record.key in seen:
            continue
        seen.add(record.key)
        reminders.append(record)

    return reminders


def sweep_obligations(
    store: ReminderStore,
    kinds: Iterable[ObligationKind],
    today: date,
) -> SweepSummary:
    """
    Storage-backed sweep over the given obligation kinds.

    Every kind is listed before processing starts, so a read error aborts the
    sweep with nothing written. After that each obligation is isolated: a
    write failure is logged and counted and the sweep moves on.

    Raises:
        StorageReadError: Obligations could not be listed
    """
    summary = SweepSummary(kinds=list(kinds))
    obligations: List[Obligation] = []
    for kind in summary.kinds:
        found = store.list_active_obligations(kind)
        logger.info(f"Found {len(found)} active {kind.value} obligations", extra={"kind": kind.value})
        obligations.extend(found)

    for obligation in obligations:
        summary.obligations_checked += 1

        try:
            record = evaluate_obligation(obligation, today)
        except ValueError as e:
            logger.warning(f"Cannot schedule obligation: {e}", extra={"obligation_id": obligation.id})
            continue

        if record is None:
            continue

        try:
            if store.exists_reminder_today(
                record.user_id, record.obligation_id, record.notification_type, today
            ):
                summary.duplicates_skipped += 1
                continue

            if not store.insert_reminder(record):
                # Lost the race to an overlapping sweep
                summary.duplicates_skipped += 1
                continue

        except StorageWriteError as e:
            summary.write_failures += 1
            logger.error(
                f"Error creating reminder: {e}",
                extra={"obligation_id": obligation.id, "kind": obligation.kind.value},
            )
            continue

        summary.notifications_created += 1
        summary.created.append(record)
        logger.info(
            f"Created {record.notification_type} notification",
            extra={
                "obligation_id": obligation.id,
                "kind": obligation.kind.value,
                "days_until_due": record.days_until_due,
            },
        )

    return summary
