"""Data access layer for obligations and reminder notifications"""

import uuid
from datetime import date
from decimal import Decimal
from typing import List
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from obligation_reminders.infrastructure.database.models import (
    CreditCard,
    FixedPayment,
    Installment,
    Loan,
    Notification,
)
from obligation_reminders.domain.exceptions import StorageReadError, StorageWriteError
from obligation_reminders.domain.models import Obligation, ObligationKind, ReminderRecord
from obligation_reminders.domain.reminders import REMINDER_RULES


def _card_to_obligation(card: CreditCard) -> Obligation:
    return Obligation(
        id=str(card.id),
        user_id=card.user_id,
        kind=ObligationKind.CREDIT_CARD,
        name=card.name,
        amount_due=Decimal(card.minimum_payment or 0),
        currency=card.currency,
        anchor_day=card.due_date,
        bank_name=card.bank_name,
        last_four_digits=card.last_four_digits,
        balance=Decimal(card.balance or 0),
    )


def _fixed_payment_to_obligation(payment: FixedPayment) -> Obligation:
    return Obligation(
        id=str(payment.id),
        user_id=payment.user_id,
        kind=ObligationKind.FIXED_PAYMENT,
        name=payment.name,
        amount_due=Decimal(payment.amount),
        currency=payment.currency,
        is_active=bool(payment.is_active),
        anchor_day=payment.payment_day,
        category=payment.category,
    )


def _installment_to_obligation(installment: Installment) -> Obligation:
    return Obligation(
        id=str(installment.id),
        user_id=installment.user_id,
        kind=ObligationKind.INSTALLMENT,
        name=installment.name,
        amount_due=Decimal(installment.monthly_amount),
        currency=installment.currency,
        is_active=bool(installment.is_active),
        start_date=installment.start_date,
        paid_periods=installment.paid_months,
        total_periods=installment.total_months,
        category=installment.category,
    )


def _loan_to_obligation(loan: Loan) -> Obligation:
    return Obligation(
        id=str(loan.id),
        user_id=loan.user_id,
        kind=ObligationKind.LOAN,
        name=loan.name,
        amount_due=Decimal(loan.monthly_payment),
        currency=loan.currency,
        is_active=bool(loan.is_active),
        anchor_day=loan.payment_day,
        start_date=loan.start_date,
        paid_periods=loan.paid_months,
        total_periods=loan.total_months,
        bank_name=loan.bank_name,
        loan_type=loan.loan_type,
    )


# kind -> (ORM model, mapper); credit cards have no is_active column
_OBLIGATION_TABLES = {
    ObligationKind.CREDIT_CARD: (CreditCard, _card_to_obligation),
    ObligationKind.FIXED_PAYMENT: (FixedPayment, _fixed_payment_to_obligation),
    ObligationKind.INSTALLMENT: (Installment, _installment_to_obligation),
    ObligationKind.LOAN: (Loan, _loan_to_obligation),
}


class ObligationRepository:
    """Read-only repository over the four obligation tables"""

    def __init__(self, db: Session):
        self.db = db

    def list_active_obligations(self, kind: ObligationKind) -> List[Obligation]:
        """Fetch every active obligation of one kind across all users"""
        model, to_obligation = _OBLIGATION_TABLES[kind]
        query = self.db.query(model)
        if hasattr(model, "is_active"):
            query = query.filter(model.is_active.is_(True))

        try:
            return [to_obligation(row) for row in query.all()]
        except SQLAlchemyError as e:
            raise StorageReadError(f"Failed to list {kind.value} obligations: {e}") from e

    def list_for_user(self, user_id: str) -> List[Obligation]:
        """Fetch all obligations (any state) owned by a user"""
        obligations = []
        try:
            for model, to_obligation in _OBLIGATION_TABLES.values():
                rows = self.db.query(model).filter(model.user_id == user_id).all()
                obligations.extend(to_obligation(row) for row in rows)
        except SQLAlchemyError as e:
            raise StorageReadError(f"Failed to list obligations for user: {e}") from e
        return obligations


def _entity_id(obligation_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(obligation_id)
    except ValueError as e:
        raise StorageWriteError(f"Invalid obligation id: {obligation_id!r}") from e


class NotificationRepository:
    """Repository for reminder notifications"""

    def __init__(self, db: Session):
        self.db = db

    def exists_reminder_today(
        self,
        user_id: str,
        obligation_id: str,
        notification_type: str,
        today: date,
    ) -> bool:
        try:
            existing = (
                self.db.query(Notification.id)
                .filter(
                    Notification.user_id == user_id,
                    Notification.related_entity_id == _entity_id(obligation_id),
                    Notification.notification_type == notification_type,
                    Notification.created_date == today,
                )
                .first()
            )
        except SQLAlchemyError as e:
            # Leave the session usable for the next obligation
            self.db.rollback()
            raise StorageWriteError(f"Failed to check existing reminder: {e}") from e
        return existing is not None

    def insert_reminder(self, record: ReminderRecord) -> bool:
        """
        Insert a reminder unless one with the same dedup key exists.

        Each reminder is committed on its own so one failed write never
        takes other reminders of the sweep down with it.

        Returns:
            False if the unique constraint rejected the row (already sent today)

        Raises:
            StorageWriteError: On any other database failure
        """
        notification = Notification(
            user_id=record.user_id,
            title=record.title,
            message=record.message,
            notification_type=record.notification_type,
            priority=record.priority.value,
            related_entity_type=REMINDER_RULES[record.obligation_kind].entity_type,
            related_entity_id=_entity_id(record.obligation_id),
            action_url=record.action_url,
            is_read=False,
            created_date=record.created_date,
        )

        try:
            self.db.add(notification)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            return False
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageWriteError(f"Failed to insert reminder: {e}") from e

        return True

    def list_for_user(self, user_id: str, limit: int = 20) -> List[Notification]:
        """Fetch recent notifications for a user"""
        return (
            self.db.query(Notification)
            .filter(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc())
            .limit(limit)
            .all()
        )


class SqlReminderStore:
    """ReminderStore backed by the obligation and notification repositories"""

    def __init__(self, db: Session):
        self.obligations = ObligationRepository(db)
        self.notifications = NotificationRepository(db)

    def list_active_obligations(self, kind: ObligationKind) -> List[Obligation]:
        return self.obligations.list_active_obligations(kind)

    def exists_reminder_today(
        self, user_id: str, obligation_id: str, notification_type: str, today: date
    ) -> bool:
        return self.notifications.exists_reminder_today(user_id, obligation_id, notification_type, today)

    def insert_reminder(self, record: ReminderRecord) -> bool:
        return self.notifications.insert_reminder(record)
