"""SQLAlchemy ORM models for obligations and notifications"""

import uuid
from sqlalchemy import Column, Boolean, Date, DateTime, Integer, Numeric, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class CreditCard(Base):
    """Credit card; reminders fire on the statement due day"""

    __tablename__ = "credit_cards"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    name = Column(Text, nullable=False)
    bank_name = Column(Text, nullable=False, default="")
    last_four_digits = Column(Text, nullable=False, default="")
    balance = Column(Numeric(14, 2), nullable=False, default=0)
    minimum_payment = Column(Numeric(14, 2), nullable=False, default=0)
    card_limit = Column(Numeric(14, 2), nullable=False, default=0)
    currency = Column(Text, nullable=False, default="TRY")
    due_date = Column(Integer, nullable=False)  # day of month
    created_at = Column(DateTime(timezone=True), nullable=True, server_default=func.now())


class FixedPayment(Base):
    """Recurring monthly payment (rent, subscriptions, utilities)"""

    __tablename__ = "fixed_payments"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    name = Column(Text, nullable=False)
    category = Column(Text, nullable=False, default="")
    amount = Column(Numeric(14, 2), nullable=False)
    currency = Column(Text, nullable=False, default="TRY")
    payment_day = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=True, default=True)
    created_at = Column(DateTime(timezone=True), nullable=True, server_default=func.now())


class Installment(Base):
    """Purchase split into monthly installments"""

    __tablename__ = "installments"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    name = Column(Text, nullable=False)
    category = Column(Text, nullable=False, default="")
    total_amount = Column(Numeric(14, 2), nullable=False)
    monthly_amount = Column(Numeric(14, 2), nullable=False)
    currency = Column(Text, nullable=False, default="TRY")
    start_date = Column(Date, nullable=False)
    total_months = Column(Integer, nullable=False)
    paid_months = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=True, default=True)
    created_at = Column(DateTime(timezone=True), nullable=True, server_default=func.now())


class Loan(Base):
    """Bank loan repaid in monthly payments"""

    __tablename__ = "loans"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    name = Column(Text, nullable=False)
    loan_type = Column(Text, nullable=False, default="personal")
    bank_name = Column(Text, nullable=True)
    total_amount = Column(Numeric(14, 2), nullable=False)
    remaining_amount = Column(Numeric(14, 2), nullable=False)
    monthly_payment = Column(Numeric(14, 2), nullable=False)
    currency = Column(Text, nullable=False, default="TRY")
    payment_day = Column(Integer, nullable=False)
    start_date = Column(Date, nullable=False)
    total_months = Column(Integer, nullable=False)
    paid_months = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=True, default=True)
    created_at = Column(DateTime(timezone=True), nullable=True, server_default=func.now())


class Notification(Base):
    """In-app notification; reminder rows are unique per entity, type and day"""

    __tablename__ = "notifications"
    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "related_entity_id",
            "notification_type",
            "created_date",
            name="uq_notification_reminder_per_day",
        ),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    title = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    notification_type = Column(Text, nullable=False)
    priority = Column(Text, nullable=True, default="medium")
    related_entity_type = Column(Text, nullable=True)
    related_entity_id = Column(UUID(as_uuid=True), nullable=True)
    action_url = Column(Text, nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)
    created_date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
