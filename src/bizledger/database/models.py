"""SQLAlchemy models for the bizledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session
from sqlalchemy.types import TypeDecorator

from bizledger.utils.money import coerce_decimal

Base = declarative_base()


class ExactDecimal(TypeDecorator):
    """Decimal stored as its string form so no digits are lost.

    SQLite has no fixed-point type and keeps ``Numeric`` values as REAL,
    which rounds money to the declared scale on the way in.
    """

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(coerce_decimal(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return coerce_decimal(value)


MONEY = ExactDecimal()
RATE = ExactDecimal()


class LedgerEntry(Base):
    """Income or expense entry model."""

    __tablename__ = "ledger_entries"

    id = Column(String(32), primary_key=True)
    kind = Column(String, nullable=False)
    amount = Column(MONEY, nullable=False)
    category = Column(String, nullable=False)
    sub_category = Column(String, nullable=True)
    description = Column(String, nullable=True)
    date = Column(Date, nullable=False, index=True)
    currency = Column(String(3), nullable=False, default="USD")
    exchange_rate = Column(RATE, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Invoice(Base):
    """Invoice model with invoice-level tax, discount and shipping."""

    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True)
    invoice_number = Column(String, unique=True, nullable=False)
    client_name = Column(String, nullable=False)
    issue_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    status = Column(String, nullable=False, default="draft")
    tax_rate = Column(RATE, nullable=False, default=0)
    discount_rate = Column(RATE, nullable=False, default=0)
    discount_type = Column(String, nullable=False, default="percentage")
    discount_amount = Column(MONEY, nullable=False, default=0)
    shipping_amount = Column(MONEY, nullable=False, default=0)
    shipping_tax_rate = Column(RATE, nullable=False, default=0)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    line_items = relationship(
        "InvoiceLineItem", back_populates="invoice", cascade="all, delete-orphan"
    )
    payments = relationship(
        "InvoicePayment", back_populates="invoice", cascade="all, delete-orphan"
    )


class InvoiceLineItem(Base):
    """Invoice line item model."""

    __tablename__ = "invoice_line_items"

    id = Column(Integer, primary_key=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False)
    description = Column(String, nullable=True)
    quantity = Column(RATE, nullable=False)
    rate = Column(RATE, nullable=False)
    tax_rate = Column(RATE, nullable=False, default=0)
    discount_rate = Column(RATE, nullable=False, default=0)
    discount_type = Column(String, nullable=False, default="percentage")
    discount_amount = Column(MONEY, nullable=False, default=0)

    # Relationships
    invoice = relationship("Invoice", back_populates="line_items")


class InvoicePayment(Base):
    """Payment recorded against an invoice."""

    __tablename__ = "invoice_payments"

    id = Column(Integer, primary_key=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False)
    amount = Column(MONEY, nullable=False)
    date = Column(Date, nullable=False)
    method = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    invoice = relationship("Invoice", back_populates="payments")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
