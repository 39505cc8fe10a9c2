"""SQLAlchemy models for fintrack database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    is_active = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    transactions = relationship(
        "Transaction", back_populates="account", cascade="all, delete-orphan"
    )


class Transaction(Base):
    """Transaction model (one day of activity in an account)."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    account_id = Column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
    date = Column(Date, nullable=False, index=True)
    investment = Column(Numeric(14, 2), default=0, nullable=False)
    earnings = Column(Numeric(14, 2), default=0, nullable=False)
    spending = Column(Numeric(14, 2), default=0, nullable=False)
    to_be_credit = Column(Numeric(14, 2), default=0, nullable=False)
    salary = Column(Numeric(14, 2), default=0, nullable=True)
    debt = Column(Numeric(14, 2), default=0, nullable=True)
    interest_rate = Column(Numeric(7, 3), default=0, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    account = relationship("Account", back_populates="transactions")
    salary_entries = relationship(
        "SalaryEntry",
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="SalaryEntry.id",
    )


class SalaryEntry(Base):
    """Salary entry model attached to a transaction."""

    __tablename__ = "salary_entries"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(
        Integer, ForeignKey("transactions.id", ondelete="CASCADE"), nullable=True
    )
    name = Column(String, nullable=False)
    purpose = Column(String, nullable=True)
    amount = Column(Numeric(14, 2), nullable=False)
    date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    transaction = relationship("Transaction", back_populates="salary_entries")


class Invoice(Base):
    """Invoice model."""

    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True)
    invoice_number = Column(String, nullable=False, unique=True)
    account_name = Column(String, nullable=False)
    client_name = Column(String, nullable=False)
    client_email = Column(String, nullable=True)
    client_address = Column(String, nullable=True)
    date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    notes = Column(String, nullable=True)
    logo_url = Column(String, nullable=True)
    total_amount = Column(Numeric(14, 2), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    items = relationship(
        "InvoiceItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceItem.id",
    )


class InvoiceItem(Base):
    """Invoice line item model."""

    __tablename__ = "invoice_items"

    id = Column(Integer, primary_key=True)
    invoice_id = Column(
        Integer, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False
    )
    description = Column(String, nullable=False)
    quantity = Column(Numeric(12, 2), nullable=False)
    rate = Column(Numeric(14, 2), nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    invoice = relationship("Invoice", back_populates="items")


class Profile(Base):
    """User profile and feature flags."""

    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    currency = Column(String, nullable=True)
    show_debt_feature = Column(Boolean, default=False, nullable=False)
    show_all_accounts_analysis = Column(Boolean, default=False, nullable=False)
    debt_principal = Column(Numeric(14, 2), nullable=True)
    debt_interest_rate = Column(Numeric(7, 3), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """Turn on foreign key enforcement for SQLite connections."""
    module = type(dbapi_connection).__module__
    if module.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
