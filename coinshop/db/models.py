"""SQLAlchemy ORM models."""
from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from coinshop.infrastructure.database.base import Base

# SQLite only auto-increments INTEGER PRIMARY KEY columns.
Id = BigInteger().with_variant(Integer(), "sqlite")


class Account(Base):
    __tablename__ = "accounts"
    __table_args__ = (CheckConstraint("coin_balance >= 0", name="ck_accounts_coin_balance"),)

    id = Column(Id, primary_key=True, autoincrement=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    coin_balance = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class Merch(Base):
    __tablename__ = "merch"
    __table_args__ = (CheckConstraint("price > 0", name="ck_merch_price"),)

    id = Column(Id, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False, index=True)
    price = Column(Integer, nullable=False)


class Order(Base):
    __tablename__ = "orders"

    id = Column(Id, primary_key=True, autoincrement=True)
    account_id = Column(Id, ForeignKey("accounts.id"), nullable=False, index=True)
    merch_id = Column(Id, ForeignKey("merch.id"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    total_price = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    account = relationship("Account")
    merch = relationship("Merch")


class CoinTransaction(Base):
    __tablename__ = "coin_transactions"
    __table_args__ = (CheckConstraint("amount > 0", name="ck_coin_transactions_amount"),)

    id = Column(Id, primary_key=True, autoincrement=True)
    account_id = Column(Id, ForeignKey("accounts.id"), nullable=False, index=True)
    amount = Column(Integer, nullable=False)
    type = Column(String(32), nullable=False)  # transfer_sent, transfer_received
    related_account_id = Column(Id, ForeignKey("accounts.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    account = relationship("Account", foreign_keys=[account_id])
