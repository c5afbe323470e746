"""
Invoice database models.

Invoices are written by the SmartBill / XML import pipeline; the ledger only reads them.
"""

from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, Enum, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from flightschool.app.db.session import Base
from flightschool.app.models.ledger_enums import InvoiceStatus


class Invoice(Base):
    """
    Invoice header.

    Hour packages are the invoice items whose unit denotes hours.
    """
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    smartbill_id = Column(String(64), nullable=True, index=True)
    issue_date = Column(Date, nullable=False, index=True)
    total_amount = Column(Numeric(12, 2), nullable=True)
    currency = Column(String(3), nullable=True)
    status = Column(Enum(InvoiceStatus), default=InvoiceStatus.DRAFT, nullable=False, index=True)

    client = relationship("InvoiceClient", back_populates="invoice", uselist=False)
    items = relationship("InvoiceItem", back_populates="invoice", order_by="InvoiceItem.line_id")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Invoice(id={self.id}, smartbill_id='{self.smartbill_id}', status='{self.status.value}')>"


class InvoiceClient(Base):
    """Billed party of an invoice, bound to exactly one portal user."""
    __tablename__ = "invoice_clients"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, unique=True)
    name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)

    invoice = relationship("Invoice", back_populates="client")


class InvoiceItem(Base):
    """Single invoice line."""
    __tablename__ = "invoice_items"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    line_id = Column(Integer, nullable=False, default=1)
    name = Column(String(255), nullable=True)
    description = Column(String(500), nullable=True)
    quantity = Column(Numeric(10, 2), nullable=False)
    unit = Column(String(16), nullable=True)  # HUR / HOUR / H for hour packages
    unit_price = Column(Numeric(12, 2), nullable=True)
    total_amount = Column(Numeric(12, 2), nullable=True)
    vat_rate = Column(Numeric(5, 2), nullable=True)

    invoice = relationship("Invoice", back_populates="items")
