"""
Invoice, flight and ledger enumerations.
"""

import enum


class InvoiceStatus(str, enum.Enum):
    """Invoice status enumeration."""
    DRAFT = "draft"
    PENDING = "pending"
    PAID = "paid"
    IMPORTED = "imported"  # Pulled in from SmartBill / XML import
    CANCELLED = "cancelled"


# Only these statuses ever credit hours
CREDITING_INVOICE_STATUSES = (InvoiceStatus.PAID, InvoiceStatus.IMPORTED)


class FlightType(str, enum.Enum):
    """Flight purpose / billing treatment."""
    SCHOOL = "SCHOOL"
    CHARTER = "CHARTER"
    FERRY = "FERRY"
    DEMO = "DEMO"
    INVOICED = "INVOICED"
    PROMO = "PROMO"


class LedgerEventType(str, enum.Enum):
    """Source of a ledger entry."""
    INVOICE = "invoice"  # Hour package purchase (credit)
    FLIGHT = "flight"  # Flown hours (debit)


class FlightRole(str, enum.Enum):
    """Role of the subject user on a given flight."""
    PILOT = "PILOT"
    INSTRUCTOR = "INSTRUCTOR"
    PAYER = "PAYER"
