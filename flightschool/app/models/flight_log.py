"""
Flight log database model.
"""

import uuid
from sqlalchemy import Column, String, Numeric, Date, DateTime, ForeignKey
from sqlalchemy.sql import func
from flightschool.app.db.session import Base


class FlightLog(Base):
    """
    Flight log model.

    payer_id is NULL for self-funded flights (the pilot pays).
    flight_type is kept as free text: codes outside FlightType are preserved as-is.
    """
    __tablename__ = "flight_logs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    date = Column(Date, nullable=False, index=True)

    # Parties
    pilot_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    instructor_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    payer_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)

    total_hours = Column(Numeric(6, 2), nullable=True)
    flight_type = Column(String(32), nullable=True, default="SCHOOL")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<FlightLog(id={self.id}, date={self.date}, type='{self.flight_type}', hours={self.total_hours})>"
