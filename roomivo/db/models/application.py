from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, Text, func

from roomivo.db.base import Base


class Application(Base):
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, index=True)
    # No foreign keys: applications outlive deleted properties
    tenant_id = Column(Integer, nullable=False, index=True)
    property_id = Column(Integer, nullable=False, index=True)
    status = Column(String(20), nullable=False, default="pending")

    move_in_date = Column(String(32), nullable=True)
    employment_status = Column(String(100), nullable=True)
    annual_income = Column(Float, nullable=True)
    references = Column(Text, nullable=True)
    pet_friendly = Column(Boolean, nullable=True)
    notes = Column(Text, nullable=True)

    submitted_at = Column(DateTime, nullable=False, server_default=func.now())
    reviewed_at = Column(DateTime, nullable=True)
