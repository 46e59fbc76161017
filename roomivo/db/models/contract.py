from sqlalchemy import Boolean, Column, DateTime, Integer, Text, func

from roomivo.db.base import Base


class Contract(Base):
    __tablename__ = "contracts"

    id = Column(Integer, primary_key=True, index=True)
    application_id = Column(Integer, nullable=False, unique=True, index=True)
    tenant_id = Column(Integer, nullable=False, index=True)
    landlord_id = Column(Integer, nullable=False, index=True)
    contract_text = Column(Text, nullable=True)
    compliance_score = Column(Integer, nullable=False, default=95)

    signed_by_tenant = Column(Boolean, nullable=False, default=False)
    tenant_signed_at = Column(DateTime, nullable=True)
    signed_by_landlord = Column(Boolean, nullable=False, default=False)
    landlord_signed_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, nullable=False, server_default=func.now())
