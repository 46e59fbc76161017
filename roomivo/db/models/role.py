from sqlalchemy import Column, Integer, String

from roomivo.db.base import Base

ADMIN = "admin"
TENANT = "tenant"
LANDLORD = "landlord"


class Role(Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)
