from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from roomivo.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    email = Column(String(320), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False)
    verified = Column(Boolean, nullable=False, default=False)

    # Matching profile
    budget_min = Column(Float, nullable=True)
    budget_max = Column(Float, nullable=True)
    preferred_locations = Column(JSON, nullable=False, default=list)
    amenities_required = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime, nullable=False, server_default=func.now())

    role = relationship("Role", backref="users")
