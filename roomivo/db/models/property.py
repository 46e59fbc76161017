from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from roomivo.db.base import Base

DEFAULT_COMPLIANCE_SCORE = 95


class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)
    landlord_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    address = Column(String(500), nullable=True)
    city = Column(String(255), nullable=True, index=True)
    country = Column(String(255), nullable=True)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
    property_type = Column(String(100), nullable=True)
    rooms = Column(Integer, nullable=True)
    bathrooms = Column(Integer, nullable=True)
    price = Column(Float, nullable=False)
    amenities = Column(JSON, nullable=False, default=list)
    verified = Column(Boolean, nullable=False, default=True)
    legal_compliance_score = Column(Integer, nullable=False, default=DEFAULT_COMPLIANCE_SCORE)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    landlord = relationship("User", backref="properties")
    images = relationship(
        "PropertyImage",
        back_populates="property",
        cascade="all, delete-orphan",
        order_by="PropertyImage.id",
    )


class PropertyImage(Base):
    __tablename__ = "property_images"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)
    url = Column(String, nullable=False)
    public_id = Column(String, nullable=False)
    uploaded_at = Column(DateTime, nullable=False, server_default=func.now())

    property = relationship("Property", back_populates="images")
