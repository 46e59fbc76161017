from datetime import datetime

from pydantic import Field

from roomivo.schemas.base import CamelModel


class PropertyImage(CamelModel):
    url: str
    public_id: str
    uploaded_at: datetime | None = None


class PropertyImageIn(CamelModel):
    url: str = Field(..., min_length=1)
    public_id: str = Field(..., min_length=1)


class Property(CamelModel):
    id: int
    landlord_id: int
    title: str
    description: str | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None
    lat: float | None = None
    lng: float | None = None
    property_type: str | None = None
    rooms: int | None = None
    bathrooms: int | None = None
    price: float
    amenities: list[str] = []
    verified: bool
    legal_compliance_score: int
    images: list[PropertyImage] = []
    created_at: datetime | None = None


class PropertyCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    address: str | None = Field(None, max_length=500)
    city: str | None = Field(None, max_length=255)
    country: str | None = Field(None, max_length=255)
    lat: float | None = Field(None, ge=-90, le=90)
    lng: float | None = Field(None, ge=-180, le=180)
    property_type: str | None = Field(None, max_length=100)
    rooms: int | None = Field(None, ge=0)
    bathrooms: int | None = Field(None, ge=0)
    price: float = Field(..., gt=0)
    amenities: list[str] = []
    images: list[PropertyImageIn] = []


class PropertyUpdate(CamelModel):
    """Fields a landlord may change. Ownership and verification are not writable."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    address: str | None = Field(None, max_length=500)
    city: str | None = Field(None, max_length=255)
    country: str | None = Field(None, max_length=255)
    lat: float | None = Field(None, ge=-90, le=90)
    lng: float | None = Field(None, ge=-180, le=180)
    property_type: str | None = Field(None, max_length=100)
    rooms: int | None = Field(None, ge=0)
    bathrooms: int | None = Field(None, ge=0)
    price: float | None = Field(None, gt=0)
    amenities: list[str] | None = None
    images: list[PropertyImageIn] | None = None


class PropertyMatch(CamelModel):
    property_id: int
    title: str
    price: float
    city: str | None = None
    amenities: list[str] = []
    match_score: int
