from datetime import datetime
from typing import Literal

from pydantic import Field

from roomivo.schemas.base import CamelModel


class ApplicationData(CamelModel):
    move_in_date: str | None = Field(None, max_length=32)
    employment_status: str | None = Field(None, max_length=100)
    annual_income: float | None = Field(None, ge=0)
    references: str | None = None
    pet_friendly: bool | None = None
    notes: str | None = None


class Application(CamelModel):
    id: int
    tenant_id: int
    property_id: int
    status: str
    application_data: ApplicationData
    submitted_at: datetime | None = None
    reviewed_at: datetime | None = None

    @classmethod
    def from_model(cls, application) -> "Application":
        return cls(
            id=application.id,
            tenant_id=application.tenant_id,
            property_id=application.property_id,
            status=application.status,
            application_data=ApplicationData.model_validate(application),
            submitted_at=application.submitted_at,
            reviewed_at=application.reviewed_at,
        )


class ApplicationCreate(CamelModel):
    property_id: int
    application_data: ApplicationData = ApplicationData()


class ApplicationReview(CamelModel):
    status: Literal["accepted", "rejected"]
