from datetime import datetime

from pydantic import Field

from roomivo.schemas.base import CamelModel


class Contract(CamelModel):
    id: int
    application_id: int
    tenant_id: int
    landlord_id: int
    contract_text: str | None = None
    compliance_score: int
    signed_by_tenant: bool
    tenant_signed_at: datetime | None = None
    signed_by_landlord: bool
    landlord_signed_at: datetime | None = None
    created_at: datetime | None = None


class ContractCreate(CamelModel):
    application_id: int
    contract_text: str | None = Field(None, max_length=100_000)


class ContractSign(CamelModel):
    is_tenant: bool
