from datetime import datetime
from typing import Literal

from pydantic import EmailStr, Field, model_validator

from roomivo.schemas.base import CamelModel


class User(CamelModel):
    id: int
    first_name: str | None = None
    last_name: str | None = None
    email: str
    role: str
    verified: bool = False
    budget_min: float | None = None
    budget_max: float | None = None
    preferred_locations: list[str] = []
    amenities_required: list[str] = []
    created_at: datetime | None = None

    @model_validator(mode="before")
    @classmethod
    def flatten_role(cls, data):
        """ORM users carry a Role row; expose only its name."""
        role = getattr(data, "role", None)
        if role is not None and hasattr(role, "name"):
            return {
                "id": data.id,
                "first_name": data.first_name,
                "last_name": data.last_name,
                "email": data.email,
                "role": role.name,
                "verified": data.verified,
                "budget_min": data.budget_min,
                "budget_max": data.budget_max,
                "preferred_locations": data.preferred_locations or [],
                "amenities_required": data.amenities_required or [],
                "created_at": data.created_at,
            }
        return data


class UserRegister(CamelModel):
    first_name: str | None = Field(None, max_length=255)
    last_name: str | None = Field(None, max_length=255)
    # Presence is checked by the auth service so a missing credential is a 400
    email: EmailStr | None = None
    password: str | None = None
    role: Literal["tenant", "landlord"] = "tenant"


class LoginRequest(CamelModel):
    email: str | None = None
    password: str | None = None


class ProfileUpdate(CamelModel):
    budget_min: float | None = Field(None, ge=0)
    budget_max: float | None = Field(None, ge=0)
    preferred_locations: list[str] | None = None
    amenities_required: list[str] | None = None

    @model_validator(mode="after")
    def validate_budget_range(self):
        """Ensure budget_min doesn't exceed budget_max."""
        if (
            self.budget_min is not None
            and self.budget_max is not None
            and self.budget_min > self.budget_max
        ):
            raise ValueError("budgetMin cannot exceed budgetMax")
        return self


class AuthResponse(CamelModel):
    token: str
    token_type: str = "bearer"
    user: User
