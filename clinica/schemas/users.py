"""Staff user and professional schemas."""

from datetime import datetime
from enum import Enum

from pydantic import EmailStr, Field, field_validator

from clinica.schemas.common import CamelModel, blank_to_none, reject_null


class UserRole(str, Enum):
    """Staff roles, from global to sede-scoped."""

    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMINISTRADOR"
    RECEPCIONIST = "RECEPCIONISTA"
    SPECIALIST = "ESPECIALISTA"


class UserBase(CamelModel):
    """Base user schema with common fields."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr | None = None
    role: UserRole = UserRole.RECEPCIONIST
    sede_ids: list[str] = []
    avatar: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def empty_email_as_none(cls, v: object) -> object:
        """Empty emails are stored as null so they never collide."""
        return blank_to_none(v)


class UserCreate(UserBase):
    """Schema for creating a staff user."""

    access_key: str | None = Field(None, max_length=100)


class UserUpdate(CamelModel):
    """Schema for updating a staff user."""

    name: str | None = Field(None, min_length=1, max_length=200)
    email: EmailStr | None = None
    access_key: str | None = Field(None, max_length=100)
    role: UserRole | None = None
    sede_ids: list[str] | None = None
    avatar: str | None = None

    @field_validator("name", "role", "sede_ids")
    @classmethod
    def required_columns_not_null(cls, v: object) -> object:
        """Explicit nulls on NOT NULL columns are rejected."""
        return reject_null(v)

    @field_validator("email", mode="before")
    @classmethod
    def empty_email_as_none(cls, v: object) -> object:
        """Empty emails are stored as null so they never collide."""
        return blank_to_none(v)


class UserResponse(UserBase):
    """User schema for API responses."""

    id: str
    company_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProfessionalBase(CamelModel):
    """Base professional schema."""

    name: str = Field(..., min_length=1, max_length=200)
    specialty: str | None = Field(None, max_length=200)
    avatar: str | None = None
    sede_ids: list[str] = []


class ProfessionalCreate(ProfessionalBase):
    """Schema for registering a professional against an existing user."""

    user_id: str | None = None


class SpecialistCreate(ProfessionalBase):
    """Onboard a specialist: a user account plus its professional profile."""

    email: EmailStr | None = None
    access_key: str | None = Field(None, max_length=100)

    @field_validator("email", mode="before")
    @classmethod
    def empty_email_as_none(cls, v: object) -> object:
        """Empty emails are stored as null so they never collide."""
        return blank_to_none(v)


class ProfessionalResponse(ProfessionalBase):
    """Professional response schema."""

    id: str
    user_id: str | None = None
    company_id: str | None = None
    created_at: datetime | None = None


class SpecialistResponse(CamelModel):
    """Result of specialist onboarding."""

    user: UserResponse
    professional: ProfessionalResponse
