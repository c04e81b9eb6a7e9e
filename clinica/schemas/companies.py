"""Company branding schemas."""

from pydantic import Field

from clinica.schemas.common import CamelModel


class CompanyResponse(CamelModel):
    """Company branding as shown on staff views and the portal."""

    id: str
    name: str
    primary_color: str | None = None
    logo: str | None = None
    portal_hero: str | None = None


class CompanyUpdate(CamelModel):
    """Schema for updating company branding."""

    name: str | None = Field(None, min_length=1, max_length=200)
    primary_color: str | None = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")
    logo: str | None = None
    portal_hero: str | None = None
