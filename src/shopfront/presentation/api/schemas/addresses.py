"""Address book schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from shopfront.domain.address import Address

COUNTRY_PATTERN = r"^[A-Za-z]{2}$"


class AddressCreateRequest(BaseModel):
    recipient_name: str = Field(..., min_length=1, max_length=100)
    line1: str = Field(..., min_length=1, max_length=255)
    line2: Optional[str] = Field(default=None, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: Optional[str] = Field(default=None, max_length=100)
    postal_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., pattern=COUNTRY_PATTERN, description="ISO 3166 alpha-2")
    phone: Optional[str] = Field(default=None, max_length=32)
    is_default: bool = False

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "recipient_name": "Alice Lee",
                "line1": "1 Market Street",
                "city": "Springfield",
                "postal_code": "12345",
                "country": "US",
                "is_default": True,
            },
        },
    )


class AddressUpdateRequest(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    recipient_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    line1: Optional[str] = Field(default=None, min_length=1, max_length=255)
    line2: Optional[str] = Field(default=None, max_length=255)
    city: Optional[str] = Field(default=None, min_length=1, max_length=100)
    state: Optional[str] = Field(default=None, max_length=100)
    postal_code: Optional[str] = Field(default=None, min_length=1, max_length=20)
    country: Optional[str] = Field(default=None, pattern=COUNTRY_PATTERN)
    phone: Optional[str] = Field(default=None, max_length=32)

    model_config = ConfigDict(str_strip_whitespace=True)


class AddressResponse(BaseModel):
    id: UUID
    recipient_name: str
    line1: str
    line2: Optional[str]
    city: str
    state: Optional[str]
    postal_code: str
    country: str
    phone: Optional[str]
    is_default: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, address: Address) -> "AddressResponse":
        return cls(
            id=address.id,
            recipient_name=address.recipient_name,
            line1=address.line1,
            line2=address.line2,
            city=address.city,
            state=address.state,
            postal_code=address.postal_code,
            country=address.country,
            phone=address.phone,
            is_default=address.is_default,
            created_at=address.created_at,
            updated_at=address.updated_at,
        )
