from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CustomerBase(BaseModel):
    name: str = Field(min_length=1)
    billing_rate: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    email: Optional[str] = None


class CustomerCreate(CustomerBase):
    """Schema for creating a new customer."""
    pass


class CustomerUpdate(BaseModel):
    """Schema for updating an existing customer (all fields optional)."""

    name: Optional[str] = Field(default=None, min_length=1)
    billing_rate: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    email: Optional[str] = None

    # Be lenient with extra fields from clients
    model_config = ConfigDict(extra="ignore")


class CustomerRead(CustomerBase):
    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
