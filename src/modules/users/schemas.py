"""Pydantic schemas for profile management API."""

from pydantic import BaseModel, Field


class DescriptionUpdate(BaseModel):
    """Schema for replacing a profile description."""

    description: str = Field(max_length=1000)


class EmailUpdate(BaseModel):
    """Schema for changing the login email.

    The address is validated by the service so that the same rule applies
    outside HTTP.
    """

    email: str = Field(min_length=1, max_length=254)
