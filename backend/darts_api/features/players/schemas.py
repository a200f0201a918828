"""Pydantic schemas for the players feature."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PlayerResponse(BaseModel):
    """Schema for player response data.

    Serialized with camelCase keys (``dateOfBirth``, ``tourCard``,
    ``careerEarnings``).
    """

    id: UUID = Field(..., description="Store-assigned player identifier")
    name: str = Field(..., description="Player name")
    country: Optional[str] = Field(None, description="Country the player represents")
    age: Optional[int] = Field(None, description="Age in years")
    date_of_birth: Optional[str] = Field(None, description="Free-form date of birth")
    nickname: Optional[str] = Field(None, description="Walk-on nickname")
    ranking: Optional[int] = Field(None, description="Order of Merit ranking")
    tour_card: Optional[str] = Field(None, description="Tour card status")
    career_earnings: Optional[str] = Field(
        None, description="Career prize money as displayed"
    )

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ErrorResponse(BaseModel):
    """Schema for error responses."""

    detail: str
