"""Common schema types."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class GenderEnum(str, Enum):
    """Result set gender."""

    MALE = "male"
    FEMALE = "female"


class CategoryEnum(str, Enum):
    """Result set category."""

    ELITE = "elite"
    JUNIOR = "junior"


class TeamTypeEnum(str, Enum):
    """Team type enum for API."""

    ELITE = "elite"
    JUNIOR = "junior"


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(from_attributes=True)


class TimestampSchema(BaseSchema):
    """Schema with timestamp fields."""

    created_at: datetime
    updated_at: datetime


class ForceRequest(BaseSchema):
    """Body for administrative overrides."""

    force: bool = False
