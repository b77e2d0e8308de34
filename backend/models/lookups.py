"""
Lookup request/response and audit log models
"""
from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SimilarPlaceRequest(BaseModel):
    """Body of POST /findSimilarPlace"""
    model_config = ConfigDict(populate_by_name=True)

    user_location: Optional[str] = Field(default=None, alias="userLocation")

    @field_validator("user_location", mode="before")
    @classmethod
    def coordinate_pair_to_text(cls, value: Union[str, List[float], None]):
        # Map widgets post [lat, lon] arrays; the prompt only needs text
        if isinstance(value, (list, tuple)):
            return ",".join(str(part) for part in value)
        return value


class SimilarPlaceResponse(BaseModel):
    """Successful lookup"""
    model_config = ConfigDict(populate_by_name=True)

    similar_place: str = Field(alias="similarPlace")


class LogRecord(BaseModel):
    """One persisted lookup: the input, the generated text and when it happened"""
    model_config = ConfigDict(populate_by_name=True)

    user_location: str = Field(alias="userLocation")
    similar_place: str = Field(alias="similarPlace")
    timestamp: datetime
