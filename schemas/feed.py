"""
Pydantic schemas for the raw VIA Rail feed.

The feed is a JSON object keyed by train name. These models describe one
value of that object. Field names follow the feed; `from` is exposed as
`from_` because it is a Python keyword.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Any


class RawTimePair(BaseModel):
    """Nested arrival/departure times. Either half may be missing."""
    estimated: Optional[str] = None
    scheduled: Optional[str] = None


class RawStationTime(BaseModel):
    """One entry of a train's `times` list, as received"""
    station: str = ""
    code: str = ""
    estimated: Optional[str] = None
    scheduled: Optional[str] = None
    eta: Optional[str] = None
    arrival: Optional[RawTimePair] = None
    departure: Optional[RawTimePair] = None
    diff: Optional[str] = None
    diffMin: Optional[int] = None

    @field_validator("station", "code", mode="before")
    @classmethod
    def null_to_empty(cls, v):
        return "" if v is None else v


class RawTrain(BaseModel):
    """One train record, the value side of the feed's name -> record mapping"""
    lat: Optional[float] = None
    lng: Optional[float] = None
    speed: Optional[float] = None
    direction: Optional[float] = None
    poll: Optional[str] = None
    departed: bool = False
    arrived: bool = False
    from_: str = Field("", alias="from")
    to: str = ""
    instance: str = ""
    pollMin: Optional[int] = None
    times: List[RawStationTime] = Field(default_factory=list)

    @field_validator("departed", "arrived", mode="before")
    @classmethod
    def null_to_false(cls, v):
        return False if v is None else v

    @field_validator("from_", "to", "instance", mode="before")
    @classmethod
    def coerce_identifier(cls, v: Any):
        """Station and instance identifiers are kept as text"""
        if v is None:
            return ""
        return str(v)

    @field_validator("times", mode="before")
    @classmethod
    def null_to_empty_list(cls, v):
        return [] if v is None else v

    class Config:
        populate_by_name = True
