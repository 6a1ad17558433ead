"""
Pydantic schemas for normalized, row-ready train data
"""

from pydantic import BaseModel, Field
from typing import Optional, List


class StationTimeCreate(BaseModel):
    """
    Column values for one station_times row.

    Sentinel placeholders have already been resolved by the normalizer,
    apart from the top-level `scheduled` value which is stored as received.
    """
    station: str
    code: str
    estimated: Optional[str] = None
    scheduled: Optional[str] = None
    eta: Optional[str] = None
    arrival_estimated: Optional[str] = None
    arrival_scheduled: Optional[str] = None
    departure_estimated: Optional[str] = None
    departure_scheduled: Optional[str] = None
    diff: Optional[str] = None
    diff_min: Optional[int] = None


class TrainCreate(BaseModel):
    """Column values for one trains row, plus its station times"""
    name: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    speed: Optional[float] = None
    direction: Optional[float] = None
    poll: Optional[str] = None
    poll_min: Optional[int] = None
    departed: bool = False
    arrived: bool = False
    from_station: str = ""
    to_station: str = ""
    instance: str = ""
    times: List[StationTimeCreate] = Field(default_factory=list)
