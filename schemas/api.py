"""
Pydantic schemas for API responses.

Train and station time payloads use the feed's own field names (`lat`,
`from`, `pollMin`, nested `arrival`/`departure`) so stored pulls read back
in the shape they were received.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from models.station_time import StationTime
from models.train import Train


# ============================================================================
# Pull Schemas
# ============================================================================

class PullResponse(BaseModel):
    """One recorded fetch of the feed"""
    id: int
    pulled_at: datetime

    class Config:
        from_attributes = True


# ============================================================================
# Train Schemas
# ============================================================================

class TimePair(BaseModel):
    estimated: Optional[str] = None
    scheduled: Optional[str] = None

    @classmethod
    def from_columns(cls, estimated: Optional[str], scheduled: Optional[str]) -> Optional["TimePair"]:
        """A pair with neither half stored reads back as null"""
        if estimated is None and scheduled is None:
            return None
        return cls(estimated=estimated, scheduled=scheduled)


class StationTimeResponse(BaseModel):
    id: int
    station: str
    code: str
    estimated: Optional[str] = None
    scheduled: Optional[str] = None
    eta: Optional[str] = None
    arrival: Optional[TimePair] = None
    departure: Optional[TimePair] = None
    diff: Optional[str] = None
    diffMin: Optional[int] = None

    @classmethod
    def from_row(cls, row: StationTime) -> "StationTimeResponse":
        return cls(
            id=row.id,
            station=row.station,
            code=row.code,
            estimated=row.estimated,
            scheduled=row.scheduled,
            eta=row.eta,
            arrival=TimePair.from_columns(row.arrival_estimated, row.arrival_scheduled),
            departure=TimePair.from_columns(row.departure_estimated, row.departure_scheduled),
            diff=row.diff,
            diffMin=row.diff_min,
        )


class TrainSummary(BaseModel):
    """A train without its station times"""
    id: int
    name: str
    lat: Optional[float] = None
    lng: Optional[float] = None
    speed: Optional[float] = None
    direction: Optional[float] = None
    poll: Optional[str] = None
    departed: bool
    arrived: bool
    from_: str = Field(alias="from")
    to: str
    instance: str
    pollMin: Optional[int] = None

    @classmethod
    def row_fields(cls, row: Train) -> dict:
        return {
            "id": row.id,
            "name": row.name,
            "lat": row.latitude,
            "lng": row.longitude,
            "speed": row.speed,
            "direction": row.direction,
            "poll": row.poll,
            "departed": row.departed,
            "arrived": row.arrived,
            "from_": row.from_station,
            "to": row.to_station,
            "instance": row.instance,
            "pollMin": row.poll_min,
        }

    @classmethod
    def from_row(cls, row: Train) -> "TrainSummary":
        return cls(**cls.row_fields(row))

    class Config:
        populate_by_name = True


class TrainDetail(TrainSummary):
    """A train with its station times in feed order"""
    times: List[StationTimeResponse] = Field(default_factory=list)

    @classmethod
    def from_row(cls, row: Train) -> "TrainDetail":
        return cls(
            **cls.row_fields(row),
            times=[StationTimeResponse.from_row(st) for st in row.station_times],
        )


# ============================================================================
# Health / Error Schemas
# ============================================================================

class HealthCheckResponse(BaseModel):
    """Health check response model"""
    status: str = Field(..., description="healthy or unhealthy")
    timestamp: datetime
    database_connected: bool
    scheduler_running: bool
    last_pull_id: Optional[int] = None
    last_pulled_at: Optional[datetime] = None


class ErrorResponse(BaseModel):
    """Generic error body. Never carries internal details."""
    error: str
    message: str
    request_id: Optional[str] = None
