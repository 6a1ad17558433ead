"""
Transform raw feed records into row-ready train and station time models
"""

from typing import Optional
from schemas.feed import RawTrain, RawStationTime, RawTimePair
from schemas.normalized import TrainCreate, StationTimeCreate
import logging

logger = logging.getLogger(__name__)

# The feed's placeholder for "no time available"
SENTINEL = "&mdash;"


def resolve_sentinel(value: Optional[str]) -> Optional[str]:
    """Return None for a missing value or the sentinel, else the value"""
    if value is None or value == SENTINEL:
        return None
    return value


class TrainNormalizer:
    """
    Normalize raw feed trains into the stored shape.

    Sentinel handling:
    - top-level `estimated`, `eta`: sentinel -> None
    - top-level `scheduled`: stored as received, sentinel included
    - `arrival` / `departure` pairs: each half filtered on its own
    - `diff`, `diffMin`: stored as received

    Scalar train fields (position, flags, stations) are copied verbatim.
    """

    def normalize(self, name: str, raw: RawTrain) -> TrainCreate:
        """
        Normalize one (name, record) pair of the feed.

        Returns:
            Validated TrainCreate with its station times resolved
        """
        return TrainCreate(
            name=name,
            latitude=raw.lat,
            longitude=raw.lng,
            speed=raw.speed,
            direction=raw.direction,
            poll=raw.poll,
            poll_min=raw.pollMin,
            departed=raw.departed,
            arrived=raw.arrived,
            from_station=raw.from_,
            to_station=raw.to,
            instance=raw.instance,
            times=[self.normalize_station_time(st) for st in raw.times],
        )

    def normalize_station_time(self, raw: RawStationTime) -> StationTimeCreate:
        arrival_estimated, arrival_scheduled = self._resolve_pair(raw.arrival)
        departure_estimated, departure_scheduled = self._resolve_pair(raw.departure)

        return StationTimeCreate(
            station=raw.station,
            code=raw.code,
            estimated=resolve_sentinel(raw.estimated),
            # Not filtered: the top-level scheduled value keeps the sentinel text
            scheduled=raw.scheduled,
            eta=resolve_sentinel(raw.eta),
            arrival_estimated=arrival_estimated,
            arrival_scheduled=arrival_scheduled,
            departure_estimated=departure_estimated,
            departure_scheduled=departure_scheduled,
            diff=raw.diff,
            diff_min=raw.diffMin,
        )

    @staticmethod
    def _resolve_pair(pair: Optional[RawTimePair]) -> tuple:
        if pair is None:
            return None, None
        return resolve_sentinel(pair.estimated), resolve_sentinel(pair.scheduled)
