"""
SQLAlchemy ORM models for database tables.

Models:
    base: Base declarative class
    pull: One fetch of the live feed
    train: A train's status within a pull
    station_time: Per-station timing entries of a train
    schema_version: Schema layout marker for migrations

Relationships:
    - Pull → Train (one-to-many, ON DELETE CASCADE)
    - Train → StationTime (one-to-many, ON DELETE CASCADE)

Usage:
    from models import Pull, Train, StationTime
"""

from models.base import Base
from models.pull import Pull
from models.train import Train
from models.station_time import StationTime
from models.schema_version import SchemaVersion, SCHEMA_VERSION

__all__ = [
    "Base",
    "Pull",
    "Train",
    "StationTime",
    "SchemaVersion",
    "SCHEMA_VERSION",
]
