"""
Pydantic schemas for data validation and serialization.

Schemas:
    feed: The raw feed as received (RawTrain, RawStationTime, RawTimePair)
    normalized: Row-ready train and station time values
    api: API response models

Usage:
    from schemas.feed import RawTrain
    from schemas.normalized import TrainCreate
    from schemas.api import TrainDetail, PullResponse
"""
