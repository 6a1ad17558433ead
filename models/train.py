from sqlalchemy import (
    Column, Integer, String, Float, Boolean, ForeignKey, UniqueConstraint
)
from sqlalchemy.orm import relationship
from models.base import Base


class Train(Base):
    """
    A train's status as observed in a single pull.
    
    Field Mapping (feed -> column):
    - <object key> -> name
    - lat / lng -> latitude / longitude
    - from / to -> from_station / to_station
    - pollMin -> poll_min
    
    Later pulls create new rows; existing rows are never updated.
    """
    __tablename__ = "trains"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    pull_id = Column(Integer, ForeignKey("pulls.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(100), nullable=False)
    
    # Position
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    speed = Column(Float, nullable=True)
    direction = Column(Float, nullable=True)
    
    # Feed polling
    poll = Column(String(64), nullable=True)
    poll_min = Column(Integer, nullable=True)
    
    # Journey
    departed = Column(Boolean, nullable=False, default=False)
    arrived = Column(Boolean, nullable=False, default=False)
    from_station = Column(String(100), nullable=False, default="")
    to_station = Column(String(100), nullable=False, default="")
    instance = Column(String(100), nullable=False, default="")
    
    pull = relationship("Pull", back_populates="trains")
    station_times = relationship(
        "StationTime",
        back_populates="train",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="StationTime.id",
    )
    
    __table_args__ = (
        UniqueConstraint("pull_id", "name", name="uq_trains_pull_name"),
    )
