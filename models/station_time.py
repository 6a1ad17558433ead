from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from models.base import Base


class StationTime(Base):
    """
    One station's timing entry for a train within a pull.
    
    The feed's nested arrival/departure pairs are flattened into four
    nullable columns. Each half of a pair is independently optional.
    """
    __tablename__ = "station_times"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    train_id = Column(
        Integer, ForeignKey("trains.id", ondelete="CASCADE"), nullable=False, index=True
    )
    
    station = Column(String(200), nullable=False, default="")
    code = Column(String(20), nullable=False, default="")
    
    estimated = Column(String(64), nullable=True)
    scheduled = Column(String(64), nullable=True)
    eta = Column(String(64), nullable=True)
    
    arrival_estimated = Column(String(64), nullable=True)
    arrival_scheduled = Column(String(64), nullable=True)
    departure_estimated = Column(String(64), nullable=True)
    departure_scheduled = Column(String(64), nullable=True)
    
    diff = Column(String(64), nullable=True)
    diff_min = Column(Integer, nullable=True)
    
    train = relationship("Train", back_populates="station_times")
