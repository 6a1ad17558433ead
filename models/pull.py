from sqlalchemy import Column, Integer
from sqlalchemy.orm import relationship
from models.base import Base
from models.types import UTCDateTime


class Pull(Base):
    """
    One fetch of the live feed.
    
    Design:
    - Immutable once written
    - Deleting a pull cascades to its trains, and through them to station times
    """
    __tablename__ = "pulls"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    pulled_at = Column(UTCDateTime, nullable=False, index=True)
    
    trains = relationship(
        "Train",
        back_populates="pull",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Train.name",
    )
