from sqlalchemy import Column, Integer
from models.base import Base

# Bump together with a new Alembic revision
SCHEMA_VERSION = 1


class SchemaVersion(Base):
    """Single-row marker of the schema layout the database was created with."""
    __tablename__ = "schema_version"
    
    version = Column(Integer, primary_key=True, autoincrement=False)
