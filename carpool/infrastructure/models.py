"""
SQLAlchemy ORM models.

Tables
------
* ``kv_slots`` -- durable key-value slots; the vehicle collection is
  stored as one JSON document under a fixed key.
"""

from sqlalchemy import Column, DateTime, String, Text, func

from .database import Base


class KeyValueSlotModel(Base):
    __tablename__ = "kv_slots"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)

    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
