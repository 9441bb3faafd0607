from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Storage(Base):
    __tablename__ = 'storages'
    id = Column(Integer, primary_key=True, autoincrement=True)
    # unique=True enforces the one-to-one ownership at the database level
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    user = relationship("User", back_populates="storage")
    items = relationship(
        "Item",
        back_populates="storage",
        cascade="all, delete-orphan",
    )
