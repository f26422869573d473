import uuid
from sqlalchemy import Column, String, DateTime, func, Text, Integer, Float
from app.db.session import Base


def new_id() -> str:
    return uuid.uuid4().hex


class Center(Base):
    __tablename__ = "centers"

    id = Column(String(64), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=True, index=True)
    address = Column(Text, nullable=True)
    capacity = Column(Integer, nullable=True) # parallel bookings per hour, NULL means default
    rating = Column(Float, nullable=False, default=0.0)
    review_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
