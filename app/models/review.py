from sqlalchemy import Column, String, DateTime, func, Integer, Text
from app.db.session import Base
from app.models.center import new_id


class Review(Base):
    __tablename__ = "comments"

    id = Column(String(64), primary_key=True, default=new_id)
    center_id = Column(String(64), nullable=False, index=True)
    reservation_id = Column(String(64), nullable=False, unique=True) # one review per reservation
    user_id = Column(String(128), nullable=False)
    rating = Column(Integer, nullable=False) # 1-5
    comment = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
