from sqlalchemy import Column, String, DateTime, func
from app.db.session import Base


def favorite_key(user_id: str, center_id: str) -> str:
    return f"{user_id}_{center_id}"


class Favorite(Base):
    __tablename__ = "favorites"

    id = Column(String(200), primary_key=True) # "{user_id}_{center_id}"
    user_id = Column(String(128), nullable=False, index=True)
    center_id = Column(String(64), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
