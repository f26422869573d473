from sqlalchemy import Column, String, DateTime, func
from app.db.session import Base


class User(Base):
    """Profile written by the identity provider's sign-up flow; read-only here."""

    __tablename__ = "users"

    id = Column(String(128), primary_key=True)
    username = Column(String(100), nullable=True)
    email = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
