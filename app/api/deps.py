from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import get_db
from app.services.store import SqlStoreGateway, StoreGateway


def get_store(db: Session = Depends(get_db)) -> StoreGateway:
    return SqlStoreGateway(db, atomic_slots=settings.ATOMIC_SLOT_ADMISSION)
