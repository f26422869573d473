"""Rebuild every center's rating and review count from the comments table."""

import sys

from app.core.errors import StorageUnavailable
from app.db.session import SessionLocal
from app.services.ratings import recalculate_all_ratings
from app.services.store import SqlStoreGateway


def recalculate_ratings() -> int:
    db = SessionLocal()
    try:
        print("Recalculating center ratings...")
        updated = recalculate_all_ratings(SqlStoreGateway(db))
        for center_id, (rating, count) in sorted(updated.items()):
            print(f"  -> Center {center_id}: {rating:.2f} stars ({count} reviews)")
        print(f"Total centers updated: {len(updated)}")
        return 0
    except StorageUnavailable as e:
        print(f"Error recalculating ratings: {e}")
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(recalculate_ratings())
