import psycopg2
from psycopg2 import sql
from psycopg2.extensions import ISOLATION_LEVEL_AUTOCOMMIT
from sqlalchemy.orm import Session
from app.core.config import settings
from app.models.center import Center
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Catalogue loaded into an empty database
DEFAULT_CENTERS = [
    {"id": "1", "name": "Fitness World", "category": "Fitness", "address": "Strada Victoriei 10, București"},
    {"id": "2", "name": "Yoga Studio Zen", "category": "Yoga", "address": "Bulevardul Unirii 25, București"},
    {"id": "3", "name": "Tennis Club Elite", "category": "Tenis", "address": "Calea Floreasca 100, București", "capacity": 4},
    {"id": "4", "name": "CrossFit Power", "category": "CrossFit", "address": "Strada Dorobanți 50, București"},
    {"id": "5", "name": "Swimming Academy", "category": "Înot", "address": "Bulevardul Aviatorilor 15, București", "capacity": 8},
    {"id": "6", "name": "Basketball Arena", "category": "Baschet", "address": "Strada Calea Vitan 200, București", "capacity": 2},
    {"id": "7", "name": "Martial Arts Dojo", "category": "Arte Marțiale", "address": "Bulevardul Iuliu Maniu 50, București"},
    {"id": "8", "name": "Bodybuilding Gym Pro", "category": "Bodybuilding", "address": "Strada Barbu Văcărescu 150, București"},
    {"id": "9", "name": "Dance Studio Moves", "category": "Dans", "address": "Calea Griviței 80, București"},
    {"id": "10", "name": "Padel Court Center", "category": "Padel", "address": "Bulevardul Expoziției 30, București", "capacity": 3},
    {"id": "11", "name": "Squash Club", "category": "Squash", "address": "Strada Amzei 20, București", "capacity": 2},
    {"id": "12", "name": "Climbing Wall Extreme", "category": "Escaladă", "address": "Calea Rahovei 250, București"},
    {"id": "13", "name": "Pilates Studio", "category": "Pilates", "address": "Bulevardul Magheru 30, București"},
    {"id": "14", "name": "National Stadium Complex", "category": "Stadion", "address": "Bulevardul Basarabia 37-39, București"},
    {"id": "15", "name": "MultiSport Center", "category": "Polisportiv", "address": "Strada Nerva Traian 20, București"},
]


def create_database():
    """Create database if it doesn't exist."""
    try:
        # Connect to default 'postgres' database to check/create target DB
        con = psycopg2.connect(
            user=settings.POSTGRES_USER,
            password=settings.POSTGRES_PASSWORD,
            host=settings.POSTGRES_SERVER,
            port=settings.POSTGRES_PORT,
            dbname="postgres"
        )
        con.set_isolation_level(ISOLATION_LEVEL_AUTOCOMMIT)
        cur = con.cursor()

        # Check if DB exists
        cur.execute("SELECT 1 FROM pg_catalog.pg_database WHERE datname = %s", (settings.POSTGRES_DB,))
        exists = cur.fetchone()

        if not exists:
            logger.info(f"Database {settings.POSTGRES_DB} does not exist. Creating...")
            cur.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(settings.POSTGRES_DB)))
            logger.info(f"Database {settings.POSTGRES_DB} created successfully.")
        else:
            logger.info(f"Database {settings.POSTGRES_DB} already exists.")

        cur.close()
        con.close()
    except psycopg2.Error as e:
        logger.error(f"Error creating database: {e}")
        # Proceeding anyway, maybe it exists or connection params are for the target DB directly


def seed_centers(db: Session) -> int:
    """Insert the default centers into an empty centers table. Returns rows added."""
    if db.query(Center).first():
        logger.info("Centers already present, skipping seed.")
        return 0
    for data in DEFAULT_CENTERS:
        db.add(Center(**data))
    db.commit()
    logger.info(f"Seeded {len(DEFAULT_CENTERS)} centers.")
    return len(DEFAULT_CENTERS)


if __name__ == "__main__":
    from app.db.base import Base
    from app.db.session import engine, SessionLocal

    if settings.DATABASE_URL.startswith("postgresql"):
        create_database()
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_centers(db)
    finally:
        db.close()
