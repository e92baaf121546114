"""
Database initialization script
Creates all tables and inserts the curated funding rounds
"""
from loguru import logger

from disruption_tracker.database import engine, init_db
from disruption_tracker.services.funding_seed import seed_funding_data
from disruption_tracker.services.store import FeedStore


def init_database(bind=None, force_seed: bool = False) -> int:
    """
    Initialize database with tables and seed data

    Args:
        bind: Engine to initialize instead of the configured one
        force_seed: Re-write the curated rounds even when already present

    Returns:
        Number of funding rounds seeded
    """
    bind = bind or engine
    logger.info("Creating database tables...")
    init_db(bind)
    logger.info("Database tables created successfully")

    store = FeedStore(bind)
    if store.is_seeded() and not force_seed:
        logger.info("Funding rounds already seeded, skipping initialization")
        return 0

    logger.info("Inserting curated funding rounds...")
    seeded = seed_funding_data(store, force=force_seed)
    logger.info(f"Inserted {seeded} funding rounds")
    return seeded


if __name__ == "__main__":
    init_database()
    logger.info("Database initialization complete!")
