import logging

from fastapi import Request
from pymongo import DESCENDING, MongoClient

from . import config

logger = logging.getLogger(__name__)


def create_client() -> MongoClient:
    """Create the process-wide connection pool. Called once from the app lifespan."""
    logger.info("Connecting to MongoDB database %s", config.DB_NAME)
    return MongoClient(
        config.MONGO_URI,
        timeoutMS=config.MONGO_TIMEOUT_MS,
        serverSelectionTimeoutMS=config.MONGO_TIMEOUT_MS,
        connectTimeoutMS=config.MONGO_TIMEOUT_MS,
    )


def ensure_indexes(db):
    db.posts.create_index([("date", DESCENDING)])


def get_db(request: Request):
    """Get the posts database from app state"""
    return request.app.state.db
