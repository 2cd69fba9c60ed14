"""
MongoDB connection wiring.

One `MongoClient` is created at startup and shared by every request; the
app lifespan in `main.py` owns it and closes it on shutdown.
"""

import logging

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from config import Settings

logger = logging.getLogger(__name__)


def connect(settings: Settings, server_selection_timeout_ms: int = 10000) -> MongoClient:
    if not settings.mongo_uri:
        raise RuntimeError("MONGO_URI is not set.")

    client = MongoClient(
        settings.mongo_uri,
        serverSelectionTimeoutMS=server_selection_timeout_ms,
        tz_aware=True,
    )
    try:
        client.admin.command("ping")
    except PyMongoError:
        logger.exception("Failed to connect to MongoDB")
        client.close()
        raise

    logger.info("Connected to MongoDB database=%s", settings.database_name)
    return client


def team_collection(client: MongoClient, settings: Settings) -> Collection:
    return client[settings.database_name][settings.collection_name]
