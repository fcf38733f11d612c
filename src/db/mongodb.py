"""
MongoDB connection management
"""

from pymongo import MongoClient
from pymongo.database import Database

from loguru import logger as log

from src.services.secrets_manager import DatabaseSettings

# Collection names
COLLECTIONS = {
    "DESIGNS": "templates",
    "ORDERS": "orders",
    "COLLECTIONS": "collections",
    "MACROS": "macros",
}


def create_mongo_client(settings: DatabaseSettings) -> MongoClient:
    """
    Create a MongoDB client.

    The client connects lazily on first use, so building it at startup does
    not require the database to be reachable.
    """
    return MongoClient(settings.uri, connect=False, serverSelectionTimeoutMS=5000)


def get_database(client: MongoClient, settings: DatabaseSettings) -> Database:
    return client[settings.name]


def close_mongo_client(client: MongoClient) -> None:
    """
    Close a MongoDB client.

    Args:
        client: MongoDB client to close
    """
    try:
        client.close()
    except Exception as e:
        log.error(f"Error closing MongoDB client: {e}")
