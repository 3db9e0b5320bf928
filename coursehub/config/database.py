import os
import logging
from typing import Optional

import redis
from pymongo import MongoClient
from pymongo.database import Database

_mongo_client: Optional[MongoClient] = None
_mongo_db: Optional[Database] = None
_redis_client: Optional[redis.Redis] = None


# ==================================
# 🟢 MongoDB
# ==================================
def get_mongo_db() -> Database:
    """Returns the shared database, creating the client on first use."""
    global _mongo_client, _mongo_db
    if _mongo_db is None:
        uri = os.getenv("MONGO_URI", "mongodb://localhost:27017")
        db_name = os.getenv("MONGO_DATABASE", "coursehub")
        _mongo_client = MongoClient(uri, serverSelectionTimeoutMS=5000)
        _mongo_db = _mongo_client[db_name]
    return _mongo_db


def set_mongo_db(db: Database) -> None:
    """Replaces the shared database handle (tests inject mongomock here)."""
    global _mongo_db
    _mongo_db = db


def probe_mongo() -> Optional[Database]:
    """Pings MongoDB using the URI and database name from the environment."""
    try:
        db = get_mongo_db()
        db.client.admin.command("ping")
        logging.info(f"🟢 Mongo connected to database: {db.name}")
        return db
    except Exception as e:
        logging.error(f"❌ Error connecting to MongoDB: {e}")
        return None


# ==================================
# ⚡ Redis
# ==================================
def get_redis_client() -> redis.Redis:
    global _redis_client
    if _redis_client is None:
        uri = os.getenv("REDIS_URI", "redis://localhost:6379/0")
        _redis_client = redis.from_url(uri)
    return _redis_client


def set_redis_client(client: redis.Redis) -> None:
    global _redis_client
    _redis_client = client


def probe_redis() -> Optional[redis.Redis]:
    try:
        r = get_redis_client()
        r.ping()
        logging.info("⚡ Redis connected.")
        return r
    except Exception as e:
        logging.error(f"❌ Error connecting to Redis: {e}")
        return None


def init_connections() -> None:
    """Runs every connection probe once at startup."""
    logging.info("--- Probing datastore connections ---")
    probe_mongo()
    probe_redis()


def close_connections() -> None:
    global _mongo_client, _mongo_db, _redis_client
    if _mongo_client is not None:
        _mongo_client.close()
        logging.info("MongoDB connection closed.")
    _mongo_client = None
    _mongo_db = None
    _redis_client = None


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_connections()
