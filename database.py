import logging

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient
from pydantic import EmailStr, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

USERS = "users"
PRODUCTS = "products"
REQUESTS = "requests"
WISHLISTS = "wishLists"
CARTS = "carts"


def connect(settings):
    client = AsyncIOMotorClient(settings.mongo_uri)
    return client, client[settings.db_name]


async def check_db_connection(client) -> bool:
    try:
        # The ping command is cheap and does not require auth
        await client.admin.command("ping")
        logger.info("Successfully connected to MongoDB!")
        return True
    except Exception as e:
        logger.error(f"Failed to connect to MongoDB: {e}")
        return False


async def ensure_indexes(db):
    # At most one user and one pending seller request per email
    await db[USERS].create_index("email", unique=True)
    await db[REQUESTS].create_index("email", unique=True)
    logger.info("Unique email indexes ensured on users and requests")


def get_db(request: Request):
    return request.app.state.db


# -------------------------------
# Lookup keys
# -------------------------------
_email_adapter = TypeAdapter(EmailStr)


def normalize_email(raw: str) -> str:
    """Normalize an email from a URL the way ``EmailStr`` bodies are stored."""
    try:
        return _email_adapter.validate_python(raw)
    except ValidationError:
        # Not an address, so it cannot match any stored record
        return raw


# -------------------------------
# Serialization helpers
# -------------------------------
def serialize(doc):
    if doc is None:
        return None
    doc = dict(doc)
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    return doc


async def fetch_all(collection, query=None):
    items = []
    cursor = collection.find(query or {})
    async for doc in cursor:
        items.append(serialize(doc))
    return items


def insert_result(result):
    return {"acknowledged": result.acknowledged, "insertedId": str(result.inserted_id)}


def update_result(result):
    upserted_id = result.upserted_id
    return {
        "acknowledged": result.acknowledged,
        "matchedCount": result.matched_count,
        "modifiedCount": result.modified_count,
        "upsertedCount": 0 if upserted_id is None else 1,
        "upsertedId": None if upserted_id is None else str(upserted_id),
    }


def delete_result(result):
    return {"acknowledged": result.acknowledged, "deletedCount": result.deleted_count}


if __name__ == "__main__":
    import asyncio

    from config import Settings

    logging.basicConfig(level=logging.INFO)
    mongo_client, _ = connect(Settings())
    asyncio.run(check_db_connection(mongo_client))
