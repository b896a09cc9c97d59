import logging

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from quizhub.core.config import Settings
from quizhub.models.attempt import Attempt
from quizhub.models.quiz import Quiz
from quizhub.models.user import User

logger = logging.getLogger(__name__)

DOCUMENT_MODELS = [User, Quiz, Attempt]

client = None
db = None


async def init_db(settings: Settings, mongo_client=None):
    """Bind Beanie to the configured database; a pre-built client may be passed in."""
    global client, db
    client = mongo_client or AsyncIOMotorClient(settings.mongodb_uri)
    db = client.get_database(settings.mongodb_database)
    await init_beanie(database=db, document_models=DOCUMENT_MODELS)
    logger.info("Database initialised: %s", settings.mongodb_database)
    return db


async def ping() -> bool:
    if db is None:
        return False
    try:
        await db.command("ping")
    except Exception as exc:
        logger.warning("Database ping failed: %s", exc)
        return False
    return True


def close_db() -> None:
    global client, db
    if client is not None:
        client.close()
    client = None
    db = None
