import logging
from datetime import timezone

from beanie import init_beanie
from bson.codec_options import CodecOptions
from pymongo import AsyncMongoClient

from admin_workflow.config import settings
from admin_workflow.models.db.admin_request import AdminRequest
from admin_workflow.models.db.user import User

logger = logging.getLogger(__name__)


async def init_db() -> AsyncMongoClient:
    """
    Connect to MongoDB and register the document models with Beanie.

    Indexes declared on the models (including the one-pending-request-per-user
    index) are created here if missing.

    Returns:
        AsyncMongoClient: The client, to be closed with `close_db` on shutdown.
    """
    # Configure codec options for timezone awareness
    codec_options = CodecOptions(tz_aware=True, tzinfo=timezone.utc)

    client = AsyncMongoClient(
        settings.MONGO_DB_URI,
        maxPoolSize=settings.MONGO_MAX_POOL_SIZE,
        minPoolSize=settings.MONGO_MIN_POOL_SIZE,
        serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
        connectTimeoutMS=settings.MONGO_CONNECT_TIMEOUT_MS,
        socketTimeoutMS=settings.MONGO_SOCKET_TIMEOUT_MS,
        retryWrites=True,
        retryReads=True,
        w="majority",
    )

    # Get database with timezone-aware codec options
    database = client.get_default_database().with_options(codec_options=codec_options)

    logger.info("Initializing Beanie connection to MongoDB...")
    if "localhost" in settings.MONGO_DB_URI:
        logger.warning("Using local MongoDB instance.")

    await init_beanie(
        database=database,
        document_models=[
            AdminRequest,
            User,
        ],
    )
    return client


async def close_db(client: AsyncMongoClient) -> None:
    await client.close()
    logger.info("MongoDB connection closed")
