#!/usr/bin/env python3
"""
Database Index Seeding Script

Creates the MongoDB indexes the admin workflow relies on, for deployments
where the application user is not allowed to create indexes at startup.

Usage:
    python -m admin_workflow.scripts.db_seed_indices

Environment:
    MONGO_DB_URI   connection string including the database name
    LIST_INDEXES   "true" to print the existing indexes first
"""

import os
import logging

from pymongo import ASCENDING, IndexModel, MongoClient
from pymongo.errors import PyMongoError

from admin_workflow.config import settings
from admin_workflow.models.db.admin_request import AdminRequest

logger = logging.getLogger(__name__)
# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

USER_INDEXES = [
    IndexModel([("email", ASCENDING)], name="unique_user_email", unique=True),
]


class DatabaseIndexSeeder:
    """Handles creation of the admin workflow's database indexes."""

    def __init__(self, connection_string: str):
        self.client = MongoClient(connection_string)
        self.db = self.client.get_default_database()

    def _create_indexes(self, collection_name: str, indexes: list[IndexModel]):
        collection = self.db[collection_name]
        for index in indexes:
            name = index.document["name"]
            try:
                collection.create_indexes([index])
                logger.info(f"Created index: {collection_name}.{name}")
            except PyMongoError as e:
                logger.error(f"Failed to create index {collection_name}.{name}: {e}")

    def create_admin_request_indexes(self):
        """Create indexes for admin_requests collection, as declared on the model."""
        self._create_indexes(AdminRequest.Settings.name, AdminRequest.Settings.indexes)

    def create_user_indexes(self):
        """Create indexes for users collection."""
        self._create_indexes("users", USER_INDEXES)

    def seed_all_indexes(self):
        try:
            logger.info("Creating indexes...")
            self.create_admin_request_indexes()
            self.create_user_indexes()
            logger.info("Database index seeding completed successfully!")
        finally:
            self.client.close()

    def list_existing_indexes(self):
        """List all existing indexes in the admin workflow collections."""
        logger.info("Listing existing indexes...")
        for collection_name in [AdminRequest.Settings.name, "users"]:
            try:
                indexes = self.db[collection_name].index_information()
                logger.info(f"\n{collection_name} collection indexes:")
                for index_name, index_info in indexes.items():
                    logger.info(f"  - {index_name}: {index_info}")
            except PyMongoError as e:
                logger.warning(f"Could not list indexes for {collection_name}: {e}")


def main():
    """Main execution function."""
    connection_string = settings.MONGO_DB_URI
    logger.info(
        f"Connection string: {connection_string.replace(connection_string.split('@')[-1], '***') if '@' in connection_string else connection_string}"
    )

    seeder = DatabaseIndexSeeder(connection_string)
    try:
        if os.getenv("LIST_INDEXES", "false").lower() == "true":
            seeder.list_existing_indexes()
        seeder.seed_all_indexes()
    except KeyboardInterrupt:
        logger.info("Index seeding interrupted by user")


if __name__ == "__main__":
    main()
