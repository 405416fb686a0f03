"""
MongoDB Connection
==================

Process-scoped MongoDB connection manager.

Lifecycle:
- connect(): lazily creates the client and verifies it with a server round
  trip. Concurrent callers share one in-flight attempt. A transient
  connectivity failure (typically a paused Atlas cluster) is retried once
  after a fixed delay.
- close(): tears the client down; the next connect() starts over.
"""
import asyncio
import logging
from typing import Any, Callable, Dict, Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from app.core.config import Settings, get_settings
from app.core.errors import DatabaseConnectionError, DatabaseError

logger = logging.getLogger(__name__)

# Matched against both the exception class name and its message
CONNECTION_ERROR_PATTERNS = (
    "ECONNREFUSED",
    "ENOTFOUND",
    "ETIMEDOUT",
    "MongoServerSelectionError",
    "MongoNetworkError",
    "MongoTimeoutError",
    "ServerSelectionTimeoutError",
    "NetworkTimeout",
    "AutoReconnect",
    "ConnectionFailure",
    "Server selection timed out",
    "connection timed out",
    "Connection refused",
    "timed out",
)


def is_connection_error(error: BaseException) -> bool:
    """
    Check whether an error looks like a transient connectivity failure.

    Args:
        error: Exception raised by the driver

    Returns:
        True if the error name or message matches a known connectivity pattern
    """
    names = [cls.__name__ for cls in type(error).__mro__]
    message = str(error)
    return any(
        pattern in message or any(pattern in name for name in names)
        for pattern in CONNECTION_ERROR_PATTERNS
    )


class MongoConnectionManager:
    """
    Owns the single MongoClient of the process.

    Args:
        settings: Application settings (defaults to get_settings())
        client_factory: Callable building a client from (uri, **options);
            defaults to pymongo.MongoClient
        retry_delay_seconds: Override for the wake-up wait before the retry
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client_factory: Callable[..., Any] = MongoClient,
        retry_delay_seconds: Optional[float] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._client_factory = client_factory
        self._retry_delay_seconds = (
            self._settings.mongo_retry_delay_seconds
            if retry_delay_seconds is None
            else retry_delay_seconds
        )
        self._client: Optional[Any] = None
        self._database: Optional[Database] = None
        self._connecting: Optional["asyncio.Task[Database]"] = None

    @property
    def database_name(self) -> str:
        return self._settings.mongo_database_name

    def _client_options(self) -> Dict[str, Any]:
        return {
            "maxPoolSize": self._settings.mongo_max_pool_size,
            "serverSelectionTimeoutMS": self._settings.mongo_server_selection_timeout_ms,
            "socketTimeoutMS": 45000,
            "connectTimeoutMS": 30000,
            "maxIdleTimeMS": 10000,
            "retryWrites": True,
            "retryReads": True,
            "tz_aware": True,
        }

    def _open(self) -> Any:
        """Create a client and force server selection. Blocking."""
        client = self._client_factory(self._settings.require_mongodb_uri(), **self._client_options())
        try:
            client.server_info()
        except Exception:
            client.close()
            raise
        return client

    async def _connect_with_retry(self) -> Database:
        loop = asyncio.get_running_loop()
        try:
            client = await loop.run_in_executor(None, self._open)
        except PyMongoError as error:
            if not is_connection_error(error):
                raise DatabaseError(f"Failed to connect to MongoDB: {error}", error) from error

            logger.warning(
                "MongoDB connection failed (%s). The cluster may be paused; "
                "waiting %.0f seconds before retrying",
                error,
                self._retry_delay_seconds,
            )
            await asyncio.sleep(self._retry_delay_seconds)
            logger.info("Retrying MongoDB connection")
            try:
                client = await loop.run_in_executor(None, self._open)
            except PyMongoError as retry_error:
                logger.error("MongoDB connection failed after retry: %s", retry_error)
                raise DatabaseConnectionError(original_error=retry_error) from retry_error

        self._client = client
        self._database = client[self.database_name]
        logger.info("Connected to MongoDB database '%s'", self.database_name)
        return self._database

    async def connect(self) -> Database:
        """
        Get the connected database, establishing the connection if needed.

        Returns:
            pymongo Database handle

        Raises:
            ConfigurationError: If MONGODB_URI is not configured
            DatabaseConnectionError: If MongoDB cannot be reached
        """
        if self._database is not None:
            return self._database

        if self._connecting is None:
            logger.info("Connecting to MongoDB...")
            self._connecting = asyncio.ensure_future(self._connect_with_retry())
        else:
            logger.debug("Connection in progress, waiting")

        task = self._connecting
        try:
            return await asyncio.shield(task)
        finally:
            if task.done() and self._connecting is task:
                self._connecting = None

    def is_connected(self) -> bool:
        return self._database is not None

    def get_database(self) -> Database:
        """
        Get the MongoDB database instance.

        Raises:
            DatabaseConnectionError: If connect() has not completed
        """
        if self._database is None:
            raise DatabaseConnectionError("MongoDB is not connected")
        return self._database

    def get_collection(self, collection_name: str) -> Collection:
        """
        Get a MongoDB collection.

        Args:
            collection_name: Name of the collection

        Returns:
            MongoDB Collection object
        """
        return self.get_database()[collection_name]

    def connection_info(self) -> Dict[str, Any]:
        """Connection status and details for the health endpoint."""
        address = None
        if self._client is not None:
            try:
                address = self._client.address
            except Exception:
                logger.debug("Could not resolve MongoDB address", exc_info=True)
        return {
            "connected": self.is_connected(),
            "database": self.database_name,
            "address": f"{address[0]}:{address[1]}" if address else None,
        }

    async def close(self) -> None:
        """Close MongoDB connection. Idempotent."""
        if self._connecting is not None:
            self._connecting.cancel()
            self._connecting = None
        if self._client is not None:
            self._client.close()
            logger.info("MongoDB connection closed")
        self._client = None
        self._database = None


# Global connection manager instance (singleton pattern)
_connection: Optional[MongoConnectionManager] = None


def get_mongo_connection() -> MongoConnectionManager:
    """Get singleton MongoDB connection manager."""
    global _connection
    if _connection is None:
        _connection = MongoConnectionManager()
    return _connection


def set_mongo_connection(connection: Optional[MongoConnectionManager]) -> None:
    """Replace the process connection manager (used by tests and teardown)."""
    global _connection
    _connection = connection
