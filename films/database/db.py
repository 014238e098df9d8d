from contextlib import contextmanager
from dataclasses import dataclass
from pymongo import MongoClient
from pymongo.errors import PyMongoError
import time
import logging
import os

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DATABASE_NAME = "cinema"
COLLECTION_NAME = "films"


@dataclass(frozen=True)
class DatabaseConfig:
    url: str
    database: str = DATABASE_NAME
    collection: str = COLLECTION_NAME
    connect_timeout_ms: int = 10000

    @classmethod
    def from_env(cls) -> "DatabaseConfig":
        return cls(
            url=os.getenv("MONGO_URL", "mongodb://mongo:27017"),
            connect_timeout_ms=int(os.getenv("MONGO_CONNECT_TIMEOUT_MS", "10000")),
        )


class ConnectionFactory:
    """Opens one short-lived MongoClient per unit of work.

    ``client_class`` is called as ``client_class(url, **options)`` and must
    return an object with the ``MongoClient`` interface used here.
    """

    def __init__(self, config: DatabaseConfig, client_class=MongoClient):
        self.config = config
        self._client_class = client_class

    @contextmanager
    def connect(self):
        client = self._client_class(
            self.config.url,
            connectTimeoutMS=self.config.connect_timeout_ms,
        )
        try:
            yield client
        finally:
            client.close()

    @contextmanager
    def films(self):
        with self.connect() as client:
            yield client[self.config.database][self.config.collection]

    def ping(self):
        with self.connect() as client:
            client.admin.command("ping")


_factory: ConnectionFactory | None = None


def get_connection_factory() -> ConnectionFactory:
    global _factory
    if _factory is None:
        _factory = ConnectionFactory(DatabaseConfig.from_env())
    return _factory


def wait_for_db(factory: ConnectionFactory | None = None):
    factory = factory or get_connection_factory()
    max_retries = int(os.getenv("DB_WAIT_RETRIES", "10"))
    retry_delay = float(os.getenv("DB_WAIT_DELAY", "3"))

    for attempt in range(1, max_retries + 1):
        try:
            logger.info(f"Attempt {attempt}/{max_retries}: Connecting to DB...")
            factory.ping()
            logger.info(f"Connected to MongoDB: {factory.config.database}.{factory.config.collection}")
            return
        except PyMongoError as e:
            logger.error(f"Connection failed: {type(e).__name__}: {str(e)}")
            if attempt == max_retries:
                raise RuntimeError(f"Failed to connect to DB after {max_retries} attempts")
            time.sleep(retry_delay)
