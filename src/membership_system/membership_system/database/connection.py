from __future__ import annotations

import logging
from dataclasses import dataclass

import mysql.connector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
        )


class DatabaseConnection:
    """DB connection factory owned by the application container.

    One instance is built at startup and handed to every repository. It opens a
    short-lived connection per operation; ``close()`` is called at shutdown and
    any later ``connect()`` fails loudly instead of reconnecting.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def connect(self):
        if self._closed:
            raise RuntimeError("DatabaseConnection is closed")
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )

    def close(self) -> None:
        if not self._closed:
            logger.info("Closing database connection factory for %s", self._config.database)
        self._closed = True
