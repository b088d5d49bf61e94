from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_mapping(cls, db_config: Mapping) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "shift_roster")),
        )


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per operation; every `db_cursor`
    block is one transaction.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self, *, with_database: bool = True):
        kwargs = dict(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            use_pure=True,
        )
        if with_database:
            kwargs["database"] = self._config.database
        return mysql.connector.connect(**kwargs)
