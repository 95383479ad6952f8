from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_mapping(cls, db_config: Mapping[str, Any]) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "school_payroll")),
        )


class DatabaseConnection:
    """Connection factory shared by all MySQL repositories.

    Note: Connections are short-lived, one per repository operation.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self, *, with_database: bool = True):
        params = {
            "host": self._config.host,
            "port": int(self._config.port),
            "user": self._config.user,
            "password": self._config.password,
        }
        if with_database:
            params["database"] = self._config.database
        return mysql.connector.connect(**params)
