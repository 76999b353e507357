"""
Configuration — Database Connection Settings (env / .env)
=========================================================

Purpose
-------
Builds the connection settings of the relational datastore for every
deployment environment (``development``, ``test``, ``production``) from the
``DB_*`` environment variables:
- Pydantic v2 ``BaseSettings`` (``pydantic-settings``) reads the raw values from
  the process environment and an optional ``.env`` file.
- A single resolution function applies the hardcoded defaults, except in
  production where every value is taken verbatim.
- The result is an immutable mapping ``EnvironmentName -> ConnectionSettings``.

Load Order & Behavior
---------------------
- Real environment variables win over ``.env`` entries.
- No variable is required: building the configuration never fails. A missing
  production credential surfaces when the database is first used, or earlier
  if the caller opts into ``validate_production``.
- Production requires TLS but does not verify the server certificate. This is
  a deliberate trade-off for managed databases with self-signed certificates.

Usage
-----
from artify.database.config.config import EnvironmentConfigProvider, active_environment

provider = EnvironmentConfigProvider()
settings = provider.settings_for(active_environment())
"""

import logging
import os
import threading
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from artify.database.config.errors import (
    MissingProductionCredentialError,
    UnknownEnvironmentError,
)

logger = logging.getLogger(__name__)

DIALECT = "postgres"
DEFAULT_USERNAME = "postgres"
DEFAULT_PASSWORD = "password"
DEFAULT_DATABASE_NAME = "artify_db"
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 5432
TEST_DATABASE_SUFFIX = "_test"
ACTIVE_ENVIRONMENT_VARIABLE = "APP_ENV"


class EnvironmentName(str, Enum):
    """Deployment environment selecting the active connection settings."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"

    @property
    def applies_defaults(self) -> bool:
        """Whether unset variables fall back to the hardcoded defaults."""
        return self is not EnvironmentName.PRODUCTION

    @classmethod
    def parse(cls, value: Union["EnvironmentName", str]) -> "EnvironmentName":
        """
        Convert a member or its string value into an ``EnvironmentName``.

        Matching ignores case and surrounding whitespace.

        Raises
        ------
        UnknownEnvironmentError
            If ``value`` names no deployment environment.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnknownEnvironmentError(value)


class LoggingPolicy(str, Enum):
    """How the logging subsystem treats SQL statements."""

    VERBOSE = "verbose"
    SILENT = "silent"


class TlsOptions(BaseModel):
    """Transport security of a connection."""

    model_config = ConfigDict(frozen=True)

    require: bool = Field(True, description="Whether the connection must use TLS.")
    reject_unauthorized: bool = Field(
        False, description="Whether the server certificate must be verified."
    )


class ConnectionSettings(BaseModel):
    """
    Connection parameters of one deployment environment.

    Attributes
    ----------
    username, password : str or None
        Database credentials. ``None`` only in production when the variable is unset.
    database_name : str or None
        Name of the database to connect to.
    host : str or None
        Hostname or IP address of the database server.
    port : int or None
        TCP port of the database server.
    dialect : str
        Database engine family, always ``"postgres"``.
    logging_policy : LoggingPolicy
        ``VERBOSE`` logs every statement, ``SILENT`` logs none.
    tls_options : TlsOptions or None
        Present only in production.
    """

    model_config = ConfigDict(frozen=True)

    username: Optional[str] = None
    password: Optional[str] = None
    database_name: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None
    dialect: str = DIALECT
    logging_policy: LoggingPolicy = LoggingPolicy.SILENT
    tls_options: Optional[TlsOptions] = None


DatabaseConfig = Mapping[EnvironmentName, ConnectionSettings]
"""Read-only mapping of every deployment environment to its settings."""


class DatabaseEnvironment(BaseSettings):
    """
    Raw snapshot of the ``DB_*`` environment variables.

    Every field is optional and kept as the string found in the environment,
    so reading the snapshot never fails.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    DB_USERNAME: Optional[str] = Field(None, description="Database username credential.")
    DB_PASSWORD: Optional[str] = Field(None, description="Database password credential.")
    DB_NAME: Optional[str] = Field(None, description="Name of the application's database.")
    DB_HOST: Optional[str] = Field(None, description="Hostname or IP address of the database server.")
    DB_PORT: Optional[str] = Field(None, description="TCP port of the database server.")


def resolve(raw: Optional[str], default, environment: EnvironmentName):
    """
    Resolve one environment value for a deployment environment.

    Unset or empty values fall back to ``default`` unless the environment opts
    out of defaults (production), in which case ``raw`` is returned unchanged.
    """
    if environment.applies_defaults and not raw:
        return default
    return raw


def resolve_port(raw: Optional[str], environment: EnvironmentName) -> Optional[int]:
    """Parse a port number, falling back to ``DEFAULT_PORT`` outside production."""
    port = None
    if raw is not None:
        text = raw.strip()
        if text.isascii() and text.isdigit():
            port = int(text)
    if port is not None and not 0 < port < 65536:
        port = None
    if port is None and environment.applies_defaults:
        return DEFAULT_PORT
    return port


def build_connection_settings(
    snapshot: DatabaseEnvironment, environment: EnvironmentName
) -> ConnectionSettings:
    """Build the settings record of one environment from a snapshot."""
    database_name = resolve(snapshot.DB_NAME, DEFAULT_DATABASE_NAME, environment)
    if environment is EnvironmentName.TEST:
        # fallback first, then the suffix
        database_name = f"{database_name}{TEST_DATABASE_SUFFIX}"

    if environment is EnvironmentName.DEVELOPMENT:
        logging_policy = LoggingPolicy.VERBOSE
    else:
        logging_policy = LoggingPolicy.SILENT

    return ConnectionSettings(
        username=resolve(snapshot.DB_USERNAME, DEFAULT_USERNAME, environment),
        password=resolve(snapshot.DB_PASSWORD, DEFAULT_PASSWORD, environment),
        database_name=database_name,
        host=resolve(snapshot.DB_HOST, DEFAULT_HOST, environment),
        port=resolve_port(snapshot.DB_PORT, environment),
        dialect=DIALECT,
        logging_policy=logging_policy,
        tls_options=TlsOptions() if environment is EnvironmentName.PRODUCTION else None,
    )


def load_database_config(env_file: Optional[Union[str, os.PathLike]] = ".env") -> DatabaseConfig:
    """
    Build the configuration of every deployment environment.

    Parameters
    ----------
    env_file : str or PathLike, optional
        ``.env`` file consulted for variables missing from the process
        environment. ``None`` disables it.

    Returns
    -------
    Mapping[EnvironmentName, ConnectionSettings]
        Read-only mapping with exactly one record per environment.
    """
    snapshot = DatabaseEnvironment(_env_file=env_file)
    config = MappingProxyType(
        {environment: build_connection_settings(snapshot, environment) for environment in EnvironmentName}
    )
    logger.debug("Built database configuration for %d environments", len(config))
    return config


def validate_production(config: DatabaseConfig) -> ConnectionSettings:
    """
    Eagerly check that the production record is complete.

    Returns
    -------
    ConnectionSettings
        The production record.

    Raises
    ------
    MissingProductionCredentialError
        Naming every ``DB_*`` variable whose value is unset or empty.
    """
    production = config[EnvironmentName.PRODUCTION]
    fields = (
        ("DB_USERNAME", production.username),
        ("DB_PASSWORD", production.password),
        ("DB_NAME", production.database_name),
        ("DB_HOST", production.host),
        ("DB_PORT", production.port),
    )
    missing = [variable for variable, value in fields if value is None or value == ""]
    if missing:
        logger.error("Production database settings incomplete: %s", ", ".join(missing))
        raise MissingProductionCredentialError(missing)
    return production


def active_environment(value: Optional[str] = None) -> EnvironmentName:
    """
    Determine the deployment environment a process runs in.

    ``value`` wins when given; otherwise ``APP_ENV`` is read from the process
    environment. Defaults to ``development``.
    """
    if value is None:
        value = os.environ.get(ACTIVE_ENVIRONMENT_VARIABLE) or EnvironmentName.DEVELOPMENT.value
    return EnvironmentName.parse(value)


class EnvironmentConfigProvider:
    """
    Builds the database configuration once and hands out read-only records.

    The first call to ``get_config`` reads the environment; later calls return
    the same mapping. Construction is guarded so concurrent first access builds
    it at most once.
    """

    def __init__(self, env_file: Optional[Union[str, os.PathLike]] = ".env"):
        self._env_file = env_file
        self._config: Optional[DatabaseConfig] = None
        self._lock = threading.Lock()

    def get_config(self) -> DatabaseConfig:
        """Return the mapping of every deployment environment to its settings."""
        if self._config is None:
            with self._lock:
                if self._config is None:
                    self._config = load_database_config(self._env_file)
        return self._config

    def settings_for(self, environment: Union[EnvironmentName, str]) -> ConnectionSettings:
        """Return the settings record of one deployment environment."""
        return self.get_config()[EnvironmentName.parse(environment)]

    def validate_production(self) -> ConnectionSettings:
        """Raise ``MissingProductionCredentialError`` if the production record is incomplete."""
        return validate_production(self.get_config())
