"""
Connection Engine (SQLAlchemy)

Purpose
-------
Hands one ``ConnectionSettings`` record to SQLAlchemy:
- Builds the connection URL with ``URL.create(...)`` so credentials never go
  through string formatting.
- Translates the TLS options into libpq ``sslmode`` connect arguments.
- Interprets the logging policy per Engine through ``echo``, so engines of
  different environments in one process keep their own statement logging.
- Creates the Engine (connection pool + SQL execution entry point).

Notes
-----
- ``create_engine`` does not open a connection. Missing production credentials
  therefore surface at first use of the engine, not here.
- Pool size, timeouts and other engine options are passed through untouched.
"""

import logging
from typing import Any, Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine

from artify.database.config.config import ConnectionSettings, LoggingPolicy
from artify.database.config.errors import UnsupportedDialectError

logger = logging.getLogger(__name__)

DIALECT_DRIVERS = {
    "postgres": "postgresql+psycopg2",
}
"""SQLAlchemy driver name for each supported dialect."""


def build_connection_url(settings: ConnectionSettings) -> URL:
    """Construct the SQLAlchemy connection URL of a settings record."""
    try:
        drivername = DIALECT_DRIVERS[settings.dialect]
    except KeyError:
        raise UnsupportedDialectError(settings.dialect) from None

    return URL.create(
        drivername=drivername,
        username=settings.username,
        password=settings.password,
        host=settings.host,
        port=settings.port,
        database=settings.database_name,
    )


def build_connect_args(settings: ConnectionSettings) -> Dict[str, Any]:
    """
    Translate the TLS options into DBAPI connect arguments.

    ``reject_unauthorized=False`` maps to ``sslmode=require``: traffic is
    encrypted but the server certificate is not checked.
    """
    tls = settings.tls_options
    if tls is None or not tls.require:
        return {}
    if tls.reject_unauthorized:
        return {"sslmode": "verify-full"}
    return {"sslmode": "require"}


def engine_echo(policy: LoggingPolicy) -> bool:
    """``echo`` flag of an Engine: statements are logged only when verbose."""
    return policy is LoggingPolicy.VERBOSE


def create_connection_engine(settings: ConnectionSettings, **engine_kwargs) -> Engine:
    """
    Create the SQLAlchemy Engine for a settings record.

    Parameters
    ----------
    settings : ConnectionSettings
        The record of the active deployment environment.
    **engine_kwargs
        Extra ``create_engine`` options (pool size, timeouts, ...). They
        override the defaults set here.

    Returns
    -------
    sqlalchemy.engine.Engine
    """
    url = build_connection_url(settings)
    options: Dict[str, Any] = {
        "connect_args": build_connect_args(settings),
        "echo": engine_echo(settings.logging_policy),
        "pool_pre_ping": True,
    }
    options.update(engine_kwargs)

    logger.info(
        "Creating database engine for %s",
        url.render_as_string(hide_password=True),
    )
    return create_engine(url, **options)
