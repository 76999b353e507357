"""Tests for the SQLAlchemy connection adapter."""

import logging

import pytest

from artify.database.config import connection_engine
from artify.database.config.config import (
    ConnectionSettings,
    EnvironmentName,
    LoggingPolicy,
    TlsOptions,
    load_database_config,
)
from artify.database.config.connection_engine import (
    build_connect_args,
    build_connection_url,
    create_connection_engine,
    engine_echo,
)
from artify.database.config.errors import UnsupportedDialectError


@pytest.fixture
def config(production_env):
    return load_database_config(env_file=None)


class TestBuildConnectionUrl:
    """Tests for build_connection_url."""

    def test_production(self, config):
        url = build_connection_url(config[EnvironmentName.PRODUCTION])

        assert url.drivername == "postgresql+psycopg2"
        assert url.username == "artify"
        assert url.password == "s3cret"
        assert url.host == "db.internal"
        assert url.port == 6543
        assert url.database == "gallery"

    def test_test_database(self, config):
        url = build_connection_url(config[EnvironmentName.TEST])

        assert url.database == "gallery_test"

    def test_password_hidden(self, config):
        url = build_connection_url(config[EnvironmentName.PRODUCTION])

        assert "s3cret" not in url.render_as_string(hide_password=True)

    def test_missing_values_omitted(self):
        url = build_connection_url(ConnectionSettings())

        assert url.username is None
        assert url.host is None
        assert url.port is None

    def test_unsupported_dialect(self):
        with pytest.raises(UnsupportedDialectError) as excinfo:
            build_connection_url(ConnectionSettings(dialect="oracle"))

        assert excinfo.value.dialect == "oracle"


class TestBuildConnectArgs:
    """Tests for build_connect_args."""

    def test_production_requires_tls_without_verification(self, config):
        assert build_connect_args(config[EnvironmentName.PRODUCTION]) == {"sslmode": "require"}

    def test_no_tls_outside_production(self, config):
        assert build_connect_args(config[EnvironmentName.DEVELOPMENT]) == {}
        assert build_connect_args(config[EnvironmentName.TEST]) == {}

    def test_verified_tls(self):
        settings = ConnectionSettings(tls_options=TlsOptions(reject_unauthorized=True))

        assert build_connect_args(settings) == {"sslmode": "verify-full"}

    def test_tls_not_required(self):
        settings = ConnectionSettings(tls_options=TlsOptions(require=False))

        assert build_connect_args(settings) == {}


class TestEngineEcho:
    """Tests for engine_echo."""

    def test_verbose(self):
        assert engine_echo(LoggingPolicy.VERBOSE) is True

    def test_silent(self):
        assert engine_echo(LoggingPolicy.SILENT) is False


class TestCreateConnectionEngine:
    """Tests for create_connection_engine."""

    @pytest.fixture
    def calls(self, monkeypatch):
        calls = []

        def fake_create_engine(url, **kwargs):
            calls.append((url, kwargs))
            return "engine"

        monkeypatch.setattr(connection_engine, "create_engine", fake_create_engine)
        return calls

    def test_passes_settings(self, config, calls):
        engine = create_connection_engine(config[EnvironmentName.PRODUCTION])

        assert engine == "engine"
        url, kwargs = calls[0]
        assert url.host == "db.internal"
        assert kwargs == {
            "connect_args": {"sslmode": "require"},
            "echo": False,
            "pool_pre_ping": True,
        }

    def test_development_logs_statements(self, config, calls):
        create_connection_engine(config[EnvironmentName.DEVELOPMENT])

        _, kwargs = calls[0]
        assert kwargs["echo"] is True

    def test_engine_kwargs_override(self, config, calls):
        create_connection_engine(
            config[EnvironmentName.TEST], pool_size=2, pool_pre_ping=False
        )

        _, kwargs = calls[0]
        assert kwargs["pool_size"] == 2
        assert kwargs["pool_pre_ping"] is False

    def test_real_engine_does_not_connect(self, clean_env):
        pytest.importorskip("psycopg2")
        production = load_database_config(env_file=None)[EnvironmentName.PRODUCTION]

        engine = create_connection_engine(production)

        assert engine.url.drivername == "postgresql+psycopg2"
        assert engine.url.host is None
        engine.dispose()

    def test_engines_keep_their_own_logging(self, config):
        pytest.importorskip("psycopg2")

        development = create_connection_engine(config[EnvironmentName.DEVELOPMENT])
        production = create_connection_engine(config[EnvironmentName.PRODUCTION])
        test = create_connection_engine(config[EnvironmentName.TEST])

        assert development.echo is True
        assert development.logger.isEnabledFor(logging.INFO)
        assert production.echo is False
        assert test.echo is False
        for engine in (development, production, test):
            engine.dispose()
