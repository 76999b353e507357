"""
The `config` package turns environment variables into database connection settings and hands them to SQLAlchemy.

Contents:
    - config: Configuration layer - per-environment connection settings (development, test, production) resolved from `DB_*` environment variables (with .env support) into an immutable mapping
    - connection_engine: Database layer - SQLAlchemy bootstrap that builds the connection URL, TLS connect arguments and statement logging of one settings record and creates the Engine
    - errors: Exceptions raised by environment parsing, eager production validation and the connection adapter

Non-production environments always get a usable default configuration; production takes every value verbatim and fails at first use when incomplete.
"""
