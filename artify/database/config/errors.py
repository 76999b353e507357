"""
Database Configuration Errors
=============================

Exception hierarchy raised by the configuration layer.

Building the configuration never raises for missing values. These errors come
from the explicit steps around it:

- ``UnknownEnvironmentError``: a deployment environment name that is not one of
  ``development``, ``test`` or ``production``.
- ``MissingProductionCredentialError``: raised by the optional eager validation
  of the production record.
- ``UnsupportedDialectError``: a dialect the connection adapter has no driver for.
"""

from typing import Iterable, Tuple


class DatabaseConfigError(Exception):
    """Base class for all database configuration errors."""


class UnknownEnvironmentError(DatabaseConfigError, ValueError):
    """Raised when a deployment environment name cannot be parsed."""

    def __init__(self, value):
        self.value = value
        super().__init__(
            f"Unknown deployment environment {value!r} "
            "(expected one of: development, test, production)"
        )


class MissingProductionCredentialError(DatabaseConfigError):
    """
    Raised when the production record lacks required connection values.

    Attributes
    ----------
    missing : tuple of str
        Names of the environment variables that are unset or empty.
    """

    def __init__(self, missing: Iterable[str]):
        self.missing: Tuple[str, ...] = tuple(missing)
        super().__init__(
            "Missing production database settings: " + ", ".join(self.missing)
        )


class UnsupportedDialectError(DatabaseConfigError, ValueError):
    """Raised when no SQLAlchemy driver is registered for a dialect."""

    def __init__(self, dialect: str):
        self.dialect = dialect
        super().__init__(f"Unsupported database dialect: {dialect!r}")
