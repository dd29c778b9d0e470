"""Database health service backed by a lightweight connectivity probe."""

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from holdings_ledger.domain import HealthStatus

from .interfaces import DatabaseHealthPort


class SQLAlchemyDatabaseHealthService(DatabaseHealthPort):
    """Report reachability of the database that stores the investment ledger."""

    def __init__(self, engine: Engine):
        """Initialize health service with SQLAlchemy engine dependency.

        Args:
            engine: SQLAlchemy engine bound to the ledger database.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when engine is missing.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_connection_label(self) -> str:
        """Return the ledger database URL with the password masked.

        Returns:
            str: Rendered engine URL safe for health payloads.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return self._engine.url.render_as_string(hide_password=True)

    def db_check_health(self) -> HealthStatus:
        """Probe the ledger database with `SELECT 1`.

        Returns:
            HealthStatus: Healthy status when the probe succeeds.

        Raises:
            ConnectionError: Raised when the ledger database cannot be reached.
        """

        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as error:
            raise ConnectionError("ledger database connectivity check failed") from error
        return HealthStatus(status="ok", detail="ledger database reachable")
