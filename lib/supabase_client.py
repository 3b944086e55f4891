# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase table operations.
# It implements the singleton pattern to reuse a single client connection
# and exposes the handful of table operations the services need:
# - select by equality (optionally "at most one", optionally excluding a value)
# - insert, update, delete scoped to a table and column predicates
#
# The wrapper is the sole data-access boundary. Services never talk to
# PostgREST any other way.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   profile = SupabaseClient.fetch_one("profiles", eq={"slug": "sao-joao"})
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings
from lib.utils import ApplicationError

# Set up logging for this module
logger = logging.getLogger(__name__)

# Postgres error code for unique constraint violations
UNIQUE_VIOLATION = "23505"


class SupabaseClientError(ApplicationError):
    """
    Error during Supabase operations.

    Keeps the Postgres error code (when PostgREST reports one) in
    `pg_code` so callers can tell constraint violations apart.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
        pg_code: str | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)
        self.pg_code = pg_code

    @property
    def is_unique_violation(self) -> bool:
        return self.pg_code == UNIQUE_VIOLATION


def _pg_code(error: Exception) -> str | None:
    """Pull the Postgres error code out of a postgrest APIError, if any."""
    code = getattr(error, "code", None)
    return str(code) if code else None


class SupabaseClient:
    """
    Typed wrapper for Supabase table operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        # Fetch at most one profile holding a slug, ignoring my own row
        row = SupabaseClient.fetch_one(
            "profiles",
            columns="slug",
            eq={"slug": "sao-joao"},
            neq={"user_id": user_id},
        )
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        Ownership checks therefore happen in the services.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def _normalize_uuid(cls, uuid_value: str | UUID) -> str:
        """Convert UUID to string for queries."""
        return str(uuid_value) if isinstance(uuid_value, UUID) else uuid_value

    @classmethod
    def _apply_filters(cls, query, eq: dict[str, Any] | None, neq: dict[str, Any] | None):
        for column, value in (eq or {}).items():
            query = query.eq(column, cls._normalize_uuid(value))
        for column, value in (neq or {}).items():
            query = query.neq(column, cls._normalize_uuid(value))
        return query

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_one(
        cls,
        table: str,
        columns: str = "*",
        eq: dict[str, Any] | None = None,
        neq: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        """
        Fetch at most one row matching the equality predicates.

        Args:
            table: Table (or view) name
            columns: PostgREST select string
            eq: column -> value that must match
            neq: column -> value that must NOT match

        Returns:
            The first matching row, or None if nothing matches

        Raises:
            SupabaseClientError: If the query fails
        """
        client = cls.get_client()

        try:
            query = cls._apply_filters(client.table(table).select(columns), eq, neq)
            response = query.limit(1).execute()
            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch from {table}: {e}",
                code="FETCH_FAILED",
                details={"table": table, "eq": eq or {}, "neq": neq or {}},
                pg_code=_pg_code(e),
            )

    @classmethod
    def fetch_all(
        cls,
        table: str,
        columns: str = "*",
        eq: dict[str, Any] | None = None,
        order: list[str] | None = None,
        gte: dict[str, Any] | None = None,
        lt: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch every row matching the predicates.

        Args:
            table: Table (or view) name
            columns: PostgREST select string (may embed related tables)
            eq: column -> value that must match
            order: columns to sort by, ascending, in priority order
            gte: column -> inclusive lower bound
            lt: column -> exclusive upper bound

        Raises:
            SupabaseClientError: If the query fails
        """
        client = cls.get_client()

        try:
            query = cls._apply_filters(client.table(table).select(columns), eq, None)
            for column, value in (gte or {}).items():
                query = query.gte(column, str(value))
            for column, value in (lt or {}).items():
                query = query.lt(column, str(value))
            for column in order or []:
                query = query.order(column)
            response = query.execute()
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to list {table}: {e}",
                code="FETCH_FAILED",
                details={"table": table, "eq": eq or {}},
                pg_code=_pg_code(e),
            )

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @classmethod
    def insert_rows(
        cls,
        table: str,
        rows: dict[str, Any] | list[dict[str, Any]],
    ) -> list[dict[str, Any]]:
        """
        Insert one or many rows.

        Returns:
            Inserted rows with generated columns (id, created_at, ...)

        Raises:
            SupabaseClientError: If the insert fails (pg_code keeps 23505 etc.)
        """
        client = cls.get_client()

        try:
            response = client.table(table).insert(rows).execute()
            inserted = response.data or []
            logger.debug(f"Inserted {len(inserted)} row(s) into {table}")
            return inserted

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                details={"table": table},
                pg_code=_pg_code(e),
            )

    @classmethod
    def update_rows(
        cls,
        table: str,
        values: dict[str, Any],
        eq: dict[str, Any],
    ) -> list[dict[str, Any]]:
        """
        Update rows matching the equality predicates.

        Raises:
            SupabaseClientError: If the update fails
        """
        client = cls.get_client()

        try:
            query = cls._apply_filters(client.table(table).update(values), eq, None)
            response = query.execute()
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update {table}: {e}",
                code="UPDATE_FAILED",
                details={"table": table, "eq": eq},
                pg_code=_pg_code(e),
            )

    @classmethod
    def delete_rows(cls, table: str, eq: dict[str, Any]) -> list[dict[str, Any]]:
        """
        Delete rows matching the equality predicates.

        An empty predicate set is refused so a bad call can never wipe a table.

        Raises:
            SupabaseClientError: If the delete fails
        """
        if not eq:
            raise SupabaseClientError(
                message=f"Refusing to delete from {table} without a filter",
                code="DELETE_WITHOUT_FILTER",
            )

        client = cls.get_client()

        try:
            query = cls._apply_filters(client.table(table).delete(), eq, None)
            response = query.execute()
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete from {table}: {e}",
                code="DELETE_FAILED",
                details={"table": table, "eq": eq},
                pg_code=_pg_code(e),
            )
