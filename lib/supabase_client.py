# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides table-level helpers used by every service:
# - Single-row lookups (with PostgREST "no rows" mapped to None)
# - Filtered, ordered listings
# - Insert / upsert-with-conflict-target / update / delete
#
# Services never touch the query builder directly for routine reads and
# writes; they go through these helpers so errors are reported uniformly.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   row = SupabaseClient.fetch_one("app_070c516bb6_qr_codes", "code", "25011500001")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Iterable
from uuid import UUID

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST error code returned by .single() when no row matches
NO_ROWS_CODE = "PGRST116"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries a code and an optional suggestion so callers can report
    HOW to fix the problem, not just WHAT failed.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        rows = SupabaseClient.fetch_rows(
            settings.ATTENDANCE_TABLE,
            eq={"date": "2025-01-15"},
            order=[("worker_name", False)],
        )
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Returns:
            Client: Supabase client instance

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
    def _normalize_value(cls, value: Any) -> Any:
        """Convert UUIDs to strings for queries."""
        return str(value) if isinstance(value, UUID) else value

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_one(
        cls,
        table: str,
        column: str,
        value: Any,
        gte: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        """
        Fetch a single row where `column == value`.

        Args:
            table: Table name
            column: Column to match
            value: Value to match
            gte: Optional lower bounds, e.g. {"created_at": "2025-01-05T..."}

        Returns:
            Row dict, or None if no row matches

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        value = cls._normalize_value(value)

        try:
            query = client.table(table).select("*").eq(column, value)
            for key, bound in (gte or {}).items():
                query = query.gte(key, bound)

            response = query.single().execute()
            return response.data

        except Exception as e:
            # PostgREST code for "no rows returned"
            if NO_ROWS_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch row from {table}: {e}",
                code="FETCH_ROW_FAILED",
                suggestion=f"Check that the {table} table exists and is reachable",
                details={"table": table, column: value}
            )

    @classmethod
    def fetch_rows(
        cls,
        table: str,
        columns: str = "*",
        eq: dict[str, Any] | None = None,
        gte: dict[str, Any] | None = None,
        lte: dict[str, Any] | None = None,
        like: dict[str, str] | None = None,
        order: Iterable[tuple[str, bool]] | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch rows with simple equality/range filters.

        Args:
            table: Table or view name
            columns: Column list for select()
            eq: Equality filters
            gte: Lower bounds (inclusive)
            lte: Upper bounds (inclusive)
            like: SQL LIKE patterns, e.g. {"code": "250115%"}
            order: Sequence of (column, descending) pairs
            limit: Maximum number of rows

        Returns:
            List of row dicts (empty if none)

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            query = client.table(table).select(columns)
            for key, value in (eq or {}).items():
                query = query.eq(key, cls._normalize_value(value))
            for key, value in (gte or {}).items():
                query = query.gte(key, value)
            for key, value in (lte or {}).items():
                query = query.lte(key, value)
            for key, pattern in (like or {}).items():
                query = query.like(key, pattern)
            for key, desc in (order or []):
                query = query.order(key, desc=desc)
            if limit is not None:
                query = query.limit(limit)

            response = query.execute()
            rows = response.data or []

            logger.debug(f"Fetched {len(rows)} rows from {table}")
            return rows

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch rows from {table}: {e}",
                code="FETCH_ROWS_FAILED",
                suggestion=f"Check that the {table} table exists and is reachable",
                details={"table": table}
            )

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @classmethod
    def insert_row(cls, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert one row and return it as stored.

        Raises:
            SupabaseClientError: If insert fails or returns nothing
        """
        client = cls.get_client()

        try:
            response = client.table(table).insert(data).execute()

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA"
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                details={"table": table}
            )

    @classmethod
    def upsert_row(
        cls,
        table: str,
        data: dict[str, Any],
        on_conflict: str,
    ) -> dict[str, Any]:
        """
        Insert or update one row atomically using a conflict target.

        Args:
            table: Table name
            data: Row values
            on_conflict: Comma-separated unique columns, e.g. "worker_id,date"

        Returns:
            The stored row

        Raises:
            SupabaseClientError: If upsert fails or returns nothing
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .upsert(data, on_conflict=on_conflict, ignore_duplicates=False)
                .execute()
            )

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Upsert returned no data",
                code="UPSERT_NO_DATA"
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to upsert into {table}: {e}",
                code="UPSERT_FAILED",
                suggestion=f"Check that a unique constraint exists on ({on_conflict})",
                details={"table": table, "on_conflict": on_conflict}
            )

    @classmethod
    def update_rows(
        cls,
        table: str,
        data: dict[str, Any],
        column: str,
        value: Any,
    ) -> list[dict[str, Any]]:
        """
        Update rows where `column == value` and return the updated rows.

        Raises:
            SupabaseClientError: If update fails
        """
        client = cls.get_client()
        value = cls._normalize_value(value)

        try:
            response = (
                client.table(table)
                .update(data)
                .eq(column, value)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update {table}: {e}",
                code="UPDATE_FAILED",
                details={"table": table, column: value}
            )

    @classmethod
    def delete_rows(
        cls,
        table: str,
        column: str,
        values: list[Any],
    ) -> list[dict[str, Any]]:
        """
        Delete rows whose `column` is in `values`.

        Returns:
            The deleted rows

        Raises:
            SupabaseClientError: If delete fails
        """
        client = cls.get_client()
        values = [cls._normalize_value(v) for v in values]

        try:
            response = (
                client.table(table)
                .delete()
                .in_(column, values)
                .execute()
            )
            deleted = response.data or []
            logger.info(f"Deleted {len(deleted)} rows from {table}")
            return deleted

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete from {table}: {e}",
                code="DELETE_FAILED",
                details={"table": table, "count": len(values)}
            )
