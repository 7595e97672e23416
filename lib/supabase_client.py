# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides generic operations for ordered tables:
# - Listing rows by their sort_order rank
# - Fetching, inserting, updating and deleting single rows
# - Applying a full permutation of ranks in one atomic RPC call
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   rows = SupabaseClient.fetch_ordered("projects")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings
from lib.utils import normalize_uuid

# Set up logging for this module
logger = logging.getLogger(__name__)

# Column holding the display rank ("order" is reserved in SQL)
ORDER_COLUMN = "sort_order"

# Postgres function that rewrites every rank of a table in one statement
# (see supabase/migrations/0001_portfolio_schema.sql)
REORDER_FUNCTION = "reorder_collection"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries the failing operation and context for server-side logs.
    These details are never forwarded to API callers.
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
        # Fetch all team members in display order
        members = SupabaseClient.fetch_ordered("team_members")

        # Next rank for a new project
        max_order = SupabaseClient.fetch_max_order("projects")
        next_order = 0 if max_order is None else max_order + 1
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

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

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_ordered(cls, table: str) -> list[dict[str, Any]]:
        """
        Fetch every row of a table, ascending by rank.

        Args:
            table: Table name ("projects" or "team_members")

        Returns:
            List of row dicts in display order

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .select("*")
                .order(ORDER_COLUMN, desc=False)
                .execute()
            )
            rows = response.data or []
            logger.debug(f"Fetched {len(rows)} rows from {table}")
            return rows

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch rows: {e}",
                code="FETCH_ROWS_FAILED",
                details={"table": table}
            )

    @classmethod
    def fetch_row(cls, table: str, row_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a single row by ID.

        Returns:
            Row dict, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        row_id_str = normalize_uuid(row_id)

        try:
            response = (
                client.table(table)
                .select("*")
                .eq("id", row_id_str)
                .limit(1)
                .execute()
            )
            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch row: {e}",
                code="FETCH_ROW_FAILED",
                details={"table": table, "id": row_id_str}
            )

    @classmethod
    def fetch_ids(cls, table: str) -> list[str]:
        """
        Fetch the IDs of every row in a table.

        Used to check that a submitted permutation covers the whole
        collection before anything is written.
        """
        client = cls.get_client()

        try:
            response = client.table(table).select("id").execute()
            return [str(row["id"]) for row in (response.data or [])]

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch ids: {e}",
                code="FETCH_IDS_FAILED",
                details={"table": table}
            )

    @classmethod
    def fetch_max_order(cls, table: str) -> int | None:
        """
        Fetch the highest rank in a table.

        Returns:
            Highest sort_order value, or None if the table is empty
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .select(ORDER_COLUMN)
                .order(ORDER_COLUMN, desc=True)
                .limit(1)
                .execute()
            )
            rows = response.data or []
            if not rows:
                return None
            return int(rows[0][ORDER_COLUMN])

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch max order: {e}",
                code="FETCH_MAX_ORDER_FAILED",
                details={"table": table}
            )

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @classmethod
    def insert_row(cls, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a row and return it with generated fields (id, created_at).

        Raises:
            SupabaseClientError: If insert fails
        """
        client = cls.get_client()

        try:
            response = client.table(table).insert(data).execute()

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA",
                details={"table": table}
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert row: {e}",
                code="INSERT_FAILED",
                details={"table": table}
            )

    @classmethod
    def update_row(
        cls,
        table: str,
        row_id: str | UUID,
        data: dict[str, Any],
    ) -> dict[str, Any] | None:
        """
        Update a single row.

        Returns:
            Updated row dict, or None if no row has this ID

        Raises:
            SupabaseClientError: If update fails
        """
        client = cls.get_client()
        row_id_str = normalize_uuid(row_id)

        try:
            response = (
                client.table(table)
                .update(data)
                .eq("id", row_id_str)
                .execute()
            )
            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update row: {e}",
                code="UPDATE_FAILED",
                details={"table": table, "id": row_id_str}
            )

    @classmethod
    def delete_row(cls, table: str, row_id: str | UUID) -> bool:
        """
        Delete a single row.

        Remaining rows keep their ranks; gaps are allowed.

        Returns:
            True if a row was deleted, False if no row has this ID
        """
        client = cls.get_client()
        row_id_str = normalize_uuid(row_id)

        try:
            response = (
                client.table(table)
                .delete()
                .eq("id", row_id_str)
                .execute()
            )
            return bool(response.data)

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete row: {e}",
                code="DELETE_FAILED",
                details={"table": table, "id": row_id_str}
            )

    @classmethod
    def apply_order(cls, table: str, ids: list[str]) -> None:
        """
        Set each row's rank to its index in `ids`, atomically.

        Runs as a single UPDATE inside the reorder_collection function, so
        either every rank changes or none does. The function itself rejects
        an id list that does not cover the table exactly.

        Raises:
            SupabaseClientError: If the RPC fails
        """
        client = cls.get_client()

        try:
            client.rpc(
                REORDER_FUNCTION,
                {"collection": table, "ids": ids},
            ).execute()
            logger.debug(f"Applied order of {len(ids)} rows to {table}")

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to apply order: {e}",
                code="REORDER_FAILED",
                suggestion="Check that the reorder_collection migration has been applied",
                details={"table": table, "count": len(ids)}
            )
