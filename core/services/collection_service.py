# =============================================================================
# core/services/collection_service.py - Ordered Collection Business Logic
# =============================================================================
# Projects and team members are both ordered collections: every row carries
# an integer rank (sort_order) and public pages list them ascending by it.
# This module implements the operations they share:
# - create (rank = current max + 1, or 0 for an empty collection)
# - get / list in display order
# - update (full replacement, rank untouched) and delete (no renumbering)
# - reorder (apply a full permutation atomically)
#
# Every successful mutation revalidates the pages that render the collection.
# =============================================================================

import logging
from typing import Any, ClassVar, Generic, TypeVar
from uuid import UUID

from app.exceptions import (
    InvalidPermutationError,
    PersistenceError,
    ReorderConflictError,
    TheoriaException,
)
from core.services.cache_service import revalidate_paths
from lib.supabase_client import ORDER_COLUMN, SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT")
InputT = TypeVar("InputT")


def _canonical_id(value: Any) -> str:
    """Strip an id and write UUIDs in their lowercase hyphenated form."""
    cleaned = str(value).strip()
    try:
        return str(UUID(cleaned))
    except ValueError:
        return cleaned


def validate_permutation(ids: list[str]) -> list[str]:
    """
    Check that a reorder payload is a list of distinct, non-empty ids.

    Ids are returned in canonical form, so a UUID sent in upper case
    matches the stored row.

    Whether the ids match the stored collection is checked separately,
    against the database.

    Raises:
        InvalidPermutationError: On blank or duplicated ids
    """
    cleaned = [_canonical_id(i) for i in ids]

    if any(not i for i in cleaned):
        raise InvalidPermutationError("ids must be non-empty strings")

    seen: set[str] = set()
    duplicates: list[str] = []
    for i in cleaned:
        if i in seen and i not in duplicates:
            duplicates.append(i)
        seen.add(i)

    if duplicates:
        raise InvalidPermutationError(
            "ids must not repeat",
            details={"duplicates": duplicates},
        )

    return cleaned


class OrderedCollectionService(Generic[EntityT, InputT]):
    """
    Shared CRUD + reorder logic for one ordered table.

    Subclasses bind the table, the models and the pages to revalidate:

        class TeamService(OrderedCollectionService[TeamMember, TeamMemberInput]):
            table = "team_members"
            ...
    """

    table: ClassVar[str]
    entity_name: ClassVar[str]
    entity_plural: ClassVar[str]
    model: ClassVar[Any]
    not_found_error: ClassVar[type[TheoriaException]]

    # Public API path whose cached response lists the collection
    public_list_path: ClassVar[str]
    # Pages that render the whole collection
    listing_paths: ClassVar[tuple[str, ...]] = ()

    # -------------------------------------------------------------------------
    # Hooks
    # -------------------------------------------------------------------------

    @classmethod
    def detail_paths(cls, entity_id: str) -> tuple[str, ...]:
        """Pages that render a single entity."""
        return ()

    @classmethod
    def validate_input(cls, data: InputT) -> None:
        """Checks beyond the schema (e.g. registry lookups)."""

    @classmethod
    def _revalidate(cls, entity_id: str | None = None) -> None:
        paths = [*cls.listing_paths, cls.public_list_path]
        if entity_id is not None:
            paths.extend(cls.detail_paths(entity_id))
        revalidate_paths(paths)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @classmethod
    def list_ordered(cls) -> list[EntityT]:
        """
        List the whole collection, ascending by rank.

        Raises:
            PersistenceError: If the query fails
        """
        try:
            rows = SupabaseClient.fetch_ordered(cls.table)
        except SupabaseClientError as e:
            logger.error(f"Failed to list {cls.entity_plural}: {e}")
            raise PersistenceError("fetch", cls.entity_plural)

        return [cls.model.from_record(row) for row in rows]

    @classmethod
    def get(cls, entity_id: str) -> EntityT:
        """
        Get one entity by ID.

        Raises:
            <Entity>NotFoundError: If no entity has this ID
            PersistenceError: If the query fails
        """
        try:
            row = SupabaseClient.fetch_row(cls.table, entity_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch {cls.entity_name} {entity_id}: {e}")
            raise PersistenceError("fetch", cls.entity_name)

        if row is None:
            raise cls.not_found_error(entity_id)
        return cls.model.from_record(row)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @classmethod
    def create(cls, data: InputT) -> EntityT:
        """
        Create an entity at the end of the collection.

        The new rank is the current maximum + 1, or 0 when the collection
        is empty.

        Raises:
            PersistenceError: If the insert fails
        """
        cls.validate_input(data)

        try:
            max_order = SupabaseClient.fetch_max_order(cls.table)
            record = data.to_record()
            record[ORDER_COLUMN] = 0 if max_order is None else max_order + 1
            row = SupabaseClient.insert_row(cls.table, record)
        except SupabaseClientError as e:
            logger.error(f"Failed to create {cls.entity_name}: {e}")
            raise PersistenceError("create", cls.entity_name)

        entity = cls.model.from_record(row)
        logger.info(f"Created {cls.entity_name} {entity.id} at order {entity.order}")

        cls._revalidate()
        return entity

    @classmethod
    def update(cls, entity_id: str, data: InputT) -> EntityT:
        """
        Replace every mutable field of an entity. The rank is not touched.

        Raises:
            <Entity>NotFoundError: If no entity has this ID
            PersistenceError: If the update fails
        """
        cls.validate_input(data)

        try:
            row = SupabaseClient.update_row(cls.table, entity_id, data.to_record())
        except SupabaseClientError as e:
            logger.error(f"Failed to update {cls.entity_name} {entity_id}: {e}")
            raise PersistenceError("update", cls.entity_name)

        if row is None:
            raise cls.not_found_error(entity_id)

        entity = cls.model.from_record(row)
        logger.info(f"Updated {cls.entity_name} {entity_id}")

        cls._revalidate(entity_id)
        return entity

    @classmethod
    def delete(cls, entity_id: str) -> None:
        """
        Delete an entity.

        Remaining ranks are left as they are; the gap doesn't change the
        relative order.

        Raises:
            <Entity>NotFoundError: If no entity has this ID
            PersistenceError: If the delete fails
        """
        try:
            deleted = SupabaseClient.delete_row(cls.table, entity_id)
        except SupabaseClientError as e:
            logger.error(f"Failed to delete {cls.entity_name} {entity_id}: {e}")
            raise PersistenceError("delete", cls.entity_name)

        if not deleted:
            raise cls.not_found_error(entity_id)

        logger.info(f"Deleted {cls.entity_name} {entity_id}")
        cls._revalidate(entity_id)

    @classmethod
    def reorder(cls, ids: list[str]) -> None:
        """
        Apply a full permutation: the entity at position i gets rank i.

        The payload is checked before anything is written:
        - blank or repeated ids are rejected (InvalidPermutationError)
        - the ids must be exactly the current members (ReorderConflictError)

        The ranks are then written in a single atomic statement, so a
        failure leaves the previous order intact. Two concurrent reorders
        of the same members are each atomic; the last one to commit wins.

        Raises:
            InvalidPermutationError: Malformed payload
            ReorderConflictError: Payload doesn't match the collection
            PersistenceError: If the write fails
        """
        ordered_ids = validate_permutation(ids)

        try:
            current_ids = SupabaseClient.fetch_ids(cls.table)
        except SupabaseClientError as e:
            logger.error(f"Failed to load {cls.entity_plural} for reorder: {e}")
            raise PersistenceError("reorder", cls.entity_plural)

        submitted = set(ordered_ids)
        stored = set(current_ids)
        if submitted != stored:
            missing = sorted(stored - submitted)
            unknown = sorted(submitted - stored)
            logger.warning(
                f"Rejected reorder of {cls.entity_plural}: "
                f"{len(missing)} missing, {len(unknown)} unknown ids"
            )
            raise ReorderConflictError(missing=missing, unknown=unknown)

        try:
            SupabaseClient.apply_order(cls.table, ordered_ids)
        except SupabaseClientError as e:
            logger.error(f"Failed to reorder {cls.entity_plural}: {e}")
            raise PersistenceError("reorder", cls.entity_plural)

        logger.info(f"Reordered {len(ordered_ids)} {cls.entity_plural}")
        cls._revalidate()
