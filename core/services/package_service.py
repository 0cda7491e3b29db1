# =============================================================================
# core/services/package_service.py - Package Business Logic
# =============================================================================
# Handles package code generation, lookup and status updates.
# Every status change goes lookup -> guard -> merge -> write back, and the
# stored record is returned so scanners can re-render from it.
#
# When Supabase is unreachable the service falls back to the local JSON
# cache; the transition guard is enforced on that path as well.
# =============================================================================

import logging
import time
from datetime import date
from typing import Any

from app.config import settings
from app.exceptions import (
    AlreadyDeliveredError,
    InvalidTransitionError,
    PackageCodeConflictError,
    PackageNotFoundError,
)
from core.lifecycle import is_valid_transition
from core.models.package import PackingStatus
from lib.local_cache import LocalPackageCache
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import days_ago_iso, local_today, utc_now_iso

logger = logging.getLogger(__name__)

SERIAL_WIDTH = 5

# Postgres unique_violation
UNIQUE_VIOLATION = "23505"


def build_status_update(
    status: PackingStatus,
    weight: str | None = None,
    packer_name: str | None = None,
    shipping_location: str | None = None,
    now: str | None = None,
) -> dict[str, Any]:
    """
    Build the column updates for a status change.

    Weight and packer name are written only when non-empty; shipping
    location is written whenever it is provided, so an empty string clears it.

    Args:
        status: The (already validated) new status
        weight: Package weight, set when packing
        packer_name: Packer, set when packing
        shipping_location: Destination, set when dispatching
        now: ISO timestamp to stamp; defaults to the current time

    Returns:
        Dict of columns to write
    """
    now = now or utc_now_iso()
    payload: dict[str, Any] = {
        "status": status.value,
        "updated_at": now,
    }
    if weight:
        payload["weight"] = weight
    if packer_name:
        payload["packer_name"] = packer_name
    if shipping_location is not None:
        payload["shipping_location"] = shipping_location
    if status == PackingStatus.PACKED:
        payload["packed_at"] = now
    elif status == PackingStatus.DISPATCHED:
        payload["shipped_at"] = now
    return payload


class PackageService:
    """
    Service for package lifecycle operations.

    Provides a clean interface between API routes and database.
    """

    @staticmethod
    def _cache() -> LocalPackageCache:
        return LocalPackageCache(settings.LOCAL_CACHE_PATH)

    # -------------------------------------------------------------------------
    # Code generation
    # -------------------------------------------------------------------------

    @staticmethod
    def generate_codes(count: int = 1, today: date | None = None) -> list[str]:
        """
        Generate `count` consecutive package codes for today.

        Codes are YYMMDD followed by a 5-digit serial that continues after
        the highest serial already used today. "Today" is the calendar day
        in CODE_TIMEZONE, the floor's local time, so codes printed just
        after local midnight carry the new day's prefix.

        Args:
            count: How many codes to generate
            today: Date to generate for (defaults to today in CODE_TIMEZONE)

        Returns:
            List of codes, e.g. ["25011500007", "25011500008"]
        """
        today = today or local_today(settings.CODE_TIMEZONE)
        prefix = today.strftime("%y%m%d")

        try:
            # Only the top code for today; a full scan is capped server-side
            rows = SupabaseClient.fetch_rows(
                settings.PACKAGES_TABLE,
                columns="code",
                like={"code": prefix + "_" * SERIAL_WIDTH},
                order=[("code", True)],
                limit=1,
            )
        except SupabaseClientError as e:
            # Without the store we cannot know today's serials; fall back to
            # the low digits of the clock like the scanners do offline.
            logger.warning(f"Generating codes without store access: {e}")
            start = int(str(int(time.time() * 1000))[-SERIAL_WIDTH:])
            return [f"{prefix}{(start + i) % 10 ** SERIAL_WIDTH:0{SERIAL_WIDTH}d}" for i in range(count)]

        rows.extend(PackageService._cache().all())

        highest = 0
        for row in rows:
            code = str(row.get("code") or "")
            serial = code[len(prefix):]
            if code.startswith(prefix) and serial.isdigit():
                highest = max(highest, int(serial))

        return [f"{prefix}{highest + i:0{SERIAL_WIDTH}d}" for i in range(1, count + 1)]

    @staticmethod
    def generate_code(today: date | None = None) -> str:
        """Generate the next package code for today."""
        return PackageService.generate_codes(1, today=today)[0]

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    @staticmethod
    def create_package(
        code: str | None = None,
        description: str = "",
        assigned_worker: str | None = None,
    ) -> dict[str, Any]:
        """
        Create a package in the pending state.

        Args:
            code: Explicit code; generated when omitted
            description: Free text
            assigned_worker: Optional worker name

        Returns:
            Created package dict

        Raises:
            PackageCodeConflictError: If the code already exists
        """
        now = utc_now_iso()
        data = {
            "code": code or PackageService.generate_code(),
            "description": description or "",
            "status": PackingStatus.PENDING.value,
            "weight": "",
            "packer_name": "",
            "shipping_location": "",
            "created_at": now,
            "updated_at": now,
        }
        if assigned_worker:
            data["assigned_worker"] = assigned_worker

        try:
            package = SupabaseClient.insert_row(settings.PACKAGES_TABLE, data)
            logger.info(f"Created package: {package['code']}")
            return package

        except SupabaseClientError as e:
            if UNIQUE_VIOLATION in str(e) or "duplicate key" in str(e):
                raise PackageCodeConflictError(data["code"])
            logger.warning(f"Failed to save package {data['code']} to Supabase, using local cache: {e}")

        cache = PackageService._cache()
        if cache.get(data["code"]) is not None:
            raise PackageCodeConflictError(data["code"])
        return cache.save(data)

    @staticmethod
    def create_packages(count: int, description: str = "") -> list[dict[str, Any]]:
        """
        Create several packages with consecutive codes.

        Each package is saved independently; a failed save is logged and
        skipped so one bad row doesn't block the batch.

        Returns:
            The packages that were created
        """
        created = []
        for code in PackageService.generate_codes(count):
            try:
                created.append(PackageService.create_package(code=code, description=description))
            except Exception as e:
                logger.error(f"Error saving package {code}: {e}")
        logger.info(f"Bulk created {len(created)}/{count} packages")
        return created

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------

    @staticmethod
    def _find_remote(code: str) -> dict[str, Any] | None:
        """Look in the recent window first, then across all records."""
        package = SupabaseClient.fetch_one(
            settings.PACKAGES_TABLE,
            "code",
            code,
            gte={"created_at": days_ago_iso(settings.PACKAGE_RECENT_DAYS)},
        )
        if package is None:
            logger.debug(f"Package {code} not in recent window, searching all records")
            package = SupabaseClient.fetch_one(settings.PACKAGES_TABLE, "code", code)
        return package

    @staticmethod
    def _lookup(code: str) -> tuple[dict[str, Any], bool]:
        """
        Find a package and report whether it came from Supabase.

        Raises:
            PackageNotFoundError: If neither Supabase nor the cache has it
        """
        try:
            package = PackageService._find_remote(code)
            if package is not None:
                return package, True
        except SupabaseClientError as e:
            logger.warning(f"Supabase lookup failed for {code}, using local cache: {e}")

        package = PackageService._cache().get(code)
        if package is None:
            raise PackageNotFoundError(code)
        return package, False

    @staticmethod
    def get_package(code: str) -> dict[str, Any]:
        """
        Get a package by its code.

        Raises:
            PackageNotFoundError: If the code is unknown
        """
        package, _ = PackageService._lookup(code)
        return package

    @staticmethod
    def list_recent(days: int | None = None) -> list[dict[str, Any]]:
        """
        List packages created in the last `days` days, newest first.

        Falls back to the local cache when Supabase is unreachable.
        """
        since = days_ago_iso(days or settings.PACKAGE_RECENT_DAYS)

        try:
            return SupabaseClient.fetch_rows(
                settings.PACKAGES_TABLE,
                gte={"created_at": since},
                order=[("created_at", True)],
            )
        except SupabaseClientError as e:
            logger.warning(f"Listing packages from local cache: {e}")
            return [
                p for p in PackageService._cache().all()
                if (p.get("created_at") or "") >= since
            ]

    @staticmethod
    def list_by_date_range(start: str, end: str | None = None) -> list[dict[str, Any]]:
        """
        List packages created between `start` and `end` (ISO timestamps).

        Raises:
            SupabaseClientError: If the query fails
        """
        lte = {"created_at": end} if end else None
        return SupabaseClient.fetch_rows(
            settings.PACKAGES_TABLE,
            gte={"created_at": start},
            lte=lte,
            order=[("created_at", True)],
        )

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    @staticmethod
    def _write(code: str, package: dict[str, Any], payload: dict[str, Any], remote: bool) -> dict[str, Any]:
        """
        Persist `payload` onto `package`, falling back to the cache.

        Raises:
            PackageNotFoundError: If the row vanished between lookup and write
        """
        merged = {**package, **payload}

        if remote:
            try:
                rows = SupabaseClient.update_rows(settings.PACKAGES_TABLE, payload, "code", code)
            except SupabaseClientError as e:
                logger.warning(f"Supabase update failed for {code}, writing to local cache: {e}")
            else:
                if not rows:
                    logger.warning(f"Update matched no rows for {code}")
                    raise PackageNotFoundError(code)
                return rows[0]

        return PackageService._cache().save(merged)

    @staticmethod
    def update_status(
        code: str,
        status: PackingStatus,
        weight: str | None = None,
        packer_name: str | None = None,
        shipping_location: str | None = None,
    ) -> dict[str, Any]:
        """
        Move a package to a new status.

        Args:
            code: Package code
            status: Requested status
            weight: Set when packing
            packer_name: Set when packing
            shipping_location: Set when dispatching (empty string clears it)

        Returns:
            The updated package as stored

        Raises:
            PackageNotFoundError: If the code is unknown
            AlreadyDeliveredError: If a delivered package is delivered again
            InvalidTransitionError: If the guard rejects the change
        """
        package, remote = PackageService._lookup(code)
        current = package.get("status") or None

        if current == PackingStatus.DELIVERED.value and status == PackingStatus.DELIVERED:
            raise AlreadyDeliveredError(code)

        if not is_valid_transition(current, status):
            logger.info(f"Rejected transition for {code}: {current} -> {status.value}")
            raise InvalidTransitionError(current, status.value)

        payload = build_status_update(
            status,
            weight=weight,
            packer_name=packer_name,
            shipping_location=shipping_location,
        )

        updated = PackageService._write(code, package, payload, remote)
        logger.info(f"Package {code}: {current} -> {status.value}")
        return updated

    @staticmethod
    def assign_worker(code: str, worker_name: str) -> dict[str, Any]:
        """
        Assign a package to a worker.

        Raises:
            PackageNotFoundError: If the code is unknown
        """
        package, remote = PackageService._lookup(code)
        payload = {"assigned_worker": worker_name, "updated_at": utc_now_iso()}
        return PackageService._write(code, package, payload, remote)

    # -------------------------------------------------------------------------
    # Delete (administrative)
    # -------------------------------------------------------------------------

    @staticmethod
    def delete_packages(codes: list[str]) -> int:
        """
        Delete packages by code from Supabase and the local cache.

        Returns:
            Number of packages removed

        Raises:
            SupabaseClientError: If Supabase fails and nothing was cached
        """
        cache = PackageService._cache()

        try:
            deleted = SupabaseClient.delete_rows(settings.PACKAGES_TABLE, "code", codes)
        except SupabaseClientError:
            removed = cache.delete(codes)
            if removed == 0:
                raise
            return removed

        removed_remote = {row.get("code") for row in deleted}
        removed_cache = cache.delete(codes)
        return max(len(removed_remote), removed_cache)

    @staticmethod
    def delete_package(code: str) -> None:
        """
        Delete one package.

        Raises:
            PackageNotFoundError: If nothing was deleted
        """
        if PackageService.delete_packages([code]) == 0:
            raise PackageNotFoundError(code)
        logger.info(f"Deleted package: {code}")
