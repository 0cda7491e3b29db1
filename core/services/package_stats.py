# =============================================================================
# core/services/package_stats.py - Dashboard Aggregates
# =============================================================================
# Turns a list of package rows into the counts shown on the dashboard:
# totals per status, per-day counts by status, and packed counts per packer.
# =============================================================================

import logging
from typing import Any

import pandas as pd

from core.models.package import DailyStatusCount, PackageStats, PackingStatus

logger = logging.getLogger(__name__)

STATUS_VALUES = [s.value for s in PackingStatus]

# Statuses that imply the package went through packing
PACKED_OR_LATER = [
    PackingStatus.PACKED.value,
    PackingStatus.DISPATCHED.value,
    PackingStatus.DELIVERED.value,
]


def compute_package_stats(packages: list[dict[str, Any]]) -> PackageStats:
    """
    Aggregate package rows for the dashboard.

    Rows without a status count as pending. Unknown statuses are counted in
    `by_status` but left out of the per-day breakdown.

    Args:
        packages: Package rows as returned by PackageService

    Returns:
        PackageStats
    """
    if not packages:
        return PackageStats(by_status={s: 0 for s in STATUS_VALUES})

    df = pd.DataFrame(packages)
    for column in ("status", "created_at", "packer_name"):
        if column not in df.columns:
            df[column] = None

    df["status"] = df["status"].fillna(PackingStatus.PENDING.value).replace("", PackingStatus.PENDING.value)

    by_status = {s: 0 for s in STATUS_VALUES}
    by_status.update({str(k): int(v) for k, v in df["status"].value_counts().items()})

    # Per-day breakdown by creation date
    df["day"] = pd.to_datetime(df["created_at"], errors="coerce", utc=True, format="ISO8601").dt.strftime("%Y-%m-%d")
    known = df[df["status"].isin(STATUS_VALUES) & df["day"].notna()]
    by_day: list[DailyStatusCount] = []
    if not known.empty:
        table = (
            known.groupby(["day", "status"]).size()
            .unstack(fill_value=0)
            .reindex(columns=STATUS_VALUES, fill_value=0)
            .sort_index()
        )
        for day, row in table.iterrows():
            by_day.append(DailyStatusCount(date=str(day), **{s: int(row[s]) for s in STATUS_VALUES}))

    # Packed counts per packer
    packed = df[df["status"].isin(PACKED_OR_LATER)]
    packers = packed["packer_name"].fillna("").astype(str).str.strip()
    packers = packers[packers != ""]
    by_packer = {str(k): int(v) for k, v in packers.value_counts().sort_index().items()}

    logger.debug(f"Computed stats over {len(df)} packages")
    return PackageStats(
        total=int(len(df)),
        by_status=by_status,
        by_day=by_day,
        by_packer=by_packer,
    )
