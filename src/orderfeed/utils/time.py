"""Time utilities for UTC timestamp formatting."""

from datetime import datetime, timezone


def to_utc_z(dt: datetime) -> str:
    """
    Convert datetime to ISO 8601 UTC string with millisecond precision and Z suffix.

    Args:
        dt: Datetime object (must be timezone-aware)

    Returns:
        ISO 8601 UTC timestamp ending with 'Z' (e.g., '2025-12-23T00:27:07.804Z')

    Raises:
        ValueError: If datetime is naive (not timezone-aware)
    """
    if dt.tzinfo is None:
        raise ValueError(
            f"Naive datetime not allowed. Got {dt}. "
            "Use datetime.now(timezone.utc) or dt.replace(tzinfo=timezone.utc)"
        )

    dt_utc = dt.astimezone(timezone.utc)
    return dt_utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def epoch_to_utc_z(value: float | int | str, unit: str = "s") -> str:
    """
    Format an epoch timestamp as an ISO 8601 UTC string.

    Args:
        value: Epoch value (numeric or numeric string)
        unit: "s" for seconds, "ms" for milliseconds

    Returns:
        ISO 8601 UTC timestamp ending with 'Z'

    Example:
        >>> epoch_to_utc_z(1700000000)
        '2023-11-14T22:13:20.000Z'
    """
    if unit not in ("s", "ms"):
        raise ValueError(f"Unknown epoch unit: {unit}")
    seconds = float(value)
    if unit == "ms":
        seconds = seconds / 1000
    return to_utc_z(datetime.fromtimestamp(seconds, tz=timezone.utc))
