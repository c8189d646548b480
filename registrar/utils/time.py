"""Time helpers"""

from datetime import datetime, timezone


def get_utc_now() -> datetime:
    """
    Naive UTC now, matching the TIMESTAMP WITHOUT TIME ZONE columns.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
