"""Waypoint deduplication and expiry."""

import time
from typing import Iterable, List, Optional, Set, Tuple

from ..database.models import Waypoint


def latest_unexpired_waypoints(
    waypoints: Iterable[Waypoint], now: Optional[int] = None
) -> List[Waypoint]:
    """
    Reduce waypoint rows to the live set.

    Rows must arrive newest first (highest id first). Only the newest row per
    (from, waypoint_id) is kept, then rows whose expire is in the past are
    dropped. Dedup runs before the expiry check, so an expired newest row
    hides older rows for the same waypoint.

    Args:
        waypoints: Waypoint rows ordered by id descending
        now: Current unix time in seconds (defaults to wall clock)

    Returns:
        Surviving waypoints in their original order
    """
    if now is None:
        now = int(time.time())

    seen: Set[Tuple[int, int]] = set()
    latest: List[Waypoint] = []
    for waypoint in waypoints:
        key = (waypoint.from_, waypoint.waypoint_id)
        if key in seen:
            continue
        seen.add(key)
        latest.append(waypoint)

    return [waypoint for waypoint in latest if waypoint.expire >= now]
