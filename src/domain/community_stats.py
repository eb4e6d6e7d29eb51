from typing import Dict, Mapping, Optional

from src.domain.models import ProfileEvent


def map_community_state(
    event: ProfileEvent,
    current_stats: Optional[Mapping[str, int]] = None,
) -> Dict[str, int]:
    """
    Folds a single activity event into a community-stats aggregate.

    Args:
        event (ProfileEvent): The event to count. Its magnitude defaults to one.
        current_stats (Mapping[str, int]): Existing counters; missing kinds count as zero.

    Returns:
        Dict[str, int]: A new aggregate. ``current_stats`` is left untouched.
    """
    new_stats = dict(current_stats or {})
    increment = 1 if event.magnitude is None else event.magnitude
    new_stats[event.kind] = new_stats.get(event.kind, 0) + increment
    return new_stats
