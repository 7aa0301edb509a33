# src/presence/aggregates.py - v1
"""Per-location aggregates over checked-in profiles.

Computed on read from a query snapshot; nothing is maintained server-side.
Locations with nobody checked in are absent from the result.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Iterable

from jurados.core.models import Profile


def count_by_location(profiles: Iterable[Profile]) -> dict[str, int]:
    counts = Counter(p.present_at for p in profiles if p.present_at is not None)
    return dict(counts)


def group_by_location(profiles: Iterable[Profile]) -> dict[str, list[Profile]]:
    groups: defaultdict[str, list[Profile]] = defaultdict(list)
    for profile in profiles:
        if profile.present_at is not None:
            groups[profile.present_at].append(profile)
    return dict(groups)
