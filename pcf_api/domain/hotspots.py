"""Hotspot ranking shared by both aggregation variants."""
from __future__ import annotations

from typing import Iterable, List, Optional

from pcf_api.domain.entities import Hotspot


def rank_hotspots(candidates: Iterable[Hotspot], limit: Optional[int] = None) -> List[Hotspot]:
    """
    Rank hotspot candidates by contribution, highest first.

    Ties keep their input order. With a limit, only the highest-value prefix
    is returned.
    """
    ranked = sorted(candidates, key=lambda hotspot: hotspot.value, reverse=True)
    if limit is not None:
        ranked = ranked[:max(limit, 0)]
    return ranked
