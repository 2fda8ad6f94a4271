"""Per-video balancing of channel-wide results."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from tuberag.retrieval.schemas import RetrievalResult

logger = logging.getLogger(__name__)


def balance_chunks_by_video(
    results: Sequence[RetrievalResult],
    max_per_video: int,
    max_total: int,
) -> list[RetrievalResult]:
    """Spread results across videos.

    Groups results by video (keeping input order inside each group), caps
    each group at ``max_per_video``, orders groups by their best
    ``final_score``, then takes one result per group per round until
    ``max_total`` is reached.
    """
    if max_per_video <= 0 or max_total <= 0:
        return []

    groups: dict[str, list[RetrievalResult]] = {}
    for result in results:
        groups.setdefault(result.video_id, []).append(result)

    ordered = sorted(
        (group[:max_per_video] for group in groups.values()),
        key=lambda g: max(r.final_score for r in g),
        reverse=True,
    )

    balanced: list[RetrievalResult] = []
    for depth in range(max_per_video):
        for group in ordered:
            if depth < len(group):
                balanced.append(group[depth])
                if len(balanced) >= max_total:
                    break
        if len(balanced) >= max_total:
            break

    logger.info(
        "Balanced %d chunks from %d videos into %d (per_video=%d, total=%d)",
        len(results),
        len(groups),
        len(balanced),
        max_per_video,
        max_total,
    )
    return balanced
