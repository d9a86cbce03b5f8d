# corpsleague/services/scoring/performance.py
from __future__ import annotations

from math import fsum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from corpsleague.core.captions import CAPTIONS, CAPTION_GROUPS, zero_captions
from corpsleague.schemas.performance import ShowResult, ShowResultInput, WeeklyUserPerformance

ShowLike = Union[ShowResultInput, Mapping[str, Any]]


# ========= Caption scores =========

def derive_caption_scores(
    ge_score: Optional[float] = None,
    visual_score: Optional[float] = None,
    music_score: Optional[float] = None,
) -> Dict[str, float]:
    """
    Split aggregate recap scores evenly across their captions
    (GE over 2 captions, visual and music over 3 each). Missing aggregates count as 0.
    """
    aggregates = {
        "ge": ge_score or 0.0,
        "visual": visual_score or 0.0,
        "music": music_score or 0.0,
    }
    out = zero_captions()
    for group, captions in CAPTION_GROUPS.items():
        share = aggregates[group] / len(captions)
        for c in captions:
            out[c] = share
    return out


def normalize_captions(captions: Optional[Mapping[str, Any]]) -> Dict[str, float]:
    """All 8 captions, in judging order; absent or empty values become 0."""
    out = zero_captions()
    if not captions:
        return out
    for c in CAPTIONS:
        v = captions.get(c)
        if v is not None:
            out[c] = float(v)
    return out


def aggregate_caption_scores(caption_maps: Iterable[Mapping[str, float]]) -> Dict[str, float]:
    # fsum is exactly rounded, so the totals don't depend on show order
    columns: Dict[str, List[float]] = {c: [] for c in CAPTIONS}
    for cm in caption_maps:
        for c in CAPTIONS:
            columns[c].append(cm.get(c, 0.0))
    return {c: fsum(columns[c]) for c in CAPTIONS}


# ========= Weekly performance =========

def _as_show_result(show: ShowLike) -> ShowResult:
    if not isinstance(show, ShowResultInput):
        show = ShowResultInput.model_validate(show)
    if show.captions:
        captions = normalize_captions(show.captions)
    else:
        captions = derive_caption_scores(show.ge_score, show.visual_score, show.music_score)
    return ShowResult(
        show_id=show.show_id,
        show_name=show.show_name,
        score=show.score,
        placement=show.placement,
        captions=captions,
    )


def create_weekly_performance(
    user_id: str,
    week: int,
    shows: Sequence[ShowLike],
    previous_week_total: Optional[float] = None,
) -> WeeklyUserPerformance:
    """
    Collapse one user's show results for a week into a single performance.

    - total_score / captions are sums over the week's shows (not averages)
    - high_single_score is the best single show (0 with no shows)
    - momentum is total_score - previous_week_total, None when there is no previous total
    """
    results = [_as_show_result(s) for s in shows]

    total = fsum(r.score for r in results)

    high_single = 0.0
    high_single_show_id = None
    if results:
        best = max(results, key=lambda r: r.score)  # first show wins a tie
        high_single = best.score
        high_single_show_id = best.show_id

    return WeeklyUserPerformance(
        user_id=user_id,
        week=week,
        total_score=total,
        show_count=len(results),
        captions=aggregate_caption_scores(r.captions for r in results),
        shows=results,
        high_single_score=high_single,
        high_single_show_id=high_single_show_id,
        previous_week_score=previous_week_total,
        momentum=(total - previous_week_total) if previous_week_total is not None else None,
    )


def empty_performance(user_id: str, week: int) -> WeeklyUserPerformance:
    """Stand-in for a side that has no shows in a scheduled week."""
    return create_weekly_performance(user_id, week, [])
