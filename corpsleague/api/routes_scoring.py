# corpsleague/api/routes_scoring.py
from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, HTTPException

from corpsleague.core.captions import (
    BATTLE_POINTS,
    BLOWOUT_MARGIN,
    CAPTIONS,
    CLUTCH_MARGIN,
    MAX_BATTLE_POINTS,
    caption_display_name,
)
from corpsleague.core.config import settings
from corpsleague.schemas.matchup import MatchupRequest, MatchupResult
from corpsleague.schemas.performance import WeeklyPerformanceRequest, WeeklyUserPerformance
from corpsleague.schemas.season import (
    SeasonMatchupStats,
    SeasonStatsRequest,
    WinProbability,
    WinProbabilityRequest,
)
from corpsleague.services.scoring import (
    calculate_matchup_battles,
    calculate_season_stats,
    calculate_win_probability,
    create_weekly_performance,
    format_battle_score,
    matchup_description,
    matchup_id_for,
)

router = APIRouter(prefix="/scoring", tags=["scoring"])


@router.get("/captions")
def scoring_captions() -> Dict[str, Any]:
    """Caption codes in judging order plus the battle-point rules."""
    return {
        "captions": [{"code": c, "name": caption_display_name(c)} for c in CAPTIONS],
        "battle_points": BATTLE_POINTS,
        "max_battle_points": MAX_BATTLE_POINTS,
        "clutch_margin": CLUTCH_MARGIN,
        "blowout_margin": BLOWOUT_MARGIN,
    }


@router.post("/weekly-performance", response_model=WeeklyUserPerformance)
def scoring_weekly_performance(body: WeeklyPerformanceRequest):
    return create_weekly_performance(body.user_id, body.week, body.shows, body.previous_week_total)


@router.post("/matchup", response_model=MatchupResult)
def scoring_matchup(body: MatchupRequest):
    if body.home_user_id == body.away_user_id:
        raise HTTPException(status_code=400, detail="home_user_id and away_user_id must differ")
    breakdown = calculate_matchup_battles(
        body.matchup_id or matchup_id_for(body.week, body.home_user_id, body.away_user_id),
        body.week,
        body.home_user_id,
        body.away_user_id,
        body.home_performance,
        body.away_performance,
    )
    return MatchupResult(
        breakdown=breakdown,
        battle_score=format_battle_score(breakdown.home_battle_points, breakdown.away_battle_points),
        description=matchup_description(breakdown),
    )


@router.post("/season-stats", response_model=SeasonMatchupStats)
def scoring_season_stats(body: SeasonStatsRequest):
    """
    Season rollup for one user. Breakdowns must all involve the user and are
    re-ordered by week before folding.
    """
    stray = [b.matchup_id for b in body.breakdowns if body.user_id not in (b.home_user_id, b.away_user_id)]
    if stray:
        raise HTTPException(
            status_code=400,
            detail=f"breakdowns not involving {body.user_id}: {', '.join(stray)}",
        )
    ordered = sorted(body.breakdowns, key=lambda b: b.week)
    return calculate_season_stats(
        body.user_id,
        body.season_id or settings.DEFAULT_SEASON_ID,
        ordered,
        body.performances,
    )


@router.post("/win-probability", response_model=WinProbability)
def scoring_win_probability(body: WinProbabilityRequest):
    return WinProbability(probability=calculate_win_probability(body.user_stats, body.opponent_stats))
