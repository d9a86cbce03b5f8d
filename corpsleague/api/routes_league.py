# corpsleague/api/routes_league.py
from fastapi import APIRouter, HTTPException, Response

from corpsleague.core.config import settings
from corpsleague.schemas.recap import LeagueStats, LeagueStatsRequest
from corpsleague.schemas.season import HeadToHeadRecord, HeadToHeadRequest
from corpsleague.services.cache import body_digest, cache_route, key_tuple
from corpsleague.services.league_stats import build_league_stats
from corpsleague.services.scoring import calculate_head_to_head

router = APIRouter(prefix="/league", tags=["league"])


# ---------------- LEAGUE STATS (cache by request body) ----------------
@router.post("/stats", response_model=LeagueStats)
@cache_route(
    namespace="league_stats",
    ttl_seconds=lambda: settings.STATS_CACHE_TTL_SECONDS,
    max_entries=lambda: settings.STATS_CACHE_MAX_ENTRIES,
    key_builder=lambda *args, **kwargs: key_tuple("stats", body_digest(kwargs["body"])),
)
def league_stats(body: LeagueStatsRequest, response: Response = None):
    """
    Season stats for every member plus per-week battle breakdowns,
    computed from already-fetched recaps and the pairing schedule.
    """
    if body.current_week is not None and body.current_week < 0:
        raise HTTPException(status_code=400, detail="current_week must not be negative")
    return build_league_stats(
        body.recaps,
        body.weekly_matchups,
        body.member_ids,
        current_week=body.current_week,
        season_id=body.season_id or settings.DEFAULT_SEASON_ID,
        days_per_week=settings.DAYS_PER_WEEK,
    )


# ---------------- HEAD TO HEAD (no cache) ----------------
@router.post("/head-to-head", response_model=HeadToHeadRecord)
def league_head_to_head(body: HeadToHeadRequest):
    if body.user1_id == body.user2_id:
        raise HTTPException(status_code=400, detail="user1_id and user2_id must differ")
    return calculate_head_to_head(body.user1_id, body.user2_id, body.breakdowns)
