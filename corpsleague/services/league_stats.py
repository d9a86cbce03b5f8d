# corpsleague/services/league_stats.py
from __future__ import annotations

import logging
from math import ceil
from typing import Dict, List, Mapping, Optional, Sequence

from corpsleague.schemas.matchup import MatchupBattleBreakdown
from corpsleague.schemas.performance import ShowResultInput, WeeklyUserPerformance
from corpsleague.schemas.recap import DayRecap, LeagueStats, WeeklyPairing
from corpsleague.schemas.season import SeasonMatchupStats
from corpsleague.services.scoring import (
    calculate_matchup_battles,
    calculate_season_stats,
    create_weekly_performance,
    empty_performance,
    empty_season_stats,
    matchup_id_for,
)

logger = logging.getLogger(__name__)


def week_for_day(off_season_day: int, days_per_week: int = 7) -> int:
    return ceil(off_season_day / days_per_week)


def collect_week_shows(
    user_id: str,
    week: int,
    recaps: Sequence[DayRecap],
    days_per_week: int = 7,
) -> List[ShowResultInput]:
    """Every show result of `user_id` on the days that fall in `week`, in recap order."""
    shows: List[ShowResultInput] = []
    for day in recaps:
        if week_for_day(day.off_season_day, days_per_week) != week:
            continue
        for show in day.shows:
            for result in show.results:
                if result.uid != user_id:
                    continue
                shows.append(ShowResultInput(
                    show_id=show.show_id or show.event_name,
                    show_name=show.event_name,
                    score=result.total_score or 0.0,
                    placement=result.placement,
                    captions=result.captions,
                    ge_score=result.ge_score,
                    visual_score=result.visual_score,
                    music_score=result.music_score,
                ))
    return shows


def build_weekly_performances(
    user_id: str,
    recaps: Sequence[DayRecap],
    max_week: int,
    days_per_week: int = 7,
) -> Dict[int, WeeklyUserPerformance]:
    """
    {week: performance} for weeks 1..max_week in which the user has at least one show.
    Momentum compares against the immediately preceding week only.
    """
    out: Dict[int, WeeklyUserPerformance] = {}
    for week in range(1, max_week + 1):
        shows = collect_week_shows(user_id, week, recaps, days_per_week)
        if not shows:
            continue
        prev = out.get(week - 1)
        out[week] = create_weekly_performance(
            user_id, week, shows, prev.total_score if prev is not None else None
        )
    return out


def _max_week(
    recaps: Sequence[DayRecap],
    weekly_matchups: Mapping[int, Sequence[WeeklyPairing]],
    days_per_week: int,
) -> int:
    weeks = [week_for_day(d.off_season_day, days_per_week) for d in recaps]
    weeks.extend(int(w) for w in weekly_matchups.keys())
    return max(weeks, default=0)


def build_league_stats(
    recaps: Sequence[DayRecap],
    weekly_matchups: Mapping[int, Sequence[WeeklyPairing]],
    member_ids: Sequence[str],
    current_week: Optional[int] = None,
    season_id: str = "current",
    days_per_week: int = 7,
) -> LeagueStats:
    """
    Season stats for every member plus each week's matchup breakdowns.

    Weeks are processed in ascending order so streaks and momentum line up.
    A matchup where neither side performed is skipped; a side without shows
    plays an empty performance.
    """
    if not recaps or not member_ids or weekly_matchups is None:
        return LeagueStats()

    # weeks past the last recap or pairing hold nothing to score
    last_week = _max_week(recaps, weekly_matchups, days_per_week)
    current_week = last_week if current_week is None else min(current_week, last_week)

    performances: Dict[str, Dict[int, WeeklyUserPerformance]] = {
        uid: build_weekly_performances(uid, recaps, current_week, days_per_week)
        for uid in member_ids
    }

    weekly_breakdowns: Dict[int, List[MatchupBattleBreakdown]] = {}
    by_user: Dict[str, List[MatchupBattleBreakdown]] = {uid: [] for uid in member_ids}

    for week in range(1, current_week + 1):
        weekly_breakdowns[week] = []
        for pairing in weekly_matchups.get(week, []):
            home_perf = performances.get(pairing.user1, {}).get(week)
            away_perf = performances.get(pairing.user2, {}).get(week)
            if home_perf is None and away_perf is None:
                continue
            if home_perf is None or away_perf is None:
                missing = pairing.user1 if home_perf is None else pairing.user2
                logger.warning("week=%s: no shows for %s, scoring as empty performance", week, missing)

            breakdown = calculate_matchup_battles(
                matchup_id_for(week, pairing.user1, pairing.user2),
                week,
                pairing.user1,
                pairing.user2,
                home_perf if home_perf is not None else empty_performance(pairing.user1, week),
                away_perf if away_perf is not None else empty_performance(pairing.user2, week),
            )
            weekly_breakdowns[week].append(breakdown)
            for uid in (pairing.user1, pairing.user2):
                if uid in by_user:
                    by_user[uid].append(breakdown)

    member_stats: Dict[str, SeasonMatchupStats] = {}
    for uid in member_ids:
        if by_user[uid]:
            member_stats[uid] = calculate_season_stats(uid, season_id, by_user[uid], performances[uid])
        else:
            member_stats[uid] = empty_season_stats(uid, season_id)

    logger.debug(
        "league stats: members=%d weeks=%d breakdowns=%d",
        len(member_ids), current_week, sum(len(v) for v in weekly_breakdowns.values()),
    )
    return LeagueStats(member_stats=member_stats, weekly_breakdowns=weekly_breakdowns)
