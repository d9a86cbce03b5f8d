# corpsleague/services/scoring/season.py
from __future__ import annotations

from math import exp, fsum, tanh
from typing import Dict, List, Mapping, Optional, Sequence

from corpsleague.core.captions import CAPTIONS
from corpsleague.schemas.matchup import MatchupBattleBreakdown
from corpsleague.schemas.performance import WeeklyUserPerformance
from corpsleague.schemas.season import CaptionWinRate, SeasonMatchupStats, WeekMark


def initialize_caption_win_rates() -> Dict[str, CaptionWinRate]:
    return {c: CaptionWinRate(caption=c) for c in CAPTIONS}


def empty_season_stats(user_id: str, season_id: str) -> SeasonMatchupStats:
    return SeasonMatchupStats(
        user_id=user_id,
        season_id=season_id,
        caption_win_rates=initialize_caption_win_rates(),
    )


def _dominance(win_rate: float, avg_differential: float) -> float:
    return win_rate * (1 + tanh(avg_differential / 10))


def calculate_season_stats(
    user_id: str,
    season_id: str,
    breakdowns: Sequence[MatchupBattleBreakdown],
    performances: Optional[Mapping[int, WeeklyUserPerformance]] = None,
) -> SeasonMatchupStats:
    """
    Fold one user's matchups (week-ascending) into a season rollup.

    `breakdowns` must only hold matchups where user_id is home or away.
    `performances` ({week: perf}) is optional and only feeds the highest single score;
    weeks without a matching breakdown are not considered.
    """
    if not breakdowns:
        return empty_season_stats(user_id, season_id)

    wins = losses = ties = 0
    points_for = points_against = 0
    total_wins = high_single_wins = momentum_wins = 0
    clutch = blowout = comeback = 0

    streak = 0
    streak_type: Optional[str] = None
    longest_w = longest_l = 0

    best_week: Optional[WeekMark] = None
    worst_week: Optional[WeekMark] = None

    cap_wins = {c: 0 for c in CAPTIONS}
    cap_losses = {c: 0 for c in CAPTIONS}
    cap_ties = {c: 0 for c in CAPTIONS}
    cap_diffs: Dict[str, List[float]] = {c: [] for c in CAPTIONS}

    for b in breakdowns:
        is_home = b.home_user_id == user_id
        mine = b.home_battle_points if is_home else b.away_battle_points
        theirs = b.away_battle_points if is_home else b.home_battle_points
        opponent = b.away_user_id if is_home else b.home_user_id

        points_for += mine
        points_against += theirs

        if b.winner_id == user_id:
            wins += 1
            if b.is_clutch:
                clutch += 1
            if b.is_blowout:
                blowout += 1
            my_caps = b.caption_battles_won.home if is_home else b.caption_battles_won.away
            opp_caps = b.caption_battles_won.away if is_home else b.caption_battles_won.home
            if my_caps < opp_caps:
                comeback += 1

            if streak_type == "W":
                streak += 1
            else:
                streak, streak_type = 1, "W"
            longest_w = max(longest_w, streak)
        elif b.winner_id is None:
            ties += 1
            streak, streak_type = 0, None
        else:
            losses += 1
            if streak_type == "L":
                streak += 1
            else:
                streak, streak_type = 1, "L"
            longest_l = max(longest_l, streak)

        # strict comparisons keep the first week on ties
        if best_week is None or mine > best_week.battle_points:
            best_week = WeekMark(week=b.week, battle_points=mine, opponent_id=opponent)
        if worst_week is None or mine < worst_week.battle_points:
            worst_week = WeekMark(week=b.week, battle_points=mine, opponent_id=opponent)

        if b.total_score_battle.winner_id == user_id:
            total_wins += 1
        if b.high_single_battle.winner_id == user_id:
            high_single_wins += 1
        if b.momentum_battle.winner_id == user_id:
            momentum_wins += 1

        for cb in b.caption_battles:
            diff = cb.differential if is_home else -cb.differential
            cap_diffs[cb.caption].append(diff)
            if diff > 0:
                cap_wins[cb.caption] += 1
            elif diff < 0:
                cap_losses[cb.caption] += 1
            else:
                cap_ties[cb.caption] += 1

    n = len(breakdowns)

    rates: Dict[str, CaptionWinRate] = {}
    for c in CAPTIONS:
        played = len(cap_diffs[c])
        win_rate = cap_wins[c] / played if played else 0.0
        avg_diff = fsum(cap_diffs[c]) / played if played else 0.0
        rates[c] = CaptionWinRate(
            caption=c,
            wins=cap_wins[c],
            losses=cap_losses[c],
            ties=cap_ties[c],
            total_matchups=played,
            win_rate=win_rate,
            avg_differential=avg_diff,
            dominance_rating=_dominance(win_rate, avg_diff),
        )

    # max()/min() return the first caption in judging order on equal rates
    best_caption = max(CAPTIONS, key=lambda c: rates[c].win_rate)
    worst_caption = min(CAPTIONS, key=lambda c: rates[c].win_rate)

    # only weeks that were actually played count; byes are ignored
    performances = performances or {}
    highest_single = 0.0
    highest_single_week = 0
    for week in sorted({b.week for b in breakdowns}):
        perf = performances.get(week)
        if perf is not None and perf.high_single_score > highest_single:
            highest_single = perf.high_single_score
            highest_single_week = perf.week

    return SeasonMatchupStats(
        user_id=user_id,
        season_id=season_id,
        wins=wins,
        losses=losses,
        ties=ties,
        win_percentage=wins / n,
        total_battle_points_for=points_for,
        total_battle_points_against=points_against,
        avg_battle_points_for=points_for / n,
        avg_battle_points_against=points_against / n,
        caption_win_rates=rates,
        best_caption=best_caption,
        best_caption_win_rate=rates[best_caption].win_rate,
        worst_caption=worst_caption,
        worst_caption_win_rate=rates[worst_caption].win_rate,
        total_score_battles_won=total_wins,
        high_single_battles_won=high_single_wins,
        momentum_battles_won=momentum_wins,
        clutch_wins=clutch,
        blowout_wins=blowout,
        comeback_wins=comeback,
        current_streak=streak,
        current_streak_type=streak_type,
        longest_win_streak=longest_w,
        longest_loss_streak=longest_l,
        best_week=best_week,
        worst_week=worst_week,
        highest_single_score=highest_single,
        highest_single_score_week=highest_single_week,
    )


def calculate_win_probability(user_stats: SeasonMatchupStats, opponent_stats: SeasonMatchupStats) -> float:
    """Logistic on the difference in average battle-point margins; 0.5 with no data."""
    if user_stats.avg_battle_points_for == 0 and opponent_stats.avg_battle_points_for == 0:
        return 0.5
    mine = user_stats.avg_battle_points_for - user_stats.avg_battle_points_against
    theirs = opponent_stats.avg_battle_points_for - opponent_stats.avg_battle_points_against
    return 1 / (1 + exp(-(mine - theirs) / 2))
