# corpsleague/services/scoring/battles.py
"""
Head-to-head battle points for one week's matchup.

    caption battles   8 pts   one per caption won
    total score       1 pt    higher weekly total
    high single       1 pt    best individual show
    momentum          1 pt    better week-over-week change (both sides need history)

An exact tie awards nobody. Maximum is MAX_BATTLE_POINTS (11).
"""
from __future__ import annotations

from typing import List, Mapping, Optional

from corpsleague.core.captions import (
    BATTLE_POINTS,
    BLOWOUT_MARGIN,
    CAPTIONS,
    CLUTCH_MARGIN,
)
from corpsleague.schemas.matchup import (
    BattleResult,
    BattleType,
    CaptionBattle,
    CaptionBattlesWon,
    MatchupBattleBreakdown,
)
from corpsleague.schemas.performance import WeeklyUserPerformance


def _winner(home_user_id: str, away_user_id: str, differential: float) -> Optional[str]:
    if differential > 0:
        return home_user_id
    if differential < 0:
        return away_user_id
    return None


def matchup_id_for(week: int, home_user_id: str, away_user_id: str) -> str:
    return f"matchup-w{week}-{home_user_id}-{away_user_id}"


# ========= Caption battles =========

def calculate_caption_battles(
    home_user_id: str,
    away_user_id: str,
    home_captions: Mapping[str, float],
    away_captions: Mapping[str, float],
) -> List[CaptionBattle]:
    out: List[CaptionBattle] = []
    for caption in CAPTIONS:
        home_score = home_captions.get(caption) or 0.0
        away_score = away_captions.get(caption) or 0.0
        diff = home_score - away_score
        out.append(CaptionBattle(
            caption=caption,
            home_score=home_score,
            away_score=away_score,
            winner_id=_winner(home_user_id, away_user_id, diff),
            differential=diff,
        ))
    return out


def count_caption_wins(caption_battles: List[CaptionBattle]) -> CaptionBattlesWon:
    home = sum(1 for b in caption_battles if b.differential > 0)
    away = sum(1 for b in caption_battles if b.differential < 0)
    return CaptionBattlesWon(home=home, away=away)


# ========= Bonus battles =========

def _battle(
    type_: BattleType,
    home_user_id: str,
    away_user_id: str,
    home_value: float,
    away_value: float,
) -> BattleResult:
    diff = home_value - away_value
    return BattleResult(
        type=type_,
        home_value=home_value,
        away_value=away_value,
        winner_id=_winner(home_user_id, away_user_id, diff),
        differential=diff,
        points_awarded=BATTLE_POINTS[type_],
    )


def calculate_total_score_battle(
    home_user_id: str,
    away_user_id: str,
    home_perf: WeeklyUserPerformance,
    away_perf: WeeklyUserPerformance,
) -> BattleResult:
    return _battle("total", home_user_id, away_user_id, home_perf.total_score, away_perf.total_score)


def calculate_high_single_battle(
    home_user_id: str,
    away_user_id: str,
    home_perf: WeeklyUserPerformance,
    away_perf: WeeklyUserPerformance,
) -> BattleResult:
    return _battle(
        "high_single", home_user_id, away_user_id,
        home_perf.high_single_score, away_perf.high_single_score,
    )


def calculate_momentum_battle(
    home_user_id: str,
    away_user_id: str,
    home_perf: WeeklyUserPerformance,
    away_perf: WeeklyUserPerformance,
) -> BattleResult:
    """
    Contested only when both sides carry a momentum value. If either side has
    no previous week, the battle stands with no winner and no point awarded.
    """
    if home_perf.momentum is None or away_perf.momentum is None:
        return BattleResult(
            type="momentum",
            home_value=home_perf.momentum,
            away_value=away_perf.momentum,
            winner_id=None,
            differential=None,
            points_awarded=BATTLE_POINTS["momentum"],
        )
    return _battle("momentum", home_user_id, away_user_id, home_perf.momentum, away_perf.momentum)


# ========= Full matchup =========

def calculate_matchup_battles(
    matchup_id: str,
    week: int,
    home_user_id: str,
    away_user_id: str,
    home_perf: WeeklyUserPerformance,
    away_perf: WeeklyUserPerformance,
) -> MatchupBattleBreakdown:
    caption_battles = calculate_caption_battles(
        home_user_id, away_user_id, home_perf.captions, away_perf.captions
    )
    won = count_caption_wins(caption_battles)

    total_battle = calculate_total_score_battle(home_user_id, away_user_id, home_perf, away_perf)
    high_single_battle = calculate_high_single_battle(home_user_id, away_user_id, home_perf, away_perf)
    momentum_battle = calculate_momentum_battle(home_user_id, away_user_id, home_perf, away_perf)

    caption_results = [
        BattleResult(
            type="caption",
            caption=cb.caption,
            home_value=cb.home_score,
            away_value=cb.away_score,
            winner_id=cb.winner_id,
            differential=cb.differential,
            points_awarded=BATTLE_POINTS["caption"],
        )
        for cb in caption_battles
    ]

    home_points = won.home * BATTLE_POINTS["caption"]
    away_points = won.away * BATTLE_POINTS["caption"]
    for b in (total_battle, high_single_battle, momentum_battle):
        if b.winner_id == home_user_id:
            home_points += b.points_awarded
        elif b.winner_id == away_user_id:
            away_points += b.points_awarded

    diff = home_points - away_points
    margin = abs(diff)
    is_tie = diff == 0

    return MatchupBattleBreakdown(
        matchup_id=matchup_id,
        week=week,
        home_user_id=home_user_id,
        away_user_id=away_user_id,
        home_battle_points=home_points,
        away_battle_points=away_points,
        caption_battles=caption_battles,
        caption_battles_won=won,
        total_score_battle=total_battle,
        high_single_battle=high_single_battle,
        momentum_battle=momentum_battle,
        all_battles=[*caption_results, total_battle, high_single_battle, momentum_battle],
        winner_id=_winner(home_user_id, away_user_id, diff),
        is_tie=is_tie,
        margin=margin,
        is_clutch=not is_tie and margin <= CLUTCH_MARGIN,
        is_blowout=margin >= BLOWOUT_MARGIN,
    )


# ========= Display helpers =========

def format_battle_score(home_points: int, away_points: int) -> str:
    return f"{home_points}-{away_points}"


def matchup_description(breakdown: MatchupBattleBreakdown) -> str:
    if breakdown.is_tie:
        return "Tied"
    if breakdown.is_blowout:
        return "Blowout"
    if breakdown.is_clutch:
        return "Clutch Win"
    return "Win"
