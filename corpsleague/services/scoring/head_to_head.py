# corpsleague/services/scoring/head_to_head.py
from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from corpsleague.core.captions import CAPTIONS
from corpsleague.schemas.matchup import MatchupBattleBreakdown
from corpsleague.schemas.season import (
    CaptionDomination,
    HeadToHeadMatch,
    HeadToHeadRecord,
    HeadToHeadStreak,
)


def _between(b: MatchupBattleBreakdown, user1_id: str, user2_id: str) -> bool:
    return {b.home_user_id, b.away_user_id} == {user1_id, user2_id}


def calculate_head_to_head(
    user1_id: str,
    user2_id: str,
    breakdowns: Sequence[MatchupBattleBreakdown],
) -> HeadToHeadRecord:
    """
    Rivalry history between two users. Unrelated matchups in `breakdowns`
    are ignored; the rest are replayed in week order.
    """
    meetings = sorted((b for b in breakdowns if _between(b, user1_id, user2_id)), key=lambda b: b.week)

    u1_wins = u2_wins = ties = 0
    u1_points = u2_points = 0
    total_margin = 0
    last_winner: Optional[str] = None
    streak = 0
    cap_u1 = {c: 0 for c in CAPTIONS}
    cap_u2 = {c: 0 for c in CAPTIONS}
    history: List[HeadToHeadMatch] = []

    for b in meetings:
        u1_home = b.home_user_id == user1_id
        p1 = b.home_battle_points if u1_home else b.away_battle_points
        p2 = b.away_battle_points if u1_home else b.home_battle_points
        tb = b.total_score_battle
        s1 = (tb.home_value if u1_home else tb.away_value) or 0.0
        s2 = (tb.away_value if u1_home else tb.home_value) or 0.0

        u1_points += p1
        u2_points += p2

        if b.winner_id is None:
            ties += 1
            last_winner, streak = None, 0
        else:
            if b.winner_id == user1_id:
                u1_wins += 1
            else:
                u2_wins += 1
            total_margin += abs(p1 - p2)
            if last_winner == b.winner_id:
                streak += 1
            else:
                last_winner, streak = b.winner_id, 1

        for cb in b.caption_battles:
            d = cb.differential if u1_home else -cb.differential
            if d > 0:
                cap_u1[cb.caption] += 1
            elif d < 0:
                cap_u2[cb.caption] += 1

        history.append(HeadToHeadMatch(
            week=b.week,
            winner_id=b.winner_id,
            user1_battle_points=p1,
            user2_battle_points=p2,
            user1_score=s1,
            user2_score=s2,
        ))

    domination: Dict[str, CaptionDomination] = {}
    for c in CAPTIONS:
        dominant = None
        if cap_u1[c] > cap_u2[c]:
            dominant = user1_id
        elif cap_u2[c] > cap_u1[c]:
            dominant = user2_id
        domination[c] = CaptionDomination(user1_wins=cap_u1[c], user2_wins=cap_u2[c], dominant_user_id=dominant)

    return HeadToHeadRecord(
        user1_id=user1_id,
        user2_id=user2_id,
        user1_wins=u1_wins,
        user2_wins=u2_wins,
        ties=ties,
        total_matchups=len(meetings),
        user1_total_battle_points=u1_points,
        user2_total_battle_points=u2_points,
        caption_domination=domination,
        avg_margin=(total_margin / len(meetings)) if meetings else 0.0,
        current_streak=HeadToHeadStreak(user_id=last_winner, count=streak) if last_winner else None,
        matchup_history=history,
    )
