from __future__ import annotations
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict

from corpsleague.core.captions import Caption
from corpsleague.schemas.matchup import MatchupBattleBreakdown
from corpsleague.schemas.performance import WeeklyUserPerformance

StreakType = Literal["W", "L"]

class CaptionWinRate(BaseModel):
    model_config = ConfigDict(frozen=True)

    caption: Caption
    wins: int = 0
    losses: int = 0
    ties: int = 0
    total_matchups: int = 0
    win_rate: float = 0.0
    avg_differential: float = 0.0     # own caption score minus opponent's, averaged
    dominance_rating: float = 0.0

class WeekMark(BaseModel):
    model_config = ConfigDict(frozen=True)

    week: int = 0
    battle_points: int = 0
    opponent_id: Optional[str] = None

class SeasonMatchupStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str
    season_id: str

    # record
    wins: int = 0
    losses: int = 0
    ties: int = 0
    win_percentage: float = 0.0

    # battle points
    total_battle_points_for: int = 0
    total_battle_points_against: int = 0
    avg_battle_points_for: float = 0.0
    avg_battle_points_against: float = 0.0

    # captions
    caption_win_rates: Dict[Caption, CaptionWinRate]
    best_caption: Caption = "GE1"
    best_caption_win_rate: float = 0.0
    worst_caption: Caption = "GE1"
    worst_caption_win_rate: float = 0.0

    # bonus battles
    total_score_battles_won: int = 0
    high_single_battles_won: int = 0
    momentum_battles_won: int = 0

    # special wins
    clutch_wins: int = 0
    blowout_wins: int = 0
    comeback_wins: int = 0

    # streaks
    current_streak: int = 0
    current_streak_type: Optional[StreakType] = None
    longest_win_streak: int = 0
    longest_loss_streak: int = 0

    # records
    best_week: WeekMark = WeekMark()
    worst_week: WeekMark = WeekMark()
    highest_single_score: float = 0.0
    highest_single_score_week: int = 0


# ---------- head-to-head ----------

class CaptionDomination(BaseModel):
    model_config = ConfigDict(frozen=True)

    user1_wins: int = 0
    user2_wins: int = 0
    dominant_user_id: Optional[str] = None

class HeadToHeadStreak(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str
    count: int

class HeadToHeadMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    week: int
    winner_id: Optional[str] = None
    user1_battle_points: int
    user2_battle_points: int
    user1_score: float
    user2_score: float

class HeadToHeadRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    user1_id: str
    user2_id: str
    user1_wins: int = 0
    user2_wins: int = 0
    ties: int = 0
    total_matchups: int = 0
    user1_total_battle_points: int = 0
    user2_total_battle_points: int = 0
    caption_domination: Dict[Caption, CaptionDomination]
    avg_margin: float = 0.0           # winning margin in battle points, averaged over all meetings
    current_streak: Optional[HeadToHeadStreak] = None
    matchup_history: List[HeadToHeadMatch] = []


# ---------- requests ----------

class SeasonStatsRequest(BaseModel):
    user_id: str
    season_id: Optional[str] = None
    breakdowns: List[MatchupBattleBreakdown] = []       # week-ascending
    performances: Optional[Dict[int, WeeklyUserPerformance]] = None

class WinProbabilityRequest(BaseModel):
    user_stats: SeasonMatchupStats
    opponent_stats: SeasonMatchupStats

class WinProbability(BaseModel):
    probability: float

class HeadToHeadRequest(BaseModel):
    user1_id: str
    user2_id: str
    breakdowns: List[MatchupBattleBreakdown] = []
