from __future__ import annotations
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict

from corpsleague.core.captions import Caption
from corpsleague.schemas.performance import WeeklyUserPerformance

BattleType = Literal["caption", "total", "high_single", "momentum"]

class CaptionBattle(BaseModel):
    model_config = ConfigDict(frozen=True)

    caption: Caption
    home_score: float
    away_score: float
    winner_id: Optional[str] = None       # None on an exact tie
    differential: float                   # home - away

class BattleResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: BattleType
    caption: Optional[Caption] = None
    home_value: Optional[float] = None    # None only for an uncontested momentum battle
    away_value: Optional[float] = None
    winner_id: Optional[str] = None
    differential: Optional[float] = None
    points_awarded: int = 1

class CaptionBattlesWon(BaseModel):
    model_config = ConfigDict(frozen=True)

    home: int = 0
    away: int = 0

class MatchupBattleBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    matchup_id: str
    week: int
    home_user_id: str
    away_user_id: str
    home_battle_points: int
    away_battle_points: int
    caption_battles: List[CaptionBattle]
    caption_battles_won: CaptionBattlesWon
    total_score_battle: BattleResult
    high_single_battle: BattleResult
    momentum_battle: BattleResult
    all_battles: List[BattleResult]       # 8 caption battles, then total, high single, momentum
    winner_id: Optional[str] = None
    is_tie: bool
    margin: int                           # |home - away| battle points
    is_clutch: bool
    is_blowout: bool

class MatchupRequest(BaseModel):
    matchup_id: Optional[str] = None      # defaults to matchup-w{week}-{home}-{away}
    week: int
    home_user_id: str
    away_user_id: str
    home_performance: WeeklyUserPerformance
    away_performance: WeeklyUserPerformance

class MatchupResult(BaseModel):
    breakdown: MatchupBattleBreakdown
    battle_score: str                     # e.g. "7-4", home first
    description: str                      # Tied | Blowout | Clutch Win | Win
