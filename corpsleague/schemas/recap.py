from __future__ import annotations
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from corpsleague.core.captions import Caption
from corpsleague.schemas.matchup import MatchupBattleBreakdown
from corpsleague.schemas.season import SeasonMatchupStats

# Raw recap documents as the fetching layer hands them over.
# Every score is optional; defaults are applied once, in the performance aggregator.

class RecapResult(BaseModel):
    uid: str
    total_score: Optional[float] = None
    ge_score: Optional[float] = None
    visual_score: Optional[float] = None
    music_score: Optional[float] = None
    captions: Optional[Dict[Caption, float]] = None
    placement: Optional[int] = None

class RecapShow(BaseModel):
    show_id: Optional[str] = None
    event_name: str
    results: List[RecapResult] = Field(default_factory=list)

class DayRecap(BaseModel):
    off_season_day: int
    shows: List[RecapShow] = Field(default_factory=list)

class WeeklyPairing(BaseModel):
    user1: str     # home
    user2: str     # away

class LeagueStats(BaseModel):
    member_stats: Dict[str, SeasonMatchupStats] = Field(default_factory=dict)
    weekly_breakdowns: Dict[int, List[MatchupBattleBreakdown]] = Field(default_factory=dict)

class LeagueStatsRequest(BaseModel):
    recaps: List[DayRecap] = Field(default_factory=list)
    weekly_matchups: Dict[int, List[WeeklyPairing]] = Field(default_factory=dict)
    member_ids: List[str] = Field(default_factory=list)
    current_week: Optional[int] = None                  # defaults to the latest week seen
    season_id: Optional[str] = None
