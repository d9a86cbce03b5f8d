from __future__ import annotations
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from corpsleague.core.captions import Caption

class ShowResultInput(BaseModel):
    show_id: str
    show_name: str
    score: float = 0.0
    placement: Optional[int] = None
    captions: Optional[Dict[Caption, float]] = None   # may be partial or missing; normalized by the aggregator
    # used only when captions is missing: split evenly across GE / visual / music captions
    ge_score: Optional[float] = None
    visual_score: Optional[float] = None
    music_score: Optional[float] = None

class ShowResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    show_id: str
    show_name: str
    score: float
    placement: Optional[int] = None
    captions: Dict[Caption, float]                    # all 8 captions present

class WeeklyUserPerformance(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str
    week: int
    total_score: float = 0.0
    show_count: int = 0
    captions: Dict[Caption, float]                    # summed across the week's shows
    shows: List[ShowResult] = Field(default_factory=list)
    high_single_score: float = 0.0
    high_single_show_id: Optional[str] = None
    previous_week_score: Optional[float] = None
    momentum: Optional[float] = None                  # total_score - previous_week_score; None without history

class WeeklyPerformanceRequest(BaseModel):
    user_id: str
    week: int
    shows: List[ShowResultInput] = Field(default_factory=list)
    previous_week_total: Optional[float] = None
