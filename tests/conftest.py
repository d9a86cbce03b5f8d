from __future__ import annotations

from typing import Dict, Optional, Union

import pytest

from corpsleague.core.captions import CAPTIONS
from corpsleague.schemas.performance import WeeklyUserPerformance
from corpsleague.services.cache import clear_cache


def build_perf(
    user_id: str,
    week: int = 1,
    total: float = 0.0,
    high: Optional[float] = None,
    captions: Union[float, Dict[str, float]] = 0.0,
    momentum: Optional[float] = None,
) -> WeeklyUserPerformance:
    if isinstance(captions, dict):
        caps = {c: float(captions.get(c, 0.0)) for c in CAPTIONS}
    else:
        caps = {c: float(captions) for c in CAPTIONS}
    return WeeklyUserPerformance(
        user_id=user_id,
        week=week,
        total_score=total,
        show_count=1 if total else 0,
        captions=caps,
        high_single_score=total if high is None else high,
        momentum=momentum,
    )


@pytest.fixture
def perf():
    """Factory for hand-built weekly performances."""
    return build_perf


@pytest.fixture(autouse=True)
def _fresh_caches():
    clear_cache()
    yield
    clear_cache()
