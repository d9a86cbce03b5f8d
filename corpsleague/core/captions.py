# corpsleague/core/captions.py
from __future__ import annotations

from typing import Dict, Literal, Tuple

# ========= Caption model =========

Caption = Literal["GE1", "GE2", "VP", "VA", "CG", "B", "MA", "P"]

# Fixed judging order. Every tie-break and every per-caption output follows it.
CAPTIONS: Tuple[Caption, ...] = ("GE1", "GE2", "VP", "VA", "CG", "B", "MA", "P")

CAPTION_NAMES: Dict[str, str] = {
    "GE1": "General Effect 1",
    "GE2": "General Effect 2",
    "VP": "Visual Proficiency",
    "VA": "Visual Analysis",
    "CG": "Color Guard",
    "B": "Brass",
    "MA": "Music Analysis",
    "P": "Percussion",
}

# Aggregate recap scores -> the captions they are split across
CAPTION_GROUPS: Dict[str, Tuple[Caption, ...]] = {
    "ge": ("GE1", "GE2"),
    "visual": ("VP", "VA", "CG"),
    "music": ("B", "MA", "P"),
}


# ========= Battle points =========

BATTLE_POINTS: Dict[str, int] = {
    "caption": 1,  # per caption won
    "total": 1,
    "high_single": 1,
    "momentum": 1,
}

MAX_BATTLE_POINTS: int = (
    len(CAPTIONS) * BATTLE_POINTS["caption"]
    + BATTLE_POINTS["total"]
    + BATTLE_POINTS["high_single"]
    + BATTLE_POINTS["momentum"]
)

# margin (in battle points) thresholds
CLUTCH_MARGIN = 2
BLOWOUT_MARGIN = 5


# ========= Public helpers =========

def zero_captions() -> Dict[str, float]:
    return {c: 0.0 for c in CAPTIONS}


def caption_display_name(caption: str) -> str:
    return CAPTION_NAMES.get(caption, caption)
