"""
Battle-point scoring: weekly performances -> matchup breakdowns -> season stats.
Everything here is a pure function over in-memory values.
"""

from corpsleague.services.scoring.performance import (
    aggregate_caption_scores,
    create_weekly_performance,
    derive_caption_scores,
    empty_performance,
    normalize_captions,
)

from corpsleague.services.scoring.battles import (
    calculate_caption_battles,
    calculate_high_single_battle,
    calculate_matchup_battles,
    calculate_momentum_battle,
    calculate_total_score_battle,
    count_caption_wins,
    format_battle_score,
    matchup_description,
    matchup_id_for,
)

from corpsleague.services.scoring.season import (
    calculate_season_stats,
    calculate_win_probability,
    empty_season_stats,
    initialize_caption_win_rates,
)

from corpsleague.services.scoring.head_to_head import calculate_head_to_head

__all__ = [
    "aggregate_caption_scores",
    "create_weekly_performance",
    "derive_caption_scores",
    "empty_performance",
    "normalize_captions",
    "calculate_caption_battles",
    "calculate_high_single_battle",
    "calculate_matchup_battles",
    "calculate_momentum_battle",
    "calculate_total_score_battle",
    "count_caption_wins",
    "format_battle_score",
    "matchup_description",
    "matchup_id_for",
    "calculate_season_stats",
    "calculate_win_probability",
    "empty_season_stats",
    "initialize_caption_win_rates",
    "calculate_head_to_head",
]
