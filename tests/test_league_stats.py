import pytest

from corpsleague.schemas.recap import DayRecap, WeeklyPairing
from corpsleague.services.league_stats import (
    build_league_stats,
    build_weekly_performances,
    collect_week_shows,
    week_for_day,
)


@pytest.fixture
def recaps():
    return [
        DayRecap.model_validate({
            "off_season_day": 3,
            "shows": [{
                "show_id": "opener-1",
                "event_name": "Opener",
                "results": [
                    {"uid": "a", "total_score": 80, "ge_score": 20, "visual_score": 30, "music_score": 30, "placement": 1},
                    {"uid": "b", "total_score": 75, "ge_score": 18, "visual_score": 27, "music_score": 30, "placement": 2},
                ],
            }],
        }),
        DayRecap.model_validate({
            "off_season_day": 10,
            "shows": [{
                "event_name": "Midseason",
                "results": [
                    {"uid": "a", "total_score": 85, "ge_score": 20, "visual_score": 30, "music_score": 30},
                    {"uid": "b", "total_score": 90, "ge_score": 24, "visual_score": 33, "music_score": 33},
                ],
            }],
        }),
    ]


@pytest.fixture
def schedule():
    return {
        1: [WeeklyPairing(user1="a", user2="b")],
        2: [WeeklyPairing(user1="a", user2="b"), WeeklyPairing(user1="c", user2="d")],
    }


def test_week_for_day():
    assert week_for_day(1) == 1
    assert week_for_day(7) == 1
    assert week_for_day(8) == 2
    assert week_for_day(15) == 3
    assert week_for_day(10, days_per_week=5) == 2


def test_collect_week_shows_carries_aggregates(recaps):
    shows = collect_week_shows("a", 1, recaps)
    assert len(shows) == 1
    assert shows[0].show_id == "opener-1"
    assert shows[0].placement == 1
    assert shows[0].captions is None
    assert (shows[0].ge_score, shows[0].visual_score, shows[0].music_score) == (20, 30, 30)


def test_weekly_performance_derives_captions_from_aggregates(recaps):
    perf = build_weekly_performances("a", recaps, max_week=1)[1]
    assert perf.captions["GE1"] == perf.captions["GE2"] == 10
    assert perf.captions["CG"] == 10
    assert perf.shows[0].captions["P"] == 10


def test_collect_week_shows_falls_back_to_event_name(recaps):
    shows = collect_week_shows("a", 2, recaps)
    assert shows[0].show_id == "Midseason"


def test_collect_week_shows_prefers_explicit_captions():
    day = DayRecap.model_validate({
        "off_season_day": 1,
        "shows": [{"event_name": "X", "results": [{"uid": "a", "captions": {"B": 19.5}}]}],
    })
    shows = collect_week_shows("a", 1, [day])
    assert shows[0].captions == {"B": 19.5}
    assert shows[0].score == 0


def test_weekly_performances_momentum(recaps):
    perfs = build_weekly_performances("b", recaps, max_week=2)
    assert sorted(perfs) == [1, 2]
    assert perfs[1].momentum is None
    assert perfs[2].momentum == 15
    assert perfs[2].captions["B"] == 11


def test_momentum_needs_immediately_previous_week():
    days = [
        DayRecap.model_validate({"off_season_day": 2, "shows": [{"event_name": "A", "results": [{"uid": "a", "total_score": 70}]}]}),
        DayRecap.model_validate({"off_season_day": 16, "shows": [{"event_name": "B", "results": [{"uid": "a", "total_score": 75}]}]}),
    ]
    perfs = build_weekly_performances("a", days, max_week=3)
    assert sorted(perfs) == [1, 3]
    assert perfs[3].momentum is None


def test_league_stats_end_to_end(recaps, schedule):
    result = build_league_stats(recaps, schedule, ["a", "b", "c"], season_id="2025")

    assert sorted(result.weekly_breakdowns) == [1, 2]
    week1 = result.weekly_breakdowns[1]
    assert len(week1) == 1
    assert week1[0].matchup_id == "matchup-w1-a-b"
    assert (week1[0].home_battle_points, week1[0].away_battle_points) == (7, 0)

    # c vs d had no shows at all
    week2 = result.weekly_breakdowns[2]
    assert len(week2) == 1
    assert (week2[0].home_battle_points, week2[0].away_battle_points) == (0, 11)

    a = result.member_stats["a"]
    assert a.season_id == "2025"
    assert (a.wins, a.losses, a.ties) == (1, 1, 0)
    assert a.current_streak_type == "L"
    assert a.total_battle_points_for == 7
    assert a.total_battle_points_against == 11
    assert (a.best_week.week, a.best_week.battle_points, a.best_week.opponent_id) == (1, 7, "b")
    assert (a.worst_week.week, a.worst_week.battle_points) == (2, 0)
    assert a.highest_single_score == 85
    assert a.highest_single_score_week == 2
    assert a.best_caption == "GE1"
    assert a.worst_caption == "B"

    b = result.member_stats["b"]
    assert b.momentum_battles_won == 1
    assert b.blowout_wins == 1
    assert b.longest_win_streak == 1

    c = result.member_stats["c"]
    assert (c.wins, c.losses, c.ties) == (0, 0, 0)
    assert c.current_streak_type is None


def test_one_sided_matchup_scores_empty_side(recaps):
    result = build_league_stats(recaps, {1: [WeeklyPairing(user1="ghost", user2="a")]}, ["a", "ghost"])
    [breakdown] = result.weekly_breakdowns[1]
    assert breakdown.winner_id == "a"
    assert breakdown.home_battle_points == 0
    assert result.member_stats["ghost"].losses == 1
    assert result.member_stats["a"].wins == 1


def test_bye_week_show_is_not_season_high():
    days = [
        DayRecap.model_validate({"off_season_day": 1, "shows": [{"event_name": "A", "results": [
            {"uid": "a", "total_score": 70}, {"uid": "b", "total_score": 60},
        ]}]}),
        DayRecap.model_validate({"off_season_day": 9, "shows": [{"event_name": "B", "results": [
            {"uid": "a", "total_score": 99},
        ]}]}),
    ]
    result = build_league_stats(days, {1: [WeeklyPairing(user1="a", user2="b")]}, ["a", "b"], current_week=2)
    assert result.weekly_breakdowns[2] == []
    a = result.member_stats["a"]
    assert (a.highest_single_score, a.highest_single_score_week) == (70, 1)


def test_explicit_current_week_limits_processing(recaps, schedule):
    result = build_league_stats(recaps, schedule, ["a", "b"], current_week=1)
    assert sorted(result.weekly_breakdowns) == [1]
    assert result.member_stats["a"].wins == 1


def test_empty_inputs():
    assert build_league_stats([], {}, ["a"]).member_stats == {}
    assert build_league_stats([DayRecap(off_season_day=1)], {}, []).weekly_breakdowns == {}


def test_pipeline_is_deterministic(recaps, schedule):
    assert build_league_stats(recaps, schedule, ["a", "b"]) == build_league_stats(recaps, schedule, ["a", "b"])


def test_current_week_is_capped_at_last_known_week(recaps, schedule):
    result = build_league_stats(recaps, schedule, ["a", "b"], current_week=10**7)
    assert sorted(result.weekly_breakdowns) == [1, 2]
    assert result == build_league_stats(recaps, schedule, ["a", "b"])
