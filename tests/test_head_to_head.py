from corpsleague.services.scoring import calculate_head_to_head, calculate_matchup_battles


def _meeting(perf, week, home, away, home_total, away_total, home_caps=10.0, away_caps=10.0):
    return calculate_matchup_battles(
        f"w{week}", week, home, away,
        perf(home, week, total=home_total, captions=home_caps),
        perf(away, week, total=away_total, captions=away_caps),
    )


def test_no_meetings():
    h2h = calculate_head_to_head("a", "b", [])
    assert h2h.total_matchups == 0
    assert h2h.current_streak is None
    assert h2h.avg_margin == 0
    assert all(d.dominant_user_id is None for d in h2h.caption_domination.values())


def test_rivalry_history(perf):
    breakdowns = [
        # out of order on purpose, plus an unrelated matchup
        _meeting(perf, 3, "b", "a", 90, 80, home_caps=12, away_caps=11),   # b 10-0
        _meeting(perf, 1, "a", "b", 85, 80, home_caps=11, away_caps=10),   # a 10-0
        _meeting(perf, 2, "a", "c", 70, 60),                               # ignored
        _meeting(perf, 4, "a", "b", 80, 82, home_caps=12, away_caps=10),   # a 8-2
    ]
    h2h = calculate_head_to_head("a", "b", breakdowns)

    assert h2h.total_matchups == 3
    assert [m.week for m in h2h.matchup_history] == [1, 3, 4]
    assert (h2h.user1_wins, h2h.user2_wins, h2h.ties) == (2, 1, 0)
    assert h2h.user1_total_battle_points == 18
    assert h2h.user2_total_battle_points == 12
    assert h2h.avg_margin == (10 + 10 + 6) / 3
    assert h2h.current_streak.user_id == "a"
    assert h2h.current_streak.count == 1

    week3 = h2h.matchup_history[1]
    assert week3.winner_id == "b"
    assert (week3.user1_score, week3.user2_score) == (80, 90)
    assert (week3.user1_battle_points, week3.user2_battle_points) == (0, 10)

    ge1 = h2h.caption_domination["GE1"]
    assert (ge1.user1_wins, ge1.user2_wins) == (2, 1)
    assert ge1.dominant_user_id == "a"


def test_tie_clears_streak(perf):
    breakdowns = [
        _meeting(perf, 1, "a", "b", 85, 80, home_caps=11),
        _meeting(perf, 2, "a", "b", 80, 80),
    ]
    h2h = calculate_head_to_head("a", "b", breakdowns)
    assert h2h.ties == 1
    assert h2h.current_streak is None
    assert h2h.caption_domination["P"].dominant_user_id == "a"
