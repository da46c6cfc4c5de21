import pytest

from pydynasty.config import DEFAULT_DIAGNOSIS_CONFIG
from pydynasty.diagnosis import classify, diagnose_team, group_by_position
from pydynasty.diagnosis.classifier import championship_window_years
from pydynasty.models import (
    Classification,
    DynastyValue,
    Position,
    RosterPlayer,
    SellWindowAlert,
)


def _player(name, position, score, age=26, urgency="HOLD", reason="", elite_years=0):
    return RosterPlayer(
        name=name,
        position=position,
        age=age,
        dynasty_value=DynastyValue(overall_score=score, years_of_elite_production=elite_years),
        sell_window=SellWindowAlert(urgency=urgency, reason=reason),
    )


def _contender_roster():
    return [
        _player("Quinn", "QB", 85, elite_years=4),
        _player("Rex", "RB", 82),
        _player("Rudy", "RB", 78),
        _player("Ray", "RB", 70),
        _player("Wade", "WR", 88, elite_years=5),
        _player("Wes", "WR", 80),
        _player("Walt", "WR", 76),
        _player("Tate", "TE", 72),
    ]


def _rebuild_roster():
    return [
        _player("Quincy", "QB", 40, age=23),
        _player("Rico", "RB", 45, age=22),
        _player("Ron", "RB", 40, age=22),
        _player("Reed", "RB", 35, age=22),
        _player("Will", "WR", 50, age=23),
        _player("Wyatt", "WR", 45, age=23),
        _player("Warren", "WR", 40, age=23),
        _player("Troy", "TE", 30, age=24),
    ]


@pytest.mark.parametrize(
    ("value", "rating"),
    [(80, "elite"), (79.9, "strong"), (65, "strong"), (50, "average"), (35, "weak"), (34.9, "dire")],
)
def test_strength_rating_boundaries(value, rating):
    assert DEFAULT_DIAGNOSIS_CONFIG.strength_for(value) == rating


def test_classify_thresholds():
    assert classify(60, 0, 70) == (Classification.CONTENDER, 60)
    assert classify(130, 0, 90) == (Classification.CONTENDER, 95)
    assert classify(59, 0, 70) == (Classification.STUCK, 70)
    assert classify(0, 100, 60) == (Classification.REBUILD, 90)


def test_low_average_forces_rebuild_with_confidence_floor():
    assert classify(0, 40, 45) == (Classification.REBUILD, 50)


def test_contender_roster():
    diagnosis = diagnose_team(_contender_roster())
    assert diagnosis.classification == Classification.CONTENDER
    assert diagnosis.confidence == 95
    assert diagnosis.metrics.avg_starter_score == 79
    assert diagnosis.metrics.elite_assets == 6
    assert diagnosis.summary == (
        "Championship-caliber roster with 6 elite assets and 79 avg starter score."
    )
    assert diagnosis.outlook == "Championship window: 3-4 years. Maximize this core NOW."
    assert diagnosis.positions[Position.RB].avg_score == 77
    assert diagnosis.positions[Position.RB].strength_rating == "strong"
    assert "QB room is elite (85 avg)" in diagnosis.strengths
    assert "6 elite-tier assets (75+ score)" in diagnosis.strengths
    assert diagnosis.weaknesses == []


def test_contender_keeps_sell_soon_players_and_adds_aging_move():
    roster = _contender_roster() + [
        _player("Vet", "RB", 50, age=29, urgency="SELL SOON", reason="Age cliff"),
    ]
    diagnosis = diagnose_team(roster)
    assert diagnosis.classification == Classification.CONTENDER
    assert diagnosis.recommendations.sells == []
    assert diagnosis.recommendations.moves[-1] == "Accept aging stars - their window aligns with yours"
    assert [player.name for player in diagnosis.positions[Position.RB].depth] == ["Vet"]


def test_holds_list_high_value_hold_players():
    diagnosis = diagnose_team(_contender_roster())
    assert diagnosis.recommendations.holds == [
        "Quinn (85 pts, 4+ elite years)",
        "Rex (82 pts, 0+ elite years)",
        "Rudy (78 pts, 0+ elite years)",
    ]


def test_rebuild_roster():
    diagnosis = diagnose_team(_rebuild_roster())
    assert diagnosis.classification == Classification.REBUILD
    assert diagnosis.confidence == 80
    assert diagnosis.metrics.young_assets == 8
    assert diagnosis.summary == (
        "Rebuilding roster with 8 young assets. Focus on accumulating picks and youth."
    )
    assert "8 players age 25 or under - strong youth core" in diagnosis.strengths
    assert "TE room is dire (30 avg)" in diagnosis.weaknesses


def test_rebuild_sells_in_roster_order_capped_at_three():
    sellers = [
        _player(f"Seller {idx}", "WR", 20, age=30, urgency="SELL SOON" if idx % 2 else "SELL NOW", reason="Declining")
        for idx in range(5)
    ]
    diagnosis = diagnose_team(_rebuild_roster() + sellers)
    assert diagnosis.classification == Classification.REBUILD
    assert diagnosis.recommendations.sells == [
        "Seller 0 (SELL NOW: Declining)",
        "Seller 1 (SELL SOON: Declining)",
        "Seller 2 (SELL NOW: Declining)",
    ]
    assert diagnosis.metrics.aging_assets == 5


def test_stuck_in_the_middle():
    roster = [
        _player(f"{position}{idx}", position, 60, age=27)
        for position, count in (("QB", 1), ("RB", 3), ("WR", 3), ("TE", 1))
        for idx in range(count)
    ]
    diagnosis = diagnose_team(roster)
    assert diagnosis.classification == Classification.STUCK
    assert diagnosis.confidence == 70
    assert diagnosis.summary == (
        "Roster lacks elite ceiling for contention but has too much value to tank. Decision time."
    )
    assert diagnosis.recommendations.moves[0] == "PICK A DIRECTION: Either commit to contention or rebuild"


def test_empty_roster_is_rebuild():
    diagnosis = diagnose_team([])
    assert diagnosis.classification == Classification.REBUILD
    assert diagnosis.confidence == 50
    assert diagnosis.metrics.avg_starter_score == 0
    assert all(group.strength_rating == "dire" for group in diagnosis.positions.values())


def test_untracked_positions_are_not_grouped_but_count_roster_wide():
    kicker = _player("Kicker", "K", 90)
    groups = group_by_position(_contender_roster() + [kicker])
    assert all(kicker not in members for members in groups.values())

    diagnosis = diagnose_team(_contender_roster() + [kicker])
    assert diagnosis.metrics.elite_assets == 7
    assert diagnosis.metrics.total_roster_value == pytest.approx(631 + 90)


def test_starters_are_chosen_by_dynasty_value():
    roster = [
        _player("Backup", "QB", 50),
        _player("Starter", "QB", 90),
    ]
    group = diagnose_team(roster).positions[Position.QB]
    assert [player.name for player in group.starters] == ["Starter"]
    assert [player.name for player in group.depth] == ["Backup"]


def test_old_starters_close_the_window():
    roster = [_player(player.name, player.position, player.score, age=29) for player in _contender_roster()]
    diagnosis = diagnose_team(roster)
    assert "Avg starter age 29 - window closing" in diagnosis.weaknesses
    assert diagnosis.outlook == "Championship window: 2-3 years. Maximize this core NOW."


@pytest.mark.parametrize(("age", "years"), [(24, 4), (26, 3), (28, 2), (30, 1), (40, 1)])
def test_championship_window_years(age, years):
    assert championship_window_years(age) == years


def test_young_contender_roster():
    roster = [
        _player("QB1", "QB", 85, age=26),
        _player("RB1", "RB", 90, age=24),
        _player("RB2", "RB", 80, age=25),
        _player("RB3", "RB", 70, age=24),
        _player("WR1", "WR", 88, age=25),
        _player("WR2", "WR", 75, age=26),
        _player("WR3", "WR", 60, age=24),
        _player("TE1", "TE", 72, age=26),
    ]
    diagnosis = diagnose_team(roster)
    assert diagnosis.classification == Classification.CONTENDER
    assert diagnosis.confidence >= 90
    assert diagnosis.metrics.elite_assets == 5
    assert diagnosis.metrics.avg_starter_score == 78


def test_two_elite_assets_without_strong_rooms_is_stuck():
    roster = [
        _player("QB1", "QB", 58, age=27),
        _player("RB1", "RB", 75, age=27),
        _player("RB2", "RB", 50, age=27),
        _player("RB3", "RB", 49, age=27),
        _player("WR1", "WR", 75, age=27),
        _player("WR2", "WR", 50, age=27),
        _player("WR3", "WR", 49, age=27),
        _player("TE1", "TE", 58, age=27),
    ]
    diagnosis = diagnose_team(roster)
    assert diagnosis.classification == Classification.STUCK
    assert diagnosis.confidence == 70
    assert diagnosis.metrics.elite_assets == 2
    assert diagnosis.metrics.avg_starter_score == 58
    assert all(
        group.strength_rating not in ("elite", "strong") for group in diagnosis.positions.values()
    )
