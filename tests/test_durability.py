import itertools
from datetime import date

import pytest

from pydynasty.config import DEFAULT_DURABILITY_CONFIG, durability_config_from_env
from pydynasty.durability import (
    analyze_durability,
    find_recurring_issue,
    get_durability_color,
    months_since,
    severity_score,
)
from pydynasty.models import InjuryRecord, InjuryType, PlayerInjuryHistory


def _history(games=(17, 17, 17), injuries=(), **kwargs):
    seasons = dict(zip((2024, 2023, 2022), games))
    return PlayerInjuryHistory(games_played=seasons, injuries=list(injuries), **kwargs)


def _injury(season, injury_type, games_missed=0, **kwargs):
    return InjuryRecord(season=season, type=injury_type, games_missed=games_missed, **kwargs)


def test_missing_history_is_unknown():
    analysis = analyze_durability(None, 27)
    assert analysis.durability_rating == "unknown"
    assert analysis.durability_score == 20
    assert analysis.display_text == "No injury data available"
    assert analysis.short_display == "DURABILITY: Unknown"


def test_iron_man_availability():
    analysis = analyze_durability(_history(games=(17, 17, 16)))
    assert analysis.games_played == 50
    assert analysis.games_missed == 1
    assert analysis.availability_rate == 98
    assert analysis.durability_rating == "iron_man"
    assert analysis.durability_score == 30
    assert analysis.display_text == "DURABILITY: Iron Man - 50/51 games (98%)"
    assert analysis.short_display == "Iron Man (98%)"


@pytest.mark.parametrize(
    ("games", "rating", "score"),
    [
        ((17, 17, 10), "durable", 25),
        ((17, 17, 9), "moderate", 20),
        ((17, 17, 4), "moderate", 20),
        ((17, 10, 5), "injury_prone", 12),
        ((17, 5, 4), "glass", 5),
    ],
)
def test_rating_bands(games, rating, score):
    analysis = analyze_durability(_history(games=games))
    assert analysis.durability_rating == rating
    assert analysis.durability_score == score


def test_seasons_without_games_are_not_tracked():
    analysis = analyze_durability(_history(games=(17, 0, 0)))
    assert analysis.seasons_tracked == 1
    assert analysis.availability_rate == 100
    assert analysis.display_text == "DURABILITY: Iron Man - 17/17 games (100%)"


def test_availability_is_capped_at_100():
    analysis = analyze_durability(_history(games=(18, 17, 17)))
    assert analysis.availability_rate == 100


def test_no_active_seasons_counts_as_full_availability():
    analysis = analyze_durability(_history(games=(0, 0, 0)))
    assert analysis.availability_rate == 100
    assert analysis.seasons_tracked == 0
    assert analysis.durability_score == 30


def test_recurring_issue_follows_injury_type_order():
    injuries = [
        _injury(2024, InjuryType.ANKLE_FOOT, 2),
        _injury(2023, InjuryType.ANKLE_FOOT, 1),
        _injury(2023, InjuryType.CONCUSSION, 1),
        _injury(2022, InjuryType.CONCUSSION, 1),
    ]
    analysis = analyze_durability(_history(injuries=injuries))
    assert analysis.has_recurring_issue
    assert analysis.recurring_type == InjuryType.CONCUSSION
    assert analysis.recurring_description == "2 concussions - cumulative risk"
    assert analysis.risk_factors == ["2 concussions - monitor closely", "Recurring ankle problems"]
    # 30 base, -5 recurring, -4 for two concussions
    assert analysis.durability_score == 21


def test_recurring_type_without_description():
    counts = {InjuryType.BACK: 2}
    assert find_recurring_issue(counts) == (InjuryType.BACK, None)


def test_knee_rule_covers_acl_and_other_knee():
    counts = {InjuryType.KNEE_OTHER: 2}
    assert find_recurring_issue(counts) == (InjuryType.KNEE_OTHER, "Multiple knee injuries")


def test_severity_weights_recency_and_major_injuries():
    assert severity_score([_injury(2024, InjuryType.SOFT_TISSUE, 4)]) == pytest.approx(10.5)
    assert severity_score([_injury(2022, InjuryType.SOFT_TISSUE, 4)]) == pytest.approx(4.2)
    assert severity_score([_injury(2020, InjuryType.SOFT_TISSUE, 4)]) == pytest.approx(3.5)
    major = _injury(2024, InjuryType.KNEE_ACL, 8, is_major=True)
    assert severity_score([major]) == pytest.approx(45.0)


def test_penalties_never_drop_below_floor():
    injuries = [_injury(2024, InjuryType.CONCUSSION, 4) for _ in range(3)]
    analysis = analyze_durability(_history(games=(13, 10, 4), injuries=injuries), 31)
    assert analysis.durability_rating == "glass"
    assert analysis.durability_score == 5
    assert analysis.risk_factors[0] == "SERIOUS: 3 concussions - career risk"


def test_age_and_soft_tissue_history_is_extreme_risk():
    injuries = [
        _injury(2024, InjuryType.SOFT_TISSUE),
        _injury(2023, InjuryType.SOFT_TISSUE),
    ]
    analysis = analyze_durability(_history(injuries=injuries), 31)
    assert analysis.age_injury_risk is not None
    assert analysis.age_injury_risk.level == "extreme"
    assert analysis.age_injury_risk.description == "Age 31 + soft tissue history = EXTREME RISK"
    # 30 base, -5 recurring, -8 extreme age risk
    assert analysis.durability_score == 17
    assert analysis.display_text == (
        "DURABILITY: Iron Man - 51/51 games (100%) - Chronic soft tissue issues"
    )


@pytest.mark.parametrize(
    ("age", "injuries", "games", "level"),
    [
        (28, [_injury(2024, InjuryType.SOFT_TISSUE)], (17, 17, 17), "high"),
        (30, [], (12, 12, 17), "high"),
        (27, [_injury(2024, InjuryType.KNEE_ACL, 8, is_major=True)], (9, 17, 17), "medium"),
        (26, [_injury(2024, InjuryType.SOFT_TISSUE)], (17, 17, 17), None),
    ],
)
def test_age_risk_levels(age, injuries, games, level):
    analysis = analyze_durability(_history(games=games, injuries=injuries), age)
    risk = analysis.age_injury_risk
    assert (risk.level if risk else None) == level


def test_missing_age_skips_age_risk():
    injuries = [_injury(2024, InjuryType.SOFT_TISSUE), _injury(2023, InjuryType.SOFT_TISSUE)]
    assert analyze_durability(_history(injuries=injuries)).age_injury_risk is None


@pytest.mark.parametrize(
    ("as_of", "months", "status"),
    [
        (date(2024, 7, 15), 6, "Still recovering - elevated risk"),
        (date(2024, 10, 1), 9, "Recent return - monitor workload"),
        (date(2025, 1, 1), 12, "Returned successfully - normal risk"),
        (date(2025, 7, 1), 18, "Fully recovered"),
    ],
)
def test_major_injury_recovery_timeline(as_of, months, status):
    history = _history(major_injury_date="2024-01", major_injury_type="ACL tear")
    recovery = analyze_durability(history, as_of=as_of).major_injury_recovery
    assert recovery.months_since == months
    assert recovery.recovery_status == status


def test_recent_major_injury_is_shown_in_display_text():
    history = _history(major_injury_date="2024-01", major_injury_type="ACL tear")
    analysis = analyze_durability(history, as_of=date(2024, 7, 15))
    assert analysis.display_text.endswith(" | 6 months post-ACL")

    later = analyze_durability(history, as_of=date(2025, 7, 1))
    assert "post-" not in later.display_text


def test_major_injury_without_type_uses_generic_label():
    history = _history(major_injury_date="2024-03")
    recovery = analyze_durability(history, as_of=date(2024, 5, 1)).major_injury_recovery
    assert recovery.injury == "Major injury"


def test_months_since_never_negative():
    assert months_since("2023-11", date(2024, 2, 1)) == 3
    assert months_since("2025-06", date(2024, 2, 1)) == 0


def test_durability_colors():
    assert "red" in get_durability_color("glass")
    assert "emerald" in get_durability_color("iron_man")
    assert "zinc" in get_durability_color("unknown")


def test_current_season_env_override(monkeypatch):
    monkeypatch.setenv("PYDYNASTY_CURRENT_SEASON", "2025")
    config = durability_config_from_env()
    assert config.current_season == 2025
    assert config.tracked_season_years() == (2023, 2024, 2025)


def test_invalid_current_season_env_falls_back(monkeypatch, caplog):
    monkeypatch.setenv("PYDYNASTY_CURRENT_SEASON", "next year")
    with caplog.at_level("WARNING"):
        config = durability_config_from_env()
    assert config is DEFAULT_DURABILITY_CONFIG
    assert "PYDYNASTY_CURRENT_SEASON" in caplog.text


def test_acl_recency_ratio():
    current = severity_score([_injury(2024, InjuryType.KNEE_ACL, 6)])
    two_back = severity_score([_injury(2022, InjuryType.KNEE_ACL, 6)])
    assert current / two_back == pytest.approx(2.5)


@pytest.mark.parametrize("first", range(1, 18, 2))
def test_availability_never_drops_with_more_games(first):
    for second, third in itertools.product(range(1, 17), repeat=2):
        base = analyze_durability(_history(games=(first, second, third))).availability_rate
        assert analyze_durability(_history(games=(first, second + 1, third))).availability_rate >= base
        assert analyze_durability(_history(games=(first, second, third + 1))).availability_rate >= base


@pytest.mark.parametrize("age", [None, 24, 28, 31])
def test_score_stays_in_range_for_any_games(age):
    injuries = [
        _injury(2024, InjuryType.SOFT_TISSUE, 3),
        _injury(2023, InjuryType.SOFT_TISSUE, 5),
        _injury(2022, InjuryType.SOFT_TISSUE, 2),
        _injury(2024, InjuryType.CONCUSSION, 1),
        _injury(2023, InjuryType.CONCUSSION, 1),
        _injury(2022, InjuryType.CONCUSSION, 1),
    ]
    for games in itertools.product(range(0, 18, 2), repeat=3):
        for history_injuries in ((), injuries):
            score = analyze_durability(_history(games=games, injuries=history_injuries), age).durability_score
            assert 5 <= score <= 30
