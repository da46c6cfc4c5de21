import pytest
from pydantic import ValidationError

from pydynasty.formatting import format_number, mean_or_zero, round_half_up, round_tenth
from pydynasty.models import (
    DynastyValue,
    InjuryRecord,
    InjuryType,
    PlayerInjuryHistory,
    PlayerInput,
    RosterPlayer,
    SellWindowAlert,
)


def test_roster_player_is_frozen():
    player = RosterPlayer(
        name="Test Player",
        position="WR",
        age=24,
        dynasty_value=DynastyValue(overall_score=71.5, tier="WR2"),
        sell_window=SellWindowAlert(urgency="BUY LOW"),
    )

    assert player.score == pytest.approx(71.5)
    assert player.urgency == "BUY LOW"
    assert player.dynasty_value.model_extra == {"tier": "WR2"}

    with pytest.raises((TypeError, ValidationError)):
        player.name = "Other"  # type: ignore[attr-defined]


def test_injury_history_validation():
    with pytest.raises(ValidationError):
        PlayerInjuryHistory(major_injury_date="2024-3")
    with pytest.raises(ValidationError):
        InjuryRecord(season=2024, type="turf_toe", games_missed=1)
    with pytest.raises(ValidationError):
        InjuryRecord(season=2024, type=InjuryType.BACK, games_missed=-1)


def test_games_in_defaults_to_zero():
    history = PlayerInjuryHistory(games_played={2024: 12, 2023: -1})
    assert history.games_in(2024) == 12
    assert history.games_in(2023) == 0
    assert history.games_in(2022) == 0


def test_player_input_requires_name():
    with pytest.raises(ValidationError):
        PlayerInput(name="", position="QB")


def test_rounding_matches_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(-0.5) == 0
    assert round_tenth(1.25) == pytest.approx(1.3)
    assert mean_or_zero([]) == 0.0
    assert mean_or_zero([1, 2]) == pytest.approx(1.5)


def test_format_number_drops_integral_fraction():
    assert format_number(29.0) == "29"
    assert format_number(29.5) == "29.5"
    assert format_number(7) == "7"
