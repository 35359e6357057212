import pytest
from pydantic import ValidationError

from timegrid.core.config import Settings


def test_default_window_is_seven_to_seven():
    window = Settings().default_window()
    assert (window.start_time, window.end_time) == ("07:00", "19:00")
    assert window.total_minutes == 720


def test_window_can_be_overridden_from_environment(monkeypatch):
    monkeypatch.setenv("TIMEGRID_DAY_WINDOW_START", "08:00")
    monkeypatch.setenv("TIMEGRID_DAY_WINDOW_END", "16:30")
    window = Settings().default_window()
    assert (window.start_minutes, window.end_minutes) == (480, 990)


def test_invalid_window_times_are_rejected():
    with pytest.raises(ValidationError):
        Settings(day_window_start="7am")
    with pytest.raises(ValidationError):
        Settings(day_window_start="19:00", day_window_end="07:00")


def test_grid_step_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(grid_step_minutes=0)


def test_cors_origins_accept_comma_separated_string():
    settings = Settings(cors_origins="http://a.example, http://b.example")
    assert settings.cors_origins == ["http://a.example", "http://b.example"]

    settings = Settings(cors_origins='["http://c.example"]')
    assert settings.cors_origins == ["http://c.example"]
