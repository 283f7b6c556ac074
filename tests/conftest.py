from pathlib import Path

import pytest


@pytest.fixture
def weather_path():
    """Path to the play-tennis example dataset."""
    return Path(__file__).resolve().parents[1] / "examples" / "weather.arff"
