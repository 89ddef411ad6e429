import os
import random

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

from duckherd.core.config import SimulationConfig


@pytest.fixture
def config_dict():
    return SimulationConfig().to_dict()


@pytest.fixture
def quiet_config_dict():
    """Config with every duck force switched off."""
    return SimulationConfig(
        dogRepulsionStrength=0.0,
        separationStrength=0.0,
        cohesionStrength=0.0,
        ringAttractionStrength=0.0,
        boundaryForceStrength=0.0,
        damping=1.0,
    ).to_dict()


@pytest.fixture
def rng():
    return random.Random(1234)
