import pytest

from bhcollision.config import BinaryConfiguration, SimulationConfig
from bhcollision.simulation import run_simulation


def short_merger_config(**overrides):
    """Equal-mass binary close enough to merge within a couple of thousand steps.

    Only the Newtonian term and radiation reaction are switched on so the
    decay follows the Peters rate all the way to contact.
    """
    params = dict(
        binary=BinaryConfiguration(m1=0.5, m2=0.5, initial_separation=12.0),
        max_time=5000.0,
        record_interval=100.0,
        ringdown_duration=1000.0,
        ringdown_samples=500,
        enable_1pn=False,
        enable_2pn=False,
    )
    params.update(overrides)
    return SimulationConfig(**params)


@pytest.fixture(scope="session")
def merger_result():
    return run_simulation(short_merger_config())
