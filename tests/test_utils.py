import math

import pytest

from bhcollision import constants as C
from bhcollision.utils import UnitConversion, distance_to_display, format_summary, time_to_display


def test_unit_conversion_sixty_solar_masses():
    units = UnitConversion.from_solar_masses(60.0)
    mass = 60.0 * C.SOLAR_MASS
    assert units.total_mass_kg == pytest.approx(mass)
    assert units.length_m == pytest.approx(C.G_SI * mass / C.C_SI ** 2)
    assert units.time_s == pytest.approx(C.G_SI * mass / C.C_SI ** 3)
    # about 89 km and 0.3 ms
    assert 8.8e4 < units.length_m < 9.0e4
    assert 2.9e-4 < units.time_s < 3.0e-4
    assert units.to_seconds(1000.0) == pytest.approx(1000.0 * units.time_s)
    assert units.to_meters(2.0) == pytest.approx(2.0 * units.length_m)
    assert math.isclose(units.length_m / units.time_s, C.C_SI)


def test_distance_to_display_ranges():
    assert distance_to_display(0) == "0 m"
    assert distance_to_display(2000) == "2.00 km"
    assert distance_to_display(-2000) == "-2.00 km"
    assert distance_to_display(50) == "50.0 m"


def test_time_to_display_ranges():
    assert time_to_display(-1) == "N/A"
    assert time_to_display(0) == "0 sec"
    assert time_to_display(5) == "5.00 sec"
    assert time_to_display(0.25) == "250.00 ms"
    assert time_to_display(2e-5) == "20.00 us"


def test_format_summary_merged(merger_result):
    text = format_summary(merger_result)
    assert "Remnant Black Hole:" in text
    assert "Mass = 0.965000 M" in text
    assert "Quasinormal Mode" in text


def test_format_summary_without_merger():
    from bhcollision.config import SimulationConfig
    from bhcollision.simulation import run_simulation

    text = format_summary(run_simulation(SimulationConfig(max_time=10.0)))
    assert "No merger occurred" in text
