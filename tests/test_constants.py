import numpy as np

import bhcollision
import bhcollision.constants as C


def test_calibration_constants_pinned():
    assert C.EQUAL_MASS_FINAL_MASS_FRACTION == 0.965
    assert C.RINGDOWN_AMPLITUDE_CALIBRATION == 1.5
    assert C.MAX_REMNANT_SPIN == 0.998
    assert C.PN_BREAKDOWN_SPEED == 2.0
    assert C.MAX_INSPIRAL_STEPS == 2_000_000_000


def test_spin_axes_are_unit_y():
    assert np.allclose(C.DEFAULT_SPIN_AXIS, [0.0, 1.0, 0.0])
    assert np.allclose(C.REMNANT_SPIN_AXIS, [0.0, 1.0, 0.0])


def test_package_exports_version():
    assert isinstance(bhcollision.__version__, str)
    assert "run_simulation" in bhcollision.__all__
