"""Physical constants and fixed algorithmic thresholds.

Everything inside the physics core is expressed in geometrized units
(G = c = 1) with the total system mass ``M`` as the unit of mass, length
and time.  The SI values below are only used for optional unit conversion.
"""
import numpy as np

# --- SI constants (unit conversion only) ---
SOLAR_MASS = 1.989e30  # kg
G_SI = 6.674e-11  # m^3 kg^-1 s^-2
C_SI = 2.998e8  # m/s
C_KM_S = 2.998e5  # km/s

# --- Degeneracy guards ---
SEPARATION_EPSILON = 1e-10
SPIN_EPSILON = 1e-10
ONE_MINUS_SPIN_FLOOR = 1e-10

# --- Merger detection ---
DEFAULT_CRITICAL_FACTOR = 0.5
# Relative speed (in units of c) above which the PN expansion is abandoned.
PN_BREAKDOWN_SPEED = 2.0

# --- Remnant fits ---
MAX_RADIATED_FRACTION = 0.1
MAX_REMNANT_SPIN = 0.998
EQUAL_MASS_ETA = 0.25
EQUAL_MASS_TOLERANCE = 0.01
EQUAL_MASS_FINAL_MASS_FRACTION = 0.965
RINGDOWN_AMPLITUDE_CALIBRATION = 1.5

# --- Orchestrator ---
MAX_INSPIRAL_STEPS = 2_000_000_000
INSPIRAL_PROGRESS_EVERY = 10_000
RINGDOWN_PROGRESS_EVERY = 50
PLUNGE_SEPARATION_FACTOR = 10.0
PLUNGE_RECORD_DIVISOR = 4000.0
RINGDOWN_SILENCE_AMPLITUDE = 1e-30

# Orbital plane is x-z, so orbital angular momentum points along +-y.
DEFAULT_SPIN_AXIS = np.array([0.0, 1.0, 0.0])
REMNANT_SPIN_AXIS = np.array([0.0, 1.0, 0.0])
