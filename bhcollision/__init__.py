"""Binary black hole merger simulation utilities."""

from importlib.metadata import PackageNotFoundError, version

from .physics import Body, center_of_mass
from .post_newtonian import compute_acceleration, compute_relative_acceleration
from .integrators import IntegratorState, rk4_step, adaptive_timestep
from .analysis import compute_orbital_params, compute_gw_strain
from .merger import compute_remnant, compute_qnm_222, ringdown_strain, should_merge
from .config import (
    CONFIG_VERSION,
    BinaryConfiguration,
    IntegratorConfig,
    SimulationConfig,
    load_config,
    save_config,
)
from .simulation import Phase, SimulationResult, run_simulation
from .timeline import CollisionTimeline
from .state_io import export_to_json, load_export

try:
    __version__ = version("bhcollision")
except PackageNotFoundError:
    # Fallback when package metadata is unavailable (e.g. running from source)
    __version__ = "0.0.0"

__all__ = [
    "Body",
    "center_of_mass",
    "compute_acceleration",
    "compute_relative_acceleration",
    "IntegratorState",
    "rk4_step",
    "adaptive_timestep",
    "compute_orbital_params",
    "compute_gw_strain",
    "compute_remnant",
    "compute_qnm_222",
    "ringdown_strain",
    "should_merge",
    "CONFIG_VERSION",
    "BinaryConfiguration",
    "IntegratorConfig",
    "SimulationConfig",
    "load_config",
    "save_config",
    "Phase",
    "SimulationResult",
    "run_simulation",
    "CollisionTimeline",
    "export_to_json",
    "load_export",
    "__version__",
]
