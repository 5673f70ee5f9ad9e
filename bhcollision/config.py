"""Run configuration.

A single immutable tree of dataclasses describes a simulation run.  It is
built once, handed to :func:`bhcollision.simulation.run_simulation` and never
modified afterwards.
"""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Callable, Dict, Optional, Tuple

CONFIG_VERSION = 1

Vector = Tuple[float, float, float]


@dataclass(frozen=True)
class BinaryConfiguration:
    m1: float = 0.5
    m2: float = 0.5
    chi1: float = 0.0
    chi2: float = 0.0
    spin_axis1: Vector = (0.0, 1.0, 0.0)
    spin_axis2: Vector = (0.0, 1.0, 0.0)
    initial_separation: float = 20.0
    eccentricity: float = 0.0
    # observer
    inclination: float = 0.0
    distance: float = 1e6

    def __post_init__(self):
        if self.m1 <= 0.0 or self.m2 <= 0.0:
            raise ValueError(f"masses must be positive, got m1={self.m1}, m2={self.m2}")
        for name in ("chi1", "chi2"):
            chi = getattr(self, name)
            if not 0.0 <= chi < 1.0:
                raise ValueError(f"{name} must lie in [0, 1), got {chi}")
        if not 0.0 <= self.eccentricity < 1.0:
            raise ValueError(f"eccentricity must lie in [0, 1), got {self.eccentricity}")
        if self.initial_separation <= 0.0:
            raise ValueError("initial_separation must be positive")
        if self.distance <= 0.0:
            raise ValueError("observer distance must be positive")
        # tuples keep the dataclass hashable and the axes immutable
        object.__setattr__(self, "spin_axis1", tuple(float(x) for x in self.spin_axis1))
        object.__setattr__(self, "spin_axis2", tuple(float(x) for x in self.spin_axis2))

    @property
    def total_mass(self) -> float:
        return self.m1 + self.m2

    @property
    def mass_ratio(self) -> float:
        return self.m1 / self.m2

    @property
    def symmetric_mass_ratio(self) -> float:
        return self.m1 * self.m2 / self.total_mass ** 2

    @property
    def chirp_mass(self) -> float:
        return self.total_mass * self.symmetric_mass_ratio ** 0.6

    def normalized(self) -> "BinaryConfiguration":
        """Return a copy with masses rescaled so that ``m1 + m2 = 1``."""
        total = self.total_mass
        return replace(self, m1=self.m1 / total, m2=self.m2 / total)

    def describe(self) -> str:
        return (
            "Binary Config:\n"
            f"  m1 = {self.m1:.4f}, m2 = {self.m2:.4f} (q = {self.mass_ratio:.2f})\n"
            f"  chi1 = {self.chi1:.3f}, chi2 = {self.chi2:.3f}\n"
            f"  separation = {self.initial_separation:.2f} M\n"
            f"  eccentricity = {self.eccentricity:.4f}\n"
            f"  inclination = {self.inclination:.4f} rad\n"
            f"  distance = {self.distance:.2e} M\n"
        )


@dataclass(frozen=True)
class IntegratorConfig:
    dt_initial: float = 0.1
    dt_min: float = 1e-6
    dt_max: float = 1.0
    # fraction of the local orbital period used as the time step
    safety_factor: float = 0.1
    adaptive: bool = True

    def __post_init__(self):
        if self.dt_initial <= 0.0 or self.dt_min <= 0.0 or self.dt_max <= 0.0:
            raise ValueError("integrator time steps must be positive")
        if self.dt_min > self.dt_max:
            raise ValueError(f"dt_min ({self.dt_min}) exceeds dt_max ({self.dt_max})")
        if self.safety_factor <= 0.0:
            raise ValueError("safety_factor must be positive")


ProgressCallback = Callable[[float, float, str], None]


@dataclass(frozen=True)
class SimulationConfig:
    binary: BinaryConfiguration = field(default_factory=BinaryConfiguration)
    integrator: IntegratorConfig = field(default_factory=IntegratorConfig)

    max_time: float = 1e6
    record_interval: float = 10.0
    ringdown_duration: float = 100.0
    ringdown_samples: int = 500

    enable_1pn: bool = True
    enable_2pn: bool = True
    enable_25pn: bool = True

    progress_callback: Optional[ProgressCallback] = field(default=None, compare=False, repr=False)
    version: int = CONFIG_VERSION

    def __post_init__(self):
        if self.version != CONFIG_VERSION:
            raise ValueError(
                f"unsupported config version {self.version} (expected {CONFIG_VERSION})"
            )
        if self.max_time < 0.0:
            raise ValueError("max_time must be non-negative")
        if self.record_interval < 0.0:
            raise ValueError("record_interval must be non-negative")
        if self.ringdown_duration < 0.0:
            raise ValueError("ringdown_duration must be non-negative")
        if self.ringdown_samples < 1:
            raise ValueError("ringdown_samples must be at least 1")

    @property
    def observer_distance(self) -> float:
        return self.binary.distance

    @property
    def observer_inclination(self) -> float:
        return self.binary.inclination

    @property
    def pn_order_label(self) -> str:
        if self.enable_25pn:
            return "2.5PN"
        if self.enable_2pn:
            return "2PN"
        if self.enable_1pn:
            return "1PN"
        return "Newtonian"


def _dataclass_from_dict(cls, d: Dict[str, Any]):
    kwargs = {}
    for f in fields(cls):
        if f.name not in d:
            continue
        val = d[f.name]
        if f.name in ("binary", "integrator") and isinstance(val, dict):
            nested = BinaryConfiguration if f.name == "binary" else IntegratorConfig
            val = _dataclass_from_dict(nested, val)
        elif f.name.startswith("spin_axis"):
            val = tuple(val)
        kwargs[f.name] = val
    return cls(**kwargs)


def config_to_dict(config: SimulationConfig) -> Dict[str, Any]:
    d = asdict(config)
    d.pop("progress_callback", None)
    d["binary"]["spin_axis1"] = list(d["binary"]["spin_axis1"])
    d["binary"]["spin_axis2"] = list(d["binary"]["spin_axis2"])
    return d


def config_from_dict(d: Dict[str, Any]) -> SimulationConfig:
    d = dict(d)
    d.pop("progress_callback", None)
    return _dataclass_from_dict(SimulationConfig, d)


def load_config(path: str) -> SimulationConfig:
    with open(path, "r", encoding="utf-8") as f:
        d = json.load(f)
    return config_from_dict(d)


def save_config(config: SimulationConfig, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config_to_dict(config), f, indent=2)
