"""Named binary configurations and integrator fidelity levels."""
from .config import BinaryConfiguration, IntegratorConfig

BINARY_PRESETS = {
    "equal-mass": BinaryConfiguration(m1=0.5, m2=0.5, initial_separation=20.0),
    # GW150914: 36 + 29 solar masses
    "gw150914": BinaryConfiguration(m1=36.0, m2=29.0, initial_separation=20.0).normalized(),
    "unequal-4to1": BinaryConfiguration(m1=0.8, m2=0.2, initial_separation=20.0),
    "spinning": BinaryConfiguration(m1=0.5, m2=0.5, chi1=0.6, chi2=0.3, initial_separation=20.0),
}

FIDELITY_PRESETS = {
    "standard": IntegratorConfig(),
    "maximum": IntegratorConfig(dt_min=1e-10, dt_max=0.1, safety_factor=1e-6),
}


def get_binary_preset(name: str) -> BinaryConfiguration:
    if name not in BINARY_PRESETS:
        raise KeyError(f"Preset '{name}' not found")
    return BINARY_PRESETS[name]


def get_fidelity_preset(name: str) -> IntegratorConfig:
    if name not in FIDELITY_PRESETS:
        raise KeyError(f"Fidelity preset '{name}' not found")
    return FIDELITY_PRESETS[name]
