"""Conversion from geometrized units to SI and display helpers."""
from dataclasses import dataclass

from . import constants as C


@dataclass(frozen=True)
class UnitConversion:
    total_mass_kg: float
    # one M in metres, G M / c^2
    length_m: float
    # one M in seconds, G M / c^3
    time_s: float

    @classmethod
    def from_solar_masses(cls, solar_masses):
        total_mass_kg = solar_masses * C.SOLAR_MASS
        return cls(
            total_mass_kg=total_mass_kg,
            length_m=C.G_SI * total_mass_kg / (C.C_SI * C.C_SI),
            time_s=C.G_SI * total_mass_kg / (C.C_SI ** 3),
        )

    def to_seconds(self, t_geometric):
        return t_geometric * self.time_s

    def to_meters(self, length_geometric):
        return length_geometric * self.length_m


def distance_to_display(dist_meters: float) -> str:
    if dist_meters == 0:
        return "0 m"
    if abs(dist_meters) >= 1e3:
        return f"{dist_meters/1e3:.2f} km"
    return f"{dist_meters:.1f} m"


def time_to_display(seconds: float) -> str:
    if seconds < 0:
        return "N/A"
    if seconds == 0:
        return "0 sec"
    if seconds >= 1:
        return f"{seconds:.2f} sec"
    if seconds >= 1e-3:
        return f"{seconds * 1e3:.2f} ms"
    return f"{seconds * 1e6:.2f} us"


def format_summary(result) -> str:
    """Human readable report of a finished run."""
    cfg = result.config
    lines = [
        "",
        "=" * 64,
        "  BINARY BLACK HOLE MERGER SIMULATION - RESULTS",
        "=" * 64,
        "",
        "Initial Conditions:",
        f"  m1 = {cfg.m1:.4f} M, m2 = {cfg.m2:.4f} M (q = {cfg.mass_ratio:.2f})",
        f"  chi1 = {cfg.chi1:.3f}, chi2 = {cfg.chi2:.3f}",
        f"  Initial separation = {cfg.initial_separation:.2f} M",
        f"  Eccentricity = {cfg.eccentricity:.4f}",
        "",
        f"  Symmetric mass ratio eta = {cfg.symmetric_mass_ratio:.4f}",
        f"  Chirp mass M_c = {cfg.chirp_mass:.4f} M",
        "",
        "Simulation Statistics:",
        f"  Total frames recorded: {len(result.frames)}",
        f"  Inspiral frames: {result.num_inspiral_frames}",
        f"  Ringdown frames: {result.num_ringdown_frames}",
        f"  Integration steps: {result.steps}",
        f"  Total GW cycles: {result.total_gw_cycles:.1f}",
        "",
    ]

    if result.merger_occurred:
        rem, qnm = result.remnant, result.qnm
        lines += [
            "Merger:",
            f"  Merger time = {result.merger_time:.2f} M",
            f"  Energy radiated = {result.total_energy_radiated:.4f} M "
            f"({result.total_energy_radiated * 100.0:.2f}%)",
            "",
            "Remnant Black Hole:",
            f"  Mass = {rem.mass:.6f} M",
            f"  Spin = {rem.spin:.6f}",
            f"  Kick velocity = {rem.kick_velocity:.6f} c ({rem.kick_velocity * C.C_KM_S:.1f} km/s)",
            "  Position = ({:.4f}, {:.4f}, {:.4f})".format(*rem.position),
            "",
            "Quasinormal Mode (l=2, m=2, n=0):",
            f"  Frequency = {qnm.frequency:.6f} / M_f",
            f"  Damping time = {qnm.damping_time:.4f} M_f",
            f"  Amplitude = {qnm.amplitude:.6e}",
        ]
    else:
        lines.append("  No merger occurred within simulation time.")

    lines += ["", "=" * 64, ""]
    return "\n".join(lines)
