"""Render-ready timeline built from a finished simulation.

Every quantity is converted to single precision for upload to a GPU
renderer.  Discrete quantities (phase, number of black holes) are never
interpolated; they are taken from the nearer endpoint frame.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from . import constants as C

F32 = np.float32


@dataclass(frozen=True)
class RenderBody:
    position: np.ndarray
    mass: F32
    schwarzschild_radius: F32
    spin: F32
    spin_axis: np.ndarray
    isco_radius: F32

    @classmethod
    def from_body(cls, body, spin_axis=None):
        axis = body.spin_axis if spin_axis is None else spin_axis
        return cls(
            position=np.asarray(body.pos, dtype=F32),
            mass=F32(body.mass),
            schwarzschild_radius=F32(body.schwarzschild_radius),
            spin=F32(body.spin_parameter),
            spin_axis=np.asarray(axis, dtype=F32),
            isco_radius=F32(body.isco_radius),
        )


@dataclass(frozen=True)
class RenderFrame:
    time: F32
    num_black_holes: int
    black_holes: Tuple[RenderBody, ...]
    gw_strain_plus: F32
    gw_strain_cross: F32
    gw_amplitude: F32
    gw_frequency: F32
    orbital_phase: F32
    # 0=inspiral, 1=merger, 2=ringdown, 3=post-ringdown
    phase: int


def _lerp(a, b, alpha):
    return F32(a * (F32(1.0) - alpha) + b * alpha)


def _blend_axis(a, b, alpha, fallback):
    axis = a * (F32(1.0) - alpha) + b * alpha
    norm = np.linalg.norm(axis)
    if norm < 1e-6:
        return fallback.copy()
    return (axis / norm).astype(F32)


def _blend_body(a, b, alpha, nearer):
    return RenderBody(
        position=(a.position * (F32(1.0) - alpha) + b.position * alpha).astype(F32),
        mass=_lerp(a.mass, b.mass, alpha),
        schwarzschild_radius=_lerp(a.schwarzschild_radius, b.schwarzschild_radius, alpha),
        spin=_lerp(a.spin, b.spin, alpha),
        spin_axis=_blend_axis(a.spin_axis, b.spin_axis, alpha, nearer.spin_axis),
        isco_radius=_lerp(a.isco_radius, b.isco_radius, alpha),
    )


class CollisionTimeline:
    """Time-indexed sequence of :class:`RenderFrame` objects."""

    def __init__(self, frames=(), total_duration=0.0, merger_time=0.0, merger_frame_index=-1):
        self.frames = tuple(frames)
        self.total_duration = F32(total_duration)
        self.merger_time = F32(merger_time)
        self.merger_frame_index = merger_frame_index
        self._times = np.array([f.time for f in self.frames], dtype=F32)

    def __len__(self):
        return len(self.frames)

    @classmethod
    def build(cls, result):
        """Convert a :class:`~bhcollision.simulation.SimulationResult`."""
        if not result.frames:
            return cls()

        frames = []
        merger_index = -1
        for i, f in enumerate(result.frames):
            if f.phase <= 1:
                black_holes = (RenderBody.from_body(f.body1), RenderBody.from_body(f.body2))
                orbital_phase = f.orbital.orbital_phase
                if f.phase == 1 and merger_index < 0:
                    merger_index = i
            else:
                black_holes = (RenderBody.from_body(f.remnant, C.REMNANT_SPIN_AXIS),)
                orbital_phase = 0.0

            frames.append(
                RenderFrame(
                    time=F32(f.time),
                    num_black_holes=len(black_holes),
                    black_holes=black_holes,
                    gw_strain_plus=F32(f.gw.h_plus),
                    gw_strain_cross=F32(f.gw.h_cross),
                    gw_amplitude=F32(f.gw.amplitude),
                    gw_frequency=F32(f.gw.frequency),
                    orbital_phase=F32(orbital_phase),
                    phase=int(f.phase),
                )
            )

        return cls(
            frames,
            total_duration=result.frames[-1].time,
            merger_time=result.merger_time,
            merger_frame_index=merger_index,
        )

    def interpolate(self, t) -> Optional[RenderFrame]:
        """Render data at time ``t``, clamped to ``[0, total_duration]``.

        Returns ``None`` for an empty timeline.
        """
        if not self.frames:
            return None

        t = F32(min(max(float(t), 0.0), float(self.total_duration)))

        hi = int(np.searchsorted(self._times, t, side="right"))
        if hi == 0:
            return self.frames[0]
        if hi >= len(self.frames):
            return self.frames[-1]
        lo = hi - 1

        a = self.frames[lo]
        b = self.frames[hi]
        if t <= a.time:
            return a
        if t >= b.time:
            return b

        alpha = F32(min(max((t - a.time) / (b.time - a.time), 0.0), 1.0))
        nearer = a if alpha < 0.5 else b

        black_holes = []
        for i in range(nearer.num_black_holes):
            if i < a.num_black_holes and i < b.num_black_holes:
                black_holes.append(
                    _blend_body(a.black_holes[i], b.black_holes[i], alpha, nearer.black_holes[i])
                )
            else:
                black_holes.append(nearer.black_holes[i])

        return RenderFrame(
            time=t,
            num_black_holes=nearer.num_black_holes,
            black_holes=tuple(black_holes),
            gw_strain_plus=_lerp(a.gw_strain_plus, b.gw_strain_plus, alpha),
            gw_strain_cross=_lerp(a.gw_strain_cross, b.gw_strain_cross, alpha),
            gw_amplitude=_lerp(a.gw_amplitude, b.gw_amplitude, alpha),
            gw_frequency=_lerp(a.gw_frequency, b.gw_frequency, alpha),
            orbital_phase=_lerp(a.orbital_phase, b.orbital_phase, alpha),
            phase=nearer.phase,
        )
