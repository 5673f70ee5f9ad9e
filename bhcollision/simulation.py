"""Inspiral -> merger -> ringdown pipeline.

:func:`run_simulation` integrates the PN inspiral until the merger predicate
fires, evaluates the remnant fits once, and then synthesizes the ringdown
analytically.  The run is synchronous and deterministic.
"""
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple, Union

import numpy as np

from . import constants as C
from .analysis import (
    GWStrain,
    OrbitalParameters,
    compute_gw_strain,
    compute_orbital_params,
    time_to_merger_estimate,
    wrap_phase,
)
from .config import BinaryConfiguration, SimulationConfig
from .integrators import IntegratorState, adaptive_timestep, make_derivative, rk4_step
from .merger import (
    QNMParameters,
    RemnantProperties,
    compute_qnm_222,
    compute_remnant,
    remnant_body,
    ringdown_strain,
    should_merge,
)
from .physics import Body

logger = logging.getLogger(__name__)


class Phase(IntEnum):
    INSPIRAL = 0
    MERGER = 1
    RINGDOWN = 2
    POST_RINGDOWN = 3

    @property
    def label(self):
        return self.name.lower().replace("_", "-")


@dataclass(frozen=True)
class InspiralFrame:
    """Snapshot of the binary during the inspiral (or at merger)."""

    time: float
    phase: Phase
    body1: Body
    body2: Body
    orbital: OrbitalParameters
    gw: GWStrain

    @property
    def bodies(self):
        return (self.body1, self.body2)


@dataclass(frozen=True)
class RingdownFrame:
    """Snapshot of the single remnant after merger."""

    time: float
    phase: Phase
    remnant: Body
    gw: GWStrain

    @property
    def bodies(self):
        return (self.remnant,)


SimulationFrame = Union[InspiralFrame, RingdownFrame]


@dataclass(frozen=True)
class SimulationResult:
    frames: Tuple[SimulationFrame, ...]
    config: BinaryConfiguration
    remnant: Optional[RemnantProperties] = None
    qnm: Optional[QNMParameters] = None
    merger_time: float = 0.0
    total_gw_cycles: float = 0.0
    total_energy_radiated: float = 0.0
    merger_occurred: bool = False
    num_inspiral_frames: int = 0
    num_ringdown_frames: int = 0
    steps: int = 0

    def inspiral_frames(self):
        return self.frames[: self.num_inspiral_frames]

    def ringdown_frames(self):
        return self.frames[self.num_inspiral_frames:]


def initialize_binary(config):
    """Place both bodies in the x-z plane about the centre of mass.

    The relative velocity is the circular speed ``sqrt(M/r0)`` boosted by
    ``sqrt((1+e)/(1-e))`` so that eccentric orbits start at pericentre.
    """
    total_mass = config.m1 + config.m2
    r0 = config.initial_separation
    e = config.eccentricity

    v_rel = np.sqrt(total_mass / r0) * np.sqrt((1.0 + e) / (1.0 - e))

    body1 = Body(
        config.m1,
        [r0 * config.m2 / total_mass, 0.0, 0.0],
        [0.0, 0.0, v_rel * config.m2 / total_mass],
        spin_parameter=config.chi1,
        spin_axis=config.spin_axis1,
    )
    body2 = Body(
        config.m2,
        [-r0 * config.m1 / total_mass, 0.0, 0.0],
        [0.0, 0.0, -v_rel * config.m1 / total_mass],
        spin_parameter=config.chi2,
        spin_axis=config.spin_axis2,
    )
    return body1, body2


def _make_inspiral_frame(time, body1, body2, config, phase):
    return InspiralFrame(
        time=time,
        phase=phase,
        body1=body1,
        body2=body2,
        orbital=compute_orbital_params(body1, body2),
        gw=compute_gw_strain(body1, body2, config.observer_distance, config.observer_inclination),
    )


@dataclass
class _InspiralOutcome:
    frames: list
    body1: Body
    body2: Body
    merged: bool
    merger_time: float
    gw_cycles: float
    steps: int


def _run_inspiral(config, body1, body2):
    state = IntegratorState.from_bodies(body1, body2)
    total_mass = body1.mass + body2.mass
    deriv = make_derivative(
        body1.mass, body2.mass, config.enable_1pn, config.enable_2pn, config.enable_25pn
    )

    initial = compute_orbital_params(body1, body2)
    estimated_merger_time = time_to_merger_estimate(
        initial.symmetric_mass_ratio, initial.total_mass, initial.separation
    )
    logger.info(
        "Inspiral from r = %.2f M, Peters merger estimate %.1f M",
        initial.separation,
        estimated_merger_time,
    )

    frames = []
    last_record_time = -config.record_interval
    last_phase = None
    gw_cycles = 0.0
    steps = 0
    callback = config.progress_callback

    while state.time < config.max_time:
        body1 = body1.with_state(state.pos1, state.vel1)
        body2 = body2.with_state(state.pos2, state.vel2)

        if should_merge(body1, body2):
            frames.append(_make_inspiral_frame(state.time, body1, body2, config, Phase.MERGER))
            logger.info("Merger detected at t = %.4f M after %d steps", state.time, steps)
            return _InspiralOutcome(frames, body1, body2, True, state.time, gw_cycles, steps)

        # sample the plunge much more densely
        interval = config.record_interval
        if state.separation < C.PLUNGE_SEPARATION_FACTOR * total_mass:
            interval = config.record_interval / C.PLUNGE_RECORD_DIVISOR

        if state.time - last_record_time >= interval:
            frame = _make_inspiral_frame(state.time, body1, body2, config, Phase.INSPIRAL)
            frames.append(frame)
            last_record_time = state.time

            phase = frame.orbital.orbital_phase
            if last_phase is not None:
                # GW phase runs at twice the orbital phase
                gw_cycles += abs(wrap_phase(phase - last_phase)) / np.pi
            last_phase = phase

        if callback is not None and steps % C.INSPIRAL_PROGRESS_EVERY == 0:
            callback(state.time, min(1.0, state.time / estimated_merger_time), "inspiral")

        dt = adaptive_timestep(state, config.integrator, total_mass)
        state = rk4_step(state, dt, deriv)
        steps += 1

        if steps > C.MAX_INSPIRAL_STEPS:
            logger.warning("Step ceiling of %d reached at t = %.4f M", C.MAX_INSPIRAL_STEPS, state.time)
            break

    body1 = body1.with_state(state.pos1, state.vel1)
    body2 = body2.with_state(state.pos2, state.vel2)
    return _InspiralOutcome(frames, body1, body2, False, 0.0, gw_cycles, steps)


def _synthesize_ringdown(config, remnant, qnm, merger_time):
    frames = []
    callback = config.progress_callback
    ringdown_dt = config.ringdown_duration / config.ringdown_samples

    for i in range(config.ringdown_samples):
        t_ring = i * ringdown_dt
        gw = ringdown_strain(qnm, t_ring, config.observer_distance, config.observer_inclination)
        phase = Phase.RINGDOWN if gw.amplitude > C.RINGDOWN_SILENCE_AMPLITUDE else Phase.POST_RINGDOWN
        frame = RingdownFrame(
            time=merger_time + t_ring,
            phase=phase,
            remnant=remnant_body(remnant, t_ring),
            gw=gw,
        )
        frames.append(frame)

        if callback is not None and i % C.RINGDOWN_PROGRESS_EVERY == 0:
            callback(frame.time, i / config.ringdown_samples, "ringdown")
    return frames


def run_simulation(config: SimulationConfig) -> SimulationResult:
    """Run a complete binary black hole merger simulation.

    A run that reaches ``max_time`` (or the step ceiling) without merging
    returns only inspiral frames with ``merger_occurred=False``.
    """
    binary = config.binary.normalized()
    logger.info("Starting %s run: m1=%.4f m2=%.4f sep=%.2f M", config.pn_order_label,
                binary.m1, binary.m2, binary.initial_separation)
    body1, body2 = initialize_binary(binary)

    inspiral = _run_inspiral(config, body1, body2)
    frames = list(inspiral.frames)
    num_inspiral = len(frames)

    if not inspiral.merged:
        logger.info("No merger within t = %.1f M (%d steps)", config.max_time, inspiral.steps)
        return SimulationResult(
            frames=tuple(frames),
            config=binary,
            total_gw_cycles=inspiral.gw_cycles,
            num_inspiral_frames=num_inspiral,
            steps=inspiral.steps,
        )

    remnant = compute_remnant(inspiral.body1, inspiral.body2)
    merger_gw = compute_gw_strain(
        inspiral.body1, inspiral.body2, config.observer_distance, config.observer_inclination
    )
    qnm = compute_qnm_222(remnant.mass, remnant.spin, merger_gw.amplitude * config.observer_distance)
    logger.info(
        "Remnant: mass %.6f M, spin %.4f, kick %.3e c", remnant.mass, remnant.spin, remnant.kick_velocity
    )

    frames.extend(_synthesize_ringdown(config, remnant, qnm, inspiral.merger_time))
    logger.info("Run complete: %d frames, %.1f GW cycles", len(frames), inspiral.gw_cycles)

    return SimulationResult(
        frames=tuple(frames),
        config=binary,
        remnant=remnant,
        qnm=qnm,
        merger_time=inspiral.merger_time,
        total_gw_cycles=inspiral.gw_cycles,
        total_energy_radiated=remnant.energy_radiated,
        merger_occurred=True,
        num_inspiral_frames=num_inspiral,
        num_ringdown_frames=config.ringdown_samples,
        steps=inspiral.steps,
    )
