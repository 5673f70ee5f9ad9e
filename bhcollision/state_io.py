import json
import logging
from pathlib import Path

from .simulation import InspiralFrame

logger = logging.getLogger(__name__)


def _vec(v):
    return [float(x) for x in v]


def _body_dict(body):
    return {
        "mass": body.mass,
        "position": _vec(body.pos),
        "velocity": _vec(body.vel),
    }


_EMPTY_BODY = {"mass": 0.0, "position": [0.0, 0.0, 0.0], "velocity": [0.0, 0.0, 0.0]}


def _frame_dict(frame, qnm_frequency):
    if isinstance(frame, InspiralFrame):
        bh1 = _body_dict(frame.body1)
        bh2 = _body_dict(frame.body2)
        orbital = {
            "separation": frame.orbital.separation,
            "frequency": frame.orbital.orbital_frequency,
            "energy": frame.orbital.energy,
        }
    else:
        bh1 = _body_dict(frame.remnant)
        bh2 = dict(_EMPTY_BODY)
        orbital = {"separation": 0.0, "frequency": qnm_frequency, "energy": 0.0}

    return {
        "time": frame.time,
        "phase": int(frame.phase),
        "bh1": bh1,
        "bh2": bh2,
        "orbital": orbital,
        "gw": {
            "h_plus": frame.gw.h_plus,
            "h_cross": frame.gw.h_cross,
            "amplitude": frame.gw.amplitude,
            "frequency": frame.gw.frequency,
        },
    }


def result_to_dict(result):
    """Serialize a :class:`~bhcollision.simulation.SimulationResult`."""
    data = {
        "metadata": {
            "units": "geometrized (G=c=1)",
            "mass_unit": "total_mass_M",
            "length_unit": "M",
            "time_unit": "M",
            "num_frames": len(result.frames),
            "merger_occurred": result.merger_occurred,
            "merger_time": result.merger_time,
            "total_gw_cycles": result.total_gw_cycles,
            "energy_radiated_fraction": result.total_energy_radiated,
        },
        "config": {
            "m1": result.config.m1,
            "m2": result.config.m2,
            "chi1": result.config.chi1,
            "chi2": result.config.chi2,
            "initial_separation": result.config.initial_separation,
            "eccentricity": result.config.eccentricity,
        },
    }

    qnm_frequency = 0.0
    if result.merger_occurred:
        rem, qnm = result.remnant, result.qnm
        qnm_frequency = qnm.frequency
        data["remnant"] = {
            "mass": rem.mass,
            "spin": rem.spin,
            "kick_velocity": rem.kick_velocity,
            "energy_radiated": rem.energy_radiated,
            "position": _vec(rem.position),
            "qnm_frequency": qnm.frequency,
            "qnm_damping_time": qnm.damping_time,
        }

    data["frames"] = [_frame_dict(f, qnm_frequency) for f in result.frames]
    return data


def export_to_json(result, filename):
    """Write ``result`` to ``filename`` as JSON and return the resolved path.

    Missing parent directories are created.  Filesystem errors propagate.
    """
    path = Path(filename)
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(result_to_dict(result), f, indent=2)
    logger.info("Exported %d frames to %s", len(result.frames), path)
    return path.resolve()


def load_export(filename):
    """Read a document written by :func:`export_to_json`."""
    return json.loads(Path(filename).read_text(encoding="utf-8"))
