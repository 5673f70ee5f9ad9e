"""Command line entry point: run one merger and export it as JSON."""
import argparse
import logging
import sys
from dataclasses import replace

from .analysis import EnergyMonitor, time_to_merger_estimate
from .config import BinaryConfiguration, SimulationConfig
from .logging_config import setup_logging
from .presets import BINARY_PRESETS, FIDELITY_PRESETS, get_binary_preset, get_fidelity_preset
from .simulation import Phase, run_simulation
from .state_io import export_to_json
from .timeline import CollisionTimeline
from .utils import UnitConversion, format_summary

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "output/simulation_data.json"
# GW150914-like system
DEFAULT_SOLAR_MASSES = 60.0
DEFAULT_RECORD_INTERVAL = 1.0


def build_parser():
    parser = argparse.ArgumentParser(
        prog="bh-collision",
        description="Binary black hole inspiral, merger and ringdown simulator.",
        epilog="Example: bh-collision --m1 0.6 --m2 0.4 --sep 25 --chi1 0.3",
    )
    parser.add_argument("--m1", type=float, help="mass of BH1 (fraction of M, default 0.5)")
    parser.add_argument("--m2", type=float, help="mass of BH2 (fraction of M, default 0.5)")
    parser.add_argument("--chi1", type=float, help="spin of BH1 in [0, 1) (default 0.0)")
    parser.add_argument("--chi2", type=float, help="spin of BH2 in [0, 1) (default 0.0)")
    parser.add_argument("--sep", type=float, help="initial separation in M (default 20.0)")
    parser.add_argument("--ecc", type=float, help="orbital eccentricity (default 0.0)")
    parser.add_argument("--output", default=DEFAULT_OUTPUT, help="output JSON file")
    parser.add_argument("--no-1pn", action="store_true", help="disable 1PN corrections")
    parser.add_argument("--no-2pn", action="store_true", help="disable 2PN corrections")
    parser.add_argument("--no-25pn", action="store_true", help="disable 2.5PN radiation reaction")
    parser.add_argument(
        "--solar-mass",
        type=float,
        default=DEFAULT_SOLAR_MASSES,
        help="total mass in solar masses, for SI conversion info",
    )
    parser.add_argument(
        "--record-interval",
        type=float,
        default=DEFAULT_RECORD_INTERVAL,
        help="time between recorded frames in M",
    )
    parser.add_argument("--preset", choices=sorted(BINARY_PRESETS), help="start from a named binary")
    parser.add_argument(
        "--fidelity", choices=sorted(FIDELITY_PRESETS), default="standard", help="integrator preset"
    )
    parser.add_argument("--max-time", type=float, default=1e6, help="give up after this time in M")
    parser.add_argument(
        "--energy-csv",
        help="write the energy drift history of a Newtonian run to this CSV file",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def config_from_args(args, progress_callback=None) -> SimulationConfig:
    binary = get_binary_preset(args.preset) if args.preset else BinaryConfiguration()
    overrides = {
        "m1": args.m1,
        "m2": args.m2,
        "chi1": args.chi1,
        "chi2": args.chi2,
        "initial_separation": args.sep,
        "eccentricity": args.ecc,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides:
        binary = replace(binary, **overrides)

    return SimulationConfig(
        binary=binary,
        integrator=get_fidelity_preset(args.fidelity),
        max_time=args.max_time,
        record_interval=args.record_interval,
        enable_1pn=not args.no_1pn,
        enable_2pn=not args.no_2pn,
        enable_25pn=not args.no_25pn,
        progress_callback=progress_callback,
    )


def energy_drift(result):
    """Binding-energy drift over the recorded inspiral frames."""
    monitor = EnergyMonitor(max_points=max(1, result.num_inspiral_frames))
    frames = [f for f in result.inspiral_frames() if f.phase == Phase.INSPIRAL]
    if not frames:
        return monitor
    monitor.set_initial_energy(frames[0].body1, frames[0].body2)
    for f in frames:
        monitor.update(f.body1, f.body2)
    return monitor


def _print_progress(time, fraction, phase):
    print(f"\r  [{phase}] t = {time:.1f} M ({fraction * 100.0:.1f}%)", end="", flush=True)


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        config = config_from_args(args, progress_callback=_print_progress)
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    binary = config.binary.normalized()
    print()
    print("=" * 64)
    print("  BINARY BLACK HOLE COLLISION SIMULATOR")
    print(f"  Post-Newtonian order: {config.pn_order_label}")
    print("=" * 64)
    print()
    print(binary.describe())

    t_est = time_to_merger_estimate(
        binary.symmetric_mass_ratio, binary.total_mass, binary.initial_separation
    )
    print(f"  Estimated merger time: {t_est:.0f} M")

    units = UnitConversion.from_solar_masses(args.solar_mass)
    print(f"\n  SI Conversion ({args.solar_mass:.1f} solar masses):")
    print(f"    1 M = {units.length_m:.4e} meters")
    print(f"    1 M = {units.time_s:.4e} seconds")
    print(f"    Estimated merger time: {units.to_seconds(t_est):.4f} seconds\n")

    print("  Running simulation...")
    result = run_simulation(config)
    print("\r  Simulation complete!                              ")

    print(format_summary(result))

    # energy is only conserved without PN corrections and radiation reaction
    if config.pn_order_label == "Newtonian":
        monitor = energy_drift(result)
        print(f"  Max relative energy drift: {monitor.max_drift:.3e}")
        if args.energy_csv:
            try:
                monitor.export_csv(args.energy_csv)
            except OSError as e:
                logger.error("Failed to write %s: %s", args.energy_csv, e)
                return 1

    try:
        path = export_to_json(result, args.output)
    except OSError as e:
        logger.error("Failed to export to %s: %s", args.output, e)
        return 1
    print(f"  Data exported to: {path}")
    print(f"  Total frames: {len(result.frames)}")

    timeline = CollisionTimeline.build(result)
    print(
        f"  Render timeline: {float(timeline.total_duration):.1f} M duration, "
        f"{len(timeline)} frames"
    )
    if timeline.merger_frame_index >= 0:
        print(
            f"  Merger at frame {timeline.merger_frame_index} "
            f"(t = {float(timeline.merger_time):.1f} M)"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
