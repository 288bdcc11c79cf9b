"""CLI main entry point."""

import argparse
import logging
from typing import List, Optional

from gravity_lace.logging_config import setup_logging
from gravity_lace.physics.diagnostics import Diagnostics
from gravity_lace.physics.integrators.symplectic_euler import KERNELS
from gravity_lace.physics.simulation import Simulation
from gravity_lace.presets import get_preset, list_presets
from gravity_lace.utils.config import Config, load_config, save_config

logger = logging.getLogger(__name__)

# CLI flag -> Config field, applied only when the flag is given
_OVERRIDES = {
    "preset": "preset",
    "ticks": "ticks",
    "dt": "dt",
    "substeps": "substeps",
    "kernel": "kernel",
    "G": "gravitational_constant",
    "seed": "seed",
    "debug_every": "debug_every",
    "log_level": "log_level",
}


def build_config(args: argparse.Namespace) -> Config:
    """Config from --config (or defaults) with command-line overrides applied."""
    config = load_config(args.config) if args.config else Config()
    overrides = {
        field: getattr(args, flag)
        for flag, field in _OVERRIDES.items()
        if getattr(args, flag) is not None
    }
    if overrides:
        # Re-run validation on the merged values
        merged = dict(config.__dict__)
        merged.update(overrides)
        config = Config(**merged)
    return config


def run_simulation(config: Config, plot_path: Optional[str] = None) -> Simulation:
    """Run a preset for config.ticks ticks, printing a diagnostics table."""
    preset_kwargs = dict(config.preset_params)
    preset_kwargs.setdefault("gravitational_constant", config.gravitational_constant)
    preset_kwargs.setdefault("seed", config.seed)
    preset = get_preset(config.preset, **preset_kwargs)

    sim = Simulation.from_config(config)
    positions, velocities, masses = preset.generate()
    sim.populate(positions, velocities, masses, names=preset.names)

    diagnostics = Diagnostics(config.gravitational_constant, config.mass_epsilon)

    print(f"Running simulation: {preset.name} with {sim.n_bodies} bodies")
    print(f"Integrator: {sim.integrator.name} ({config.kernel}), substeps: {config.substeps}, dt: {config.dt}")

    bodies = sim.bodies()
    K0, U0, E0 = diagnostics.compute_energies(bodies)
    P0 = diagnostics.total_momentum(bodies).magnitude
    L0 = diagnostics.angular_momentum(bodies).magnitude

    times, energies, momenta = [0.0], [E0], [P0]

    print(f"{'Tick':<8} {'Time':<12} {'K':<12} {'U':<12} {'E':<12} {'|P|':<12} {'|L|':<12} {'dE/E0':<10}")
    print("-" * 94)
    print(f"{0:<8} {0.0:<12.4g} {K0:<12.4g} {U0:<12.4g} {E0:<12.4g} {P0:<12.4g} {L0:<12.4g} {0.0:<10.4f}%")

    for tick in range(1, config.ticks + 1):
        sim.tick(config.dt)

        if tick % config.debug_every == 0 or tick == config.ticks:
            bodies = sim.bodies()
            K, U, E = diagnostics.compute_energies(bodies)
            P = diagnostics.total_momentum(bodies).magnitude
            L = diagnostics.angular_momentum(bodies).magnitude
            dE = (E - E0) / abs(E0) * 100 if abs(E0) > 0 else 0.0
            times.append(sim.time)
            energies.append(E)
            momenta.append(P)
            print(f"{tick:<8} {sim.time:<12.4g} {K:<12.4g} {U:<12.4g} {E:<12.4g} {P:<12.4g} {L:<12.4g} {dE:<10.4f}%")

    if plot_path:
        from gravity_lace.io.plots import plot_diagnostics

        print(f"Writing diagnostics plot to {plot_path}...")
        plot_diagnostics(times, energies, momenta, plot_path, title=preset.name)

    print("Simulation complete!")
    return sim


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="gravity-lace - Newtonian N-body simulation")

    # Simulation parameters
    parser.add_argument('--preset', type=str, default=None, choices=list_presets(),
                        help='Preset scenario (default: two_body)')
    parser.add_argument('--ticks', type=int, default=None,
                        help='Number of ticks to run')
    parser.add_argument('--dt', type=float, default=None,
                        help='Simulation seconds per tick')
    parser.add_argument('--substeps', type=int, default=None,
                        help='Substeps per tick')
    parser.add_argument('--kernel', type=str, default=None, choices=list(KERNELS),
                        help='Force kernel')
    parser.add_argument('--G', type=float, default=None,
                        help='Gravitational constant (default: SI value)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducibility')

    # Configuration
    parser.add_argument('--config', type=str, default=None,
                        help='Load configuration from a .json/.yaml file')
    parser.add_argument('--save-config', type=str, default=None,
                        help='Write the effective configuration to a file')

    # Output
    parser.add_argument('--debug-every', type=int, default=None,
                        help='Print diagnostics every N ticks')
    parser.add_argument('--log-level', type=str, default=None,
                        help='Logging level (DEBUG, INFO, WARNING, ...)')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Also write logs to this file')
    parser.add_argument('--plot', type=str, default=None,
                        help='Write an energy/momentum drift chart to this image path')

    # Info
    parser.add_argument('--list-presets', action='store_true',
                        help='List available presets and exit')

    args = parser.parse_args(argv)

    if args.list_presets:
        print("Available presets:")
        for name in list_presets():
            print(f"  - {name}")
        return 0

    config = build_config(args)
    setup_logging(config.log_level, args.log_file)
    logger.info("Configuration: %s", config)

    if args.save_config:
        save_config(config, args.save_config)
        print(f"Configuration saved to {args.save_config}")

    run_simulation(config, plot_path=args.plot)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
