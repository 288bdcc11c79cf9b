"""Basic example of driving the simulation from a host frame loop."""

from gravity_lace import Simulation, Space
from gravity_lace.constants import SECONDS_PER_DAY
from gravity_lace.logging_config import setup_logging
from gravity_lace.physics.diagnostics import Diagnostics
from gravity_lace.physics.driver import FixedStepDriver
from gravity_lace.presets import TwoBodyOrbit


def main():
    """Run the Earth/Moon system for about one orbit at 60 frames per second."""
    setup_logging("INFO")

    preset = TwoBodyOrbit()
    positions, velocities, masses = preset.generate()

    # One render unit is 10,000 km; one host second is one day
    space = Space(distance_scale=1.0e7, time_scale=SECONDS_PER_DAY)
    sim = Simulation()
    driver = FixedStepDriver(sim, space=space, fixed_delta_time=0.02)

    handles = []
    for position, velocity, mass, name in zip(positions, velocities, masses, preset.names):
        render_position = position / space.distance_scale
        handles.append(driver.spawn(mass, render_position, velocity=velocity, name=name))

    diagnostics = Diagnostics()
    _, _, E0 = diagnostics.compute_energies(sim.bodies())

    print("Running simulation...")
    print(f"Period: {preset.period / SECONDS_PER_DAY:.2f} days, initial energy: {E0:.6e} J")

    frame_time = 1.0 / 60.0
    frames = int(preset.period / space.time_scale / frame_time)
    for frame in range(frames):
        driver.advance(frame_time)
        if frame % 300 == 0:
            moon = driver.render_position(handles[1])
            _, _, E = diagnostics.compute_energies(sim.bodies())
            print(f"Frame {frame}: day={sim.time / SECONDS_PER_DAY:.2f}, "
                  f"moon=({moon[0]:.3f}, {moon[1]:.3f}), dE/E0={(E - E0) / abs(E0):.2e}")

    print(f"Ticks run: {sim.tick_count}")
    print("Simulation complete!")


if __name__ == "__main__":
    main()
