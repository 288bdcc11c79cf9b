"""Physical and simulation constants (SI units unless stated otherwise)."""

import math

# Physical constants
G_SI = 6.674e-11  # m^3 kg^-1 s^-2
ASTRONOMICAL_UNIT = 149597870691.0  # m
SECONDS_PER_YEAR = 31558432.98  # s
SECONDS_PER_DAY = 86400.0  # s

# G in AU^3 / (solar mass * year^2)
G_AU_YEAR_SOLAR = 4.0 * math.pi ** 2

SOLAR_MASS = 1.98847e30  # kg
EARTH_MASS = 5.972e24  # kg
MOON_MASS = 7.342e22  # kg
EARTH_MOON_DISTANCE = 3.84e8  # m

# Integration
DEFAULT_SUBSTEPS = 100
# Smallest positive single-precision float; anything lighter exerts no gravity
MASS_EPSILON = 1.401298e-45

# Scale conversion between host render space and simulation space
DISTANCE_SCALE = ASTRONOMICAL_UNIT * 0.1  # metres per render unit (1 AU = 10 units)
TIME_SCALE = SECONDS_PER_YEAR * 0.1  # simulated seconds per host second (1 year per 10 s)
DEFAULT_FIXED_DELTA_TIME = 0.02  # host seconds per fixed tick
