"""Constants used throughout DuctCalc.

Duct formulas work in inches, feet, minutes and pounds.  The empirical
coefficients below belong to that unit system and must not be re-derived.
"""

import math

# Mathematical
PI = math.pi

# Geometry
INCHES_PER_FOOT = 12.0
SQ_INCHES_PER_SQ_FOOT = 144.0
MINUTES_PER_HOUR = 60.0

# Standard air
STANDARD_AIR_DENSITY = 0.075  # lb/ft³

# Flow regime
LAMINAR_REYNOLDS_LIMIT = 2300.0
DEFAULT_RELATIVE_ROUGHNESS = 0.0005  # galvanized steel

# Empirical duct coefficients (in, ft, min, lb)
EQUIV_DIAMETER_COEFF = 1.30
EQUIV_DIAMETER_AREA_EXP = 0.625
EQUIV_DIAMETER_PERIMETER_EXP = 0.25
VELOCITY_PRESSURE_FPM = 4005.0  # V/4005 → in WC for standard air
DARCY_WEISBACH_DIVISOR = 1097.0
FRICTION_RUN_LENGTH = 100.0  # ft, head loss is quoted per 100 ft
STANDARD_AIR_DIAMETER_COEFF = 0.109136
STANDARD_AIR_DIAMETER_FLOW_EXP = 1.9
STANDARD_AIR_DIAMETER_ROOT = 5.02

# Solver
DEFAULT_MAX_ITERATIONS = 5
DEFAULT_SOLVER_TOLERANCE = 0.001
SOLVER_DAMPING_EXP = 0.2

# Conversion factors (imperial → metric)
CFM_TO_LS = 0.47194745
INWC_PER_100FT_TO_PA_PER_M = 8.1726
FPM_TO_MS = 0.3048 / 60.0
INCH_TO_MM = 25.4
FT2_TO_M2 = 0.092903
INWC_TO_PA = 248.84
LBFT3_TO_KGM3 = 16.0185
LBFTH_TO_KGMH = 1.4882
LBFTH_TO_KGMH_WATER = 1.48816
BTULBF_TO_KJKGC = 4.1868
ENERGY_FACTOR_TO_SI = 1.1204

# Design-rule limits
MIN_DUCT_VELOCITY_FPM = 100.0
MAX_DUCT_VELOCITY_FPM = 4000.0
HIGH_VELOCITY_WARNING_FPM = 2000.0
MIN_DUCT_DIMENSION_IN = 4.0
MAX_DUCT_DIMENSION_IN = 120.0
