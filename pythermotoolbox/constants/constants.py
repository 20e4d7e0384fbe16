#!/usr/bin/python3
# -*- coding: utf-8 -*-

"""
    pythermotoolbox - A collection of Thermodynamic Equilibrium Utilities
              Copyright (C) 2026, The pythermotoolbox developers

    This program is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This program is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
    GNU General Public License for more details.

    The GNU General Public License can be found in the LICENSE directory,
    and at  <https://www.gnu.org/licenses/>.
"""


# Constants
R = 8.314  # Universal gas constant, J/(mol·K)
PRECISION_LIMIT = 1e-12  # Bisection bracket width, m³/mol
UPPER_MOLAR_VOLUME = 1.0  # Upper bound of every molar volume bracket, m³/mol
SQRT2 = 2 ** 0.5

REFERENCE_T = 298.15  # Reference state temperature (K)
REFERENCE_P = 100e3  # Reference state pressure (Pa)

FUGACITY_TOLERANCE = 0.1  # Fugacity coefficients closer than this coexist
COMPOSITION_MATCH_TOLERANCE = 0.008  # Max |xL0 - xL1| to accept an equilibrium point
REFINE_RADIUS = 0.02  # Half width of the second pass search ranges
REFINE_STEP = 0.001  # Trial composition step of the second pass

DT_PRECISION = 0.5  # Temperature step for partial excess properties (K)
DP_PRECISION = 0.5  # Pressure step for partial excess properties (Pa)

VAPOR_PRESSURE_TOLERANCE = 1e-7  # Convergence of |fL/fV - 1|
VAPOR_PRESSURE_MAX_ITER = 500

UNIFAC_Z = 10  # UNIFAC lattice coordination number

# Default composition grids (start, stop, step); stop is excluded
COMPOSITION_GRID = (0.001, 1.0, 0.01)
TRIAL_GRID = (0.01, 1.0, 0.01)

PHASES = ('solid', 'liquid', 'vapor')
