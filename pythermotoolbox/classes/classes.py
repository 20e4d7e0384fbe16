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

from enum import Enum

class eos_method(Enum):  # Pure species equation of state
    PR = 0
    VDW = 1
    MSLV = 2

class activity_method(Enum):  # Liquid/vapor mixture non-ideality model
    IDEAL = 0
    UNIFAC = 1

class Chemical(Enum):  # Species with tabulated physical constants
    ACETONE = 0
    AMMONIA = 1
    BENZENE = 2
    NBUTANE = 3
    ISOBUTANE = 4
    CARBON_DIOXIDE = 5
    CARBON_MONOXIDE = 6
    CHLORINE = 7
    CHLOROBENZENE = 8
    ETHANE = 9
    HYDROGEN = 10
    HYDROGEN_FLUORIDE = 11
    HYDROGEN_CHLORIDE = 12
    HYDROGEN_SULFIDE = 13
    METHANE = 14
    NITROGEN = 15
    OXYGEN = 16
    NPENTANE = 17
    ISOPENTANE = 18
    PROPANE = 19
    NPROPANOL = 20
    R12 = 21
    R134A = 22
    SULFUR_DIOXIDE = 23
    TOLUENE = 24
    WATER = 25

class_dic = {
    "eosmethod": eos_method,
    "activitymethod": activity_method,
    "species": Chemical,
}
