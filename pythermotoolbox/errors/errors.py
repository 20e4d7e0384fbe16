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


class ThermoError(Exception):
    """Base class for all pythermotoolbox calculation errors"""


class UnsupportedSpeciesError(ThermoError, KeyError):
    """ One or more species lack the data a model needs.

        species: list of the offending species, all reported in one message
        model: name of the model or table that was missing the data
    """
    def __init__(self, species, model):
        self.species = list(species)
        self.model = model
        names = ', '.join(_species_name(s) for s in self.species)
        super().__init__(f"The following species cannot be modeled using {model}: {names}")

    def __str__(self):
        return self.args[0]


class UnsupportedInteractionError(ThermoError, KeyError):
    """ No UNIFAC interaction parameter exists for a maingroup pair in either orientation """
    def __init__(self, maingroup_1, maingroup_2):
        self.maingroups = (maingroup_1, maingroup_2)
        super().__init__(f"UNIFAC maingroup interaction parameter is not available for {maingroup_1}, {maingroup_2}")

    def __str__(self):
        return self.args[0]


class PhaseNotFoundError(ThermoError, KeyError):
    """ The equation of state found no root for the modeled phase at this T, P """
    def __init__(self, phase, species, eos_name):
        self.phase = phase
        self.species = species
        super().__init__(f'Phase "{phase}" for {_species_name(species)} not found using {eos_name} phase finder')

    def __str__(self):
        return self.args[0]


class UnitMismatchError(ThermoError, TypeError):
    """ Addition or subtraction between quantities of different physical kinds """


class ConvergenceError(ThermoError, RuntimeError):
    """ An iterative solve ran out of iterations """


def _species_name(species):
    return getattr(species, 'name', str(species))
