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
"""
Typed physical quantities.

Each quantity is a float subclass tagged with a ThermoVarRelation. Adding or
subtracting two different kinds of quantity (e.g. Pressure + Temperature)
raises UnitMismatchError, while products and quotients fall back to plain
floats since their units are no longer those of either operand.
"""

from collections.abc import Mapping
from enum import Enum

from pythermotoolbox.errors import UnitMismatchError

class ThermoVarRelation(Enum):  # What a thermodynamic variable is relative to
    UNDEFINED = 0
    REAL_MOLAR = 1
    IG_MOLAR = 2
    PARTIAL_MOLAR = 3
    DEPARTURE = 4
    CHANGE = 5
    MIXING = 6
    EXCESS = 7
    MOLAR_EXCESS = 8
    PARTIAL_MOLAR_EXCESS = 9
    OF_VAPORIZATION = 10
    OF_FORMATION = 11
    VAPOR_PRESSURE = 12
    PARTIAL_PRESSURE = 13
    COMPONENT_FRACTION = 14
    PHASE_FRACTION = 15


class PhysicalQuantity(float):
    units = ''

    def __new__(cls, value=0.0, relation=ThermoVarRelation.UNDEFINED):
        obj = super().__new__(cls, value)
        obj.relation = relation
        return obj

    def __repr__(self):
        return f"{type(self).__name__}({float(self)!r} {self.units})"

    def __format__(self, spec):
        return float(self).__format__(spec)

    def _other_value(self, other):
        if isinstance(other, PhysicalQuantity):
            if type(other) is not type(self):
                raise UnitMismatchError(
                    f"Cannot combine {type(self).__name__} [{self.units}] with {type(other).__name__} [{other.units}]")
            return float(other)
        if isinstance(other, (int, float)):
            return float(other)
        return None

    def __add__(self, other):
        value = self._other_value(other)
        if value is None:
            return NotImplemented
        return type(self)(float(self) + value)

    __radd__ = __add__

    def __sub__(self, other):
        value = self._other_value(other)
        if value is None:
            return NotImplemented
        return type(self)(float(self) - value)

    def __rsub__(self, other):
        value = self._other_value(other)
        if value is None:
            return NotImplemented
        return type(self)(value - float(self))

    def __neg__(self):
        return type(self)(-float(self), self.relation)

    def __mul__(self, other):
        if isinstance(other, PhysicalQuantity):
            other = float(other)
        return float(self) * other

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, PhysicalQuantity):
            other = float(other)
        return float(self) / other

    def __rtruediv__(self, other):
        return other / float(self)


class Temperature(PhysicalQuantity):
    units = 'K'

class Pressure(PhysicalQuantity):
    units = 'Pa'

class MolarVolume(PhysicalQuantity):
    units = 'm³/mol'

class MoleFraction(PhysicalQuantity):
    units = 'mol/mol'

class Enthalpy(PhysicalQuantity):
    units = 'J/mol'

class Entropy(PhysicalQuantity):
    units = 'J/(mol·K)'

class InternalEnergy(PhysicalQuantity):
    units = 'J/mol'

class GibbsEnergy(PhysicalQuantity):
    units = 'J/mol'

class HelmholtzEnergy(PhysicalQuantity):
    units = 'J/mol'

class ChemicalPotential(PhysicalQuantity):
    units = 'J/mol'


class Composition(Mapping):
    """ Immutable species -> mole fraction mapping, ordered as given.
        A new Composition is built for every sampled state rather than mutating an existing one.
    """
    def __init__(self, fractions):
        if isinstance(fractions, Mapping):
            fractions = fractions.items()
        data = []
        for species, x in fractions:
            if any(s == species for s, _ in data):
                raise ValueError(f"Species {species} listed more than once in composition")
            data.append((species, MoleFraction(x, ThermoVarRelation.COMPONENT_FRACTION)))
        self._data = tuple(data)
        self._lookup = dict(self._data)

    @classmethod
    def binary(cls, species0, species1, x0):
        """ Two species composition with x(species0) = x0 and x(species1) = 1 - x0 """
        return cls([(species0, x0), (species1, 1.0 - x0)])

    def __getitem__(self, species):
        return self._lookup[species]

    def __iter__(self):
        return (s for s, _ in self._data)

    def __len__(self):
        return len(self._data)

    def __hash__(self):
        return hash(self._data)

    def __eq__(self, other):
        if isinstance(other, Composition):
            return self._data == other._data
        return NotImplemented

    def __repr__(self):
        body = ', '.join(f"{getattr(s, 'name', s)}: {float(x):.6g}" for s, x in self._data)
        return f"Composition({body})"

    @property
    def species(self):
        return tuple(s for s, _ in self._data)

    def total(self):
        return sum(float(x) for _, x in self._data)

    def normalized(self):
        total = self.total()
        if total <= 0:
            raise ValueError("Cannot normalize a composition whose mole fractions sum to zero")
        return Composition([(s, float(x) / total) for s, x in self._data])

    def replace(self, species, x):
        """ Returns a new Composition with one species' mole fraction changed """
        if species not in self._lookup:
            raise KeyError(species)
        return Composition([(s, x if s == species else v) for s, v in self._data])
