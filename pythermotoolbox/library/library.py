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

import logging
from dataclasses import dataclass
from importlib import resources

import numpy as np
import pandas as pd
from tabulate import tabulate

from pythermotoolbox.classes import Chemical
from pythermotoolbox.errors import UnsupportedSpeciesError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpeciesConstants:
    """Physical constants for a species."""
    name: str
    cas: str
    molar_mass: float  # g/mol
    Tc: float          # Critical temperature (K)
    Pc: float          # Critical pressure (Pa)
    omega: float       # Acentric factor
    Tb: float          # Normal boiling point (K)


@dataclass(frozen=True)
class HeatCapacityParameters:
    """Ideal gas heat capacity polynomial Cp* = sum(c[i] * T**i), J/(mol·K)."""
    coefficients: tuple
    T_min: float
    T_max: float


@dataclass(frozen=True)
class MSLVParameters:
    """Reduced parameters of the modified solid-liquid-vapor EOS (Mo & Zhang, 2022)."""
    Vc: float      # Critical molar volume (m³/mol)
    a_red: float
    b_red: float
    c_red: float
    d_red: float


@dataclass(frozen=True)
class UNIFACSubgroup:
    name: str
    label: str
    maingroup: str
    R: float
    Q: float


def _read_csv(path):
    with resources.files(__package__).joinpath(path).open('r', encoding='utf-8') as f:
        return pd.read_csv(f)


class component_library:
    def __init__(self):
        self.species_df = _read_csv('species_data.csv')
        self.cp_df = _read_csv('heat_capacity.csv')
        self.mslv_df = _read_csv('mslv_parameters.csv')
        self.subgroup_df = _read_csv('unifac_subgroups.csv')
        self.interaction_df = _read_csv('unifac_interactions.csv')
        self.decomposition_df = _read_csv('unifac_species.csv')

        self.species_dic = {}
        for row in self.species_df.itertuples(index=False):
            self.species_dic[Chemical[row.species]] = SpeciesConstants(
                row.name, row.cas, float(row.molar_mass), float(row.Tc), float(row.Pc), float(row.omega), float(row.Tb))

        coef_cols = [c for c in self.cp_df.columns if c.startswith('c')]
        self.cp_dics = {'standard': {}, 'high': {}}
        for _, row in self.cp_df.iterrows():
            coefs = tuple(float(row[c]) for c in coef_cols if not np.isnan(row[c]))
            self.cp_dics[row['range']][Chemical[row['species']]] = HeatCapacityParameters(coefs, float(row['T_min']), float(row['T_max']))

        self.mslv_dic = {Chemical[row.species]: MSLVParameters(float(row.Vc), float(row.a_red), float(row.b_red), float(row.c_red), float(row.d_red))
                         for row in self.mslv_df.itertuples(index=False)}

        self.subgroup_dic = {row.subgroup: UNIFACSubgroup(row.subgroup, row.label, row.maingroup, float(row.R), float(row.Q))
                             for row in self.subgroup_df.itertuples(index=False)}

        self.interaction_dic = {(row.maingroup_i, row.maingroup_j): (float(row.a_ij), float(row.a_ji))
                                for row in self.interaction_df.itertuples(index=False)}

        self.decomposition_dic = {}
        for row in self.decomposition_df.itertuples(index=False):
            self.decomposition_dic.setdefault(Chemical[row.species], []).append((row.subgroup, int(row.count)))

    def constants(self, species):
        try:
            return self.species_dic[species]
        except KeyError:
            raise UnsupportedSpeciesError([species], 'the physical constants table') from None

    def name(self, species):
        return self.constants(species).name

    def names(self):
        return {s: c.name for s, c in self.species_dic.items()}

    def heat_capacity(self, species, high_temp=False):
        dic = self.cp_dics['high' if high_temp else 'standard']
        try:
            return dic[species]
        except KeyError:
            table = 'high temperature heat capacity data' if high_temp else 'heat capacity data'
            raise UnsupportedSpeciesError([species], table) from None

    def mslv_parameters(self, species):
        try:
            return self.mslv_dic[species]
        except KeyError:
            raise UnsupportedSpeciesError([species], 'the modified solid-liquid-vapor EOS') from None

    def unifac_species(self):
        return list(self.decomposition_dic)

    def unifac_subgroups(self, species):
        """ List of (subgroup name, count) making up a species """
        try:
            return self.decomposition_dic[species]
        except KeyError:
            raise UnsupportedSpeciesError([species], 'UNIFAC') from None

    def subgroup(self, name):
        return self.subgroup_dic[name]

    def interaction(self, maingroup_i, maingroup_j):
        """ Returns (a_ij, a_ji) when tabulated in this orientation, else None """
        return self.interaction_dic.get((maingroup_i, maingroup_j))

    def summary(self, species_list=None):
        """ Tabulated physical constants for the chosen (or all) species """
        if species_list is None:
            species_list = list(self.species_dic)
        rows = []
        for s in species_list:
            c = self.constants(s)
            rows.append([c.name, c.cas, c.molar_mass, c.Tc, c.Pc, c.omega, c.Tb])
        return tabulate(rows, headers=['Name', 'CAS', 'MW (g/mol)', 'Tc (K)', 'Pc (Pa)', 'Acentric', 'Tb (K)'])

comp_library = component_library()
