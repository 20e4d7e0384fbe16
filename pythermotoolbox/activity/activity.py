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
Liquid phase activity coefficient models
========================================
IdealMixture (γ = 1) and the UNIFAC group contribution method.

UNIFAC splits ln γ into a combinatorial (size and shape) part and a residual
(group interaction) part:

  ln γ_i^C = ln(φ_i/x_i) + (z/2) q_i ln(θ_i/φ_i) + l_i - (φ_i/x_i) Σ_j x_j l_j
  ln Γ_k   = Q_k [1 - ln(Σ_m Θ_m ψ_mk) - Σ_m Θ_m ψ_km / Σ_n Θ_n ψ_nm]
  ln γ_i^R = Σ_k ν_ki (ln Γ_k - ln Γ_k^(i))

with ψ_mn = exp(-a_mn/T) and coordination number z = 10.

A model is bound to one immutable Composition. Everything that depends only on
the composition is computed at construction, and a new composition builds a
new model via with_composition(), sharing the composition independent group
data with the original.

References:
- Fredenslund, Jones & Prausnitz, AIChE J. 21 (1975) 1086
- Sandler, Chemical, Biochemical and Engineering Thermodynamics, 5th ed., §9.5
"""

import logging

import numpy as np
from typing import Dict

from pythermotoolbox.classes import activity_method
from pythermotoolbox.constants import UNIFAC_Z
from pythermotoolbox.errors import UnsupportedSpeciesError, UnsupportedInteractionError
from pythermotoolbox.library import comp_library
from pythermotoolbox.quantities import Composition
from pythermotoolbox.validate import validate_methods

logger = logging.getLogger(__name__)


def _as_composition(composition) -> Composition:
    if isinstance(composition, Composition):
        return composition
    return Composition(composition)


class ActivityModel:
    """ Base class: activity coefficients of every species in a fixed composition """
    name = 'ActivityModel'

    def __init__(self, composition):
        self.composition = _as_composition(composition)

    def __repr__(self):
        return f"{type(self).__name__}({self.composition!r})"

    def species_activity_coefficient(self, species, T, P=None) -> float:
        raise NotImplementedError

    def activity_coefficients(self, T, P=None) -> Dict:
        return {s: self.species_activity_coefficient(s, T, P) for s in self.composition}

    def with_composition(self, composition) -> 'ActivityModel':
        return type(self)(composition)


class IdealMixture(ActivityModel):
    name = 'IdealMixture'

    def species_activity_coefficient(self, species, T, P=None) -> float:
        if species not in self.composition:
            raise KeyError(species)
        return 1.0


class _UNIFACGroups:
    """ Composition independent UNIFAC data for an ordered set of species """

    def __init__(self, species):
        self.species = tuple(species)
        missing = [s for s in self.species if s not in comp_library.decomposition_dic]
        if missing:
            raise UnsupportedSpeciesError(missing, 'UNIFAC')

        # Subgroups in order of first appearance
        self.subgroups = []
        for s in self.species:
            for name, _ in comp_library.unifac_subgroups(s):
                if name not in self.subgroups:
                    self.subgroups.append(name)
        index = {name: k for k, name in enumerate(self.subgroups)}
        groups = [comp_library.subgroup(name) for name in self.subgroups]
        self.R = np.array([g.R for g in groups])
        self.Q = np.array([g.Q for g in groups])

        # nu[i, k]: count of subgroup k in species i
        self.nu = np.zeros((len(self.species), len(self.subgroups)))
        for i, s in enumerate(self.species):
            for name, count in comp_library.unifac_subgroups(s):
                self.nu[i, index[name]] += count

        self.r = self.nu @ self.R
        self.q = self.nu @ self.Q
        self.l = UNIFAC_Z / 2 * (self.r - self.q) - (self.r - 1)

        self.a = self.interaction_matrix([g.maingroup for g in groups])

        # Surface fractions of each pure species, the residual reference state
        X_pure = self.nu / self.nu.sum(axis=1, keepdims=True)
        self.theta_pure = self.surface_fractions(X_pure)
        self._reference_cache = {}
        logger.debug("UNIFAC subgroups for %s: %s", [s.name for s in self.species], self.subgroups)

    def interaction_matrix(self, maingroups):
        """ a[m, n] in K, zero between subgroups of the same maingroup """
        n = len(maingroups)
        a = np.zeros((n, n))
        for m in range(n):
            for k in range(n):
                mg_m, mg_k = maingroups[m], maingroups[k]
                if mg_m == mg_k:
                    continue
                direct = comp_library.interaction(mg_m, mg_k)
                if direct is not None:
                    a[m, k] = direct[0]
                    continue
                reverse = comp_library.interaction(mg_k, mg_m)
                if reverse is not None:
                    a[m, k] = reverse[1]
                    continue
                raise UnsupportedInteractionError(mg_m, mg_k)
        return a

    def surface_fractions(self, X):
        """ Θ_m = Q_m X_m / Σ_n Q_n X_n, row-wise for 2-D X """
        QX = X * self.Q
        return QX / QX.sum(axis=-1, keepdims=True)

    def psi(self, T):
        return np.exp(-self.a / float(T))

    def ln_group_gamma(self, theta, psi):
        """ ln Γ_k for every subgroup, given surface fractions Θ """
        s = theta @ psi                  # s_k = Σ_m Θ_m ψ_mk
        return self.Q * (1 - np.log(s) - psi @ (theta / s))

    def reference_ln_group_gamma(self, T):
        """ ln Γ_k^(i) for every species i (rows) """
        T = float(T)
        cached = self._reference_cache.get(T)
        if cached is None:
            psi = self.psi(T)
            cached = np.array([self.ln_group_gamma(theta, psi) for theta in self.theta_pure])
            self._reference_cache[T] = cached
        return cached


class UNIFACActivityModel(ActivityModel):
    """
    UNIFAC group contribution activity model.

    Raises UnsupportedSpeciesError naming every species without a subgroup
    decomposition, and UnsupportedInteractionError for a maingroup pair with
    no tabulated interaction parameter.
    """
    name = 'UNIFACActivityModel'

    def __init__(self, composition, groups: _UNIFACGroups = None):
        super().__init__(composition)
        species = self.composition.species
        if groups is None or groups.species != species:
            groups = _UNIFACGroups(species)
        self.groups = groups
        self._index = {s: i for i, s in enumerate(species)}

        x = np.array([float(self.composition[s]) for s in species])
        self.x = x
        g = self.groups

        # Mixture subgroup mole and surface fractions
        group_moles = x @ g.nu
        self.X = group_moles / group_moles.sum()
        self.theta_groups = g.surface_fractions(self.X)

        # Per-species volume and surface fractions, kept as ratios so x_i = 0 stays finite
        self.phi_over_x = g.r / (x @ g.r)
        self.theta_over_phi = (g.q / (x @ g.q)) / self.phi_over_x
        self.ln_gamma_combinatorial = (np.log(self.phi_over_x) + UNIFAC_Z / 2 * g.q * np.log(self.theta_over_phi)
                                       + g.l - self.phi_over_x * (x @ g.l))
        self._residual_cache = {}

    def with_composition(self, composition) -> 'UNIFACActivityModel':
        return UNIFACActivityModel(composition, self.groups)

    def ln_gamma_residual(self, T) -> np.ndarray:
        T = float(T)
        cached = self._residual_cache.get(T)
        if cached is None:
            g = self.groups
            ln_Gamma = g.ln_group_gamma(self.theta_groups, g.psi(T))
            ln_Gamma_ref = g.reference_ln_group_gamma(T)
            cached = (g.nu * (ln_Gamma - ln_Gamma_ref)).sum(axis=1)
            self._residual_cache[T] = cached
        return cached

    def ln_gamma(self, T) -> np.ndarray:
        return self.ln_gamma_combinatorial + self.ln_gamma_residual(T)

    def species_activity_coefficient(self, species, T, P=None) -> float:
        try:
            i = self._index[species]
        except KeyError:
            raise UnsupportedSpeciesError([species], 'this UNIFAC mixture') from None
        return float(np.exp(self.ln_gamma(T)[i]))

    def activity_coefficients(self, T, P=None) -> Dict:
        gammas = np.exp(self.ln_gamma(T))
        return {s: float(gammas[i]) for s, i in self._index.items()}


ACTIVITY_CLASSES = {
    activity_method.IDEAL: IdealMixture,
    activity_method.UNIFAC: UNIFACActivityModel,
}

def create_activity_model(method, composition) -> ActivityModel:
    """ method: activity_method member or its name ('IDEAL', 'UNIFAC') """
    method = validate_methods(['activitymethod'], [method])
    return ACTIVITY_CLASSES[method](composition)
