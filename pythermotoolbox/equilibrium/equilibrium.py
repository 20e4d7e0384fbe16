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
Binary two-phase equilibrium search
===================================
Tabulates the chemical potential of each species across a composition grid
in every phase, then scans trial compositions of the first (vapor-like) phase:

  1. Read μ_0 and μ_1 of the first phase at the trial composition xV
  2. Invert the second phase curves (μ -> x) and read the liquid composition
     implied by each species independently
  3. Accept (xV, mean xL) when both exist and differ by less than the tolerance

All compositions are mole fractions of the non-basis species. This is a grid
scan for points of equal chemical potential, not a flash calculation: it can
return zero, one or several points depending on the grids and tolerance.
Only binary systems with exactly two phases are supported.
"""

import logging
from dataclasses import dataclass, field

import pandas as pd
from typing import Dict, List, Optional, Tuple

from pythermotoolbox.constants import (COMPOSITION_GRID, TRIAL_GRID, COMPOSITION_MATCH_TOLERANCE, REFINE_RADIUS,
                                       REFINE_STEP)
from pythermotoolbox.errors import PhaseNotFoundError
from pythermotoolbox.mixture import HomogeneousMixture
from pythermotoolbox.quantities import ThermoVarRelation, Composition, MoleFraction
from pythermotoolbox.shared_fns import composition_grid as linear_grid
from pythermotoolbox.table import InterpolableTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MultiphaseStatePoint:
    species: object
    phase: str
    T: float
    P: float


@dataclass
class MultiphaseEquilibriumResult:
    """ One equilibrium point: (phase, species) -> mole fraction """
    T: float
    P: float
    value: Dict[Tuple[str, object], MoleFraction] = field(default_factory=dict)

    def mole_fraction(self, phase: str, species) -> MoleFraction:
        return self.value[(phase, species)]


class ChemicalPotentialCurve(InterpolableTable):
    """ Mole fraction -> chemical potential of one species in one phase at fixed T, P """
    def __init__(self, state: MultiphaseStatePoint, data=None):
        super().__init__(data, headers=('mole fraction', 'chemical potential'))
        self.state = state


class PhaseTotalGibbsEnergyCurve(InterpolableTable):
    """ Mole fraction -> total molar Gibbs energy of one phase at fixed T, P """
    def __init__(self, state: Tuple[str, float, float], data=None):
        super().__init__(data, headers=('mole fraction', 'total molar Gibbs energy'))
        self.state = state


class MoleFractionSearchRanges:
    """ Union of [x - radius, x + radius] intervals, merged where they overlap and clipped to [lower, upper] """

    def __init__(self, centers, radius: float, lower: float = COMPOSITION_GRID[0], upper: float = 1 - COMPOSITION_GRID[0]):
        self.lower = lower
        self.upper = upper
        self.ranges = []
        for x in centers:
            self.add_range(x - radius, x + radius)

    def add_range(self, xmin: float, xmax: float):
        xmin, xmax = max(xmin, self.lower), min(xmax, self.upper)
        if xmax < xmin:
            return
        ranges = sorted(self.ranges + [(xmin, xmax)])
        merged = [ranges[0]]
        for lo, hi in ranges[1:]:
            if lo <= merged[-1][1]:
                merged[-1] = (merged[-1][0], max(hi, merged[-1][1]))
            else:
                merged.append((lo, hi))
        self.ranges = merged

    def grid(self, step: float) -> List[float]:
        """ Sorted unique compositions covering every range at the given step """
        points = set()
        for lo, hi in self.ranges:
            points.update(float(x) for x in linear_grid(lo, hi + step / 2, step))
        return sorted(points)


def results_to_dataframe(results: List[MultiphaseEquilibriumResult], species, phases) -> pd.DataFrame:
    """ T, P and the non-basis species mole fraction in each phase, one row per equilibrium point """
    rows = []
    for r in results:
        rows.append([r.T, r.P] + [float(r.mole_fraction(ph, species)) for ph in phases])
    return pd.DataFrame(rows, columns=['T', 'P'] + [f'x_{ph}' for ph in phases])


class MultiphaseSystem:
    """
    Binary system distributed over two candidate phases.

    Args:
        composition: Composition or species -> mole fraction mapping of the whole system
        mixtures: one HomogeneousMixture per phase, vapor-like phase first
        basis: species whose mole fraction is 1 - x; defaults to the last species
    """

    def __init__(self, composition, mixtures: List[HomogeneousMixture], basis=None):
        self.composition = composition if isinstance(composition, Composition) else Composition(composition)
        self.species = list(self.composition.species)
        self.mixtures = list(mixtures)
        if len(self.species) < 2 or len(self.mixtures) < 2:
            raise ValueError("Systems must contain more than one species and phase")
        if len(self.species) > 2:
            raise NotImplementedError("Multicomponent equilibrium currently only supports binary mixtures")
        if len(self.mixtures) > 2:
            raise NotImplementedError("Multicomponent equilibrium currently only supports two phases")

        self.phases = [mix.phase for mix in self.mixtures]
        if len(set(self.phases)) != len(self.phases):
            raise ValueError(f"Each mixture must model a different phase, got {self.phases}")
        for mix in self.mixtures:
            if set(mix.species) != set(self.species):
                raise ValueError(f"{mix.phase} mixture species do not match the system species")

        self.basis = self.species[-1] if basis is None else basis
        if self.basis not in self.species:
            raise ValueError(f"Basis species {self.basis} is not in the system")
        self.non_basis = [s for s in self.species if s != self.basis]

        self.chemical_potential_curves = {}
        self.total_gibbs_energy_curves = {}
        self.last_phase_equilibria_errors = {}

    def mixture(self, phase: str) -> HomogeneousMixture:
        for mix in self.mixtures:
            if mix.phase == phase:
                return mix
        raise KeyError(f"Mixture with phase '{phase}' not found")

    # -------------------------------------------------------------------------
    # Curve tabulation
    # -------------------------------------------------------------------------
    def calculate_potential_and_energy_curves(self, T, P, phase: str, compositions):
        """ Samples the phase at each composition and adds the points to its curves """
        T, P = float(T), float(P)
        s0, s1 = self.non_basis[0], self.basis
        state0 = MultiphaseStatePoint(s0, phase, T, P)
        state1 = MultiphaseStatePoint(s1, phase, T, P)
        curve0 = self.chemical_potential_curves.setdefault(state0, ChemicalPotentialCurve(state0))
        curve1 = self.chemical_potential_curves.setdefault(state1, ChemicalPotentialCurve(state1))
        energy = self.total_gibbs_energy_curves.setdefault((phase, T, P), PhaseTotalGibbsEnergyCurve((phase, T, P)))

        mixture = self.mixture(phase)
        for x in compositions:
            sample = mixture.with_composition(Composition.binary(s0, s1, float(x))).sample(T, P)
            key = MoleFraction(float(x), ThermoVarRelation.COMPONENT_FRACTION)
            curve0.add(key, sample.chemical_potentials[s0])
            curve1.add(key, sample.chemical_potentials[s1])
            energy.add(key, sample.total_gibbs_energy)
        logger.debug("Tabulated %d compositions of %s phase at T=%g, P=%g", len(compositions), phase, T, P)

    def get_chemical_potential_curves(self, T, P, phase: str) -> Dict:
        """ species -> ChemicalPotentialCurve for one phase at T, P """
        T, P = float(T), float(P)
        return {state.species: curve for state, curve in self.chemical_potential_curves.items()
                if state.phase == phase and state.T == T and state.P == P}

    def discard_curves(self, T, P):
        T, P = float(T), float(P)
        self.chemical_potential_curves = {k: v for k, v in self.chemical_potential_curves.items()
                                          if not (k.T == T and k.P == P)}
        self.total_gibbs_energy_curves = {k: v for k, v in self.total_gibbs_energy_curves.items()
                                          if not (k[1] == T and k[2] == P)}

    # -------------------------------------------------------------------------
    # Equilibrium scan
    # -------------------------------------------------------------------------
    def _curve_readers(self, T, P):
        """ First phase μ(x) curves and inverted second phase x(μ) curves, for the basis and non-basis species """
        curves_V = self.get_chemical_potential_curves(T, P, self.phases[0])
        curves_L = self.get_chemical_potential_curves(T, P, self.phases[1])
        s0, s1 = self.non_basis[0], self.basis
        return (curves_V[s0], curves_V[s1]), (curves_L[s0].invert(), curves_L[s1].invert())

    @staticmethod
    def _match_liquid_composition(xV, vapor_curves, liquid_inverses) -> Optional[Tuple[float, float]]:
        """ (mean xL, |xL0 - xL1|), or None when either curve lookup falls outside its table """
        mu_V0 = vapor_curves[0].get_value(xV)
        mu_V1 = vapor_curves[1].get_value(xV)
        if mu_V0 is None or mu_V1 is None:
            return None
        xL0 = liquid_inverses[0].get_value(mu_V0)
        xL1 = liquid_inverses[1].get_value(mu_V1)
        if xL0 is None or xL1 is None:
            return None
        return (float(xL0) + float(xL1)) / 2, abs(float(xL0) - float(xL1))

    def _scan(self, T, P, trial_compositions, tolerance):
        vapor_curves, liquid_inverses = self._curve_readers(T, P)
        points = []
        for xV in trial_compositions:
            xV = float(xV)
            match = self._match_liquid_composition(xV, vapor_curves, liquid_inverses)
            if match is None:
                continue
            xL, error = match
            self.last_phase_equilibria_errors[xV] = error
            if error < tolerance:
                points.append((xV, xL, error))
        return points

    def _refine(self, T, P, points, tolerance, radius, step):
        """ Second pass on a finer grid around each first pass point, keeping the best point per range """
        vapor_ranges = MoleFractionSearchRanges([p[0] for p in points], radius)
        liquid_ranges = MoleFractionSearchRanges([p[1] for p in points], 2 * radius)
        self.calculate_potential_and_energy_curves(T, P, self.phases[0], vapor_ranges.grid(step))
        self.calculate_potential_and_energy_curves(T, P, self.phases[1], liquid_ranges.grid(step))

        refined = []
        for lo, hi in vapor_ranges.ranges:
            candidates = self._scan(T, P, linear_grid(lo, hi + step / 2, step), tolerance)
            if candidates:
                refined.append(min(candidates, key=lambda p: p[2]))
        return refined

    def find_phase_equilibria(self, T, P, composition_grid=None, trial_grid=None,
                              tolerance: float = COMPOSITION_MATCH_TOLERANCE, refine: bool = False,
                              refine_radius: float = REFINE_RADIUS, refine_step: float = REFINE_STEP
                              ) -> List[MultiphaseEquilibriumResult]:
        """
        Equilibrium points at T, P, ordered by first phase composition.

        Args:
            T: temperature (K)
            P: pressure (Pa)
            composition_grid: compositions at which the curves are tabulated, default 0.001 to 0.991
            trial_grid: first phase trial compositions, default 0.01 to 0.99
            tolerance: maximum difference between the two implied second phase compositions
            refine: run a second pass on a finer grid around each point found
        """
        T, P = float(T), float(P)
        grid = linear_grid(*COMPOSITION_GRID) if composition_grid is None else composition_grid
        trials = linear_grid(*TRIAL_GRID) if trial_grid is None else trial_grid

        self.discard_curves(T, P)
        for phase in self.phases:
            self.calculate_potential_and_energy_curves(T, P, phase, grid)
        self.last_phase_equilibria_errors = {}

        points = self._scan(T, P, trials, tolerance)
        if refine and points:
            points = self._refine(T, P, points, tolerance, refine_radius, refine_step)
        logger.info("Found %d equilibrium point(s) at T=%g K, P=%g Pa", len(points), T, P)

        s0, s1 = self.non_basis[0], self.basis
        results = []
        for xV, xL, _ in sorted(points):
            value = {
                (self.phases[0], s0): MoleFraction(xV, ThermoVarRelation.COMPONENT_FRACTION),
                (self.phases[0], s1): MoleFraction(1 - xV, ThermoVarRelation.COMPONENT_FRACTION),
                (self.phases[1], s0): MoleFraction(xL, ThermoVarRelation.COMPONENT_FRACTION),
                (self.phases[1], s1): MoleFraction(1 - xL, ThermoVarRelation.COMPONENT_FRACTION),
            }
            results.append(MultiphaseEquilibriumResult(T, P, value))
        return results

    def binary_phase_diagram(self, P, temperatures, **kwargs) -> pd.DataFrame:
        """
        Equilibrium compositions across temperatures at fixed pressure.
        Returns a DataFrame with columns T, xV, xL (non-basis species mole fractions).
        Temperatures at which a modeled phase does not exist are skipped.
        """
        s0 = self.non_basis[0]
        rows = []
        for T in temperatures:
            try:
                results = self.find_phase_equilibria(T, P, **kwargs)
            except PhaseNotFoundError as e:
                logger.warning("Skipping T = %g K: %s", float(T), e)
                continue
            for r in results:
                rows.append([float(T), float(r.mole_fraction(self.phases[0], s0)), float(r.mole_fraction(self.phases[1], s0))])
        return pd.DataFrame(rows, columns=['T', 'xV', 'xL'])

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------
    def chemical_potential_curves_to_csv(self, delimiter: str = ',') -> Dict:
        return {state: curve.to_delimited_string(delimiter) for state, curve in self.chemical_potential_curves.items()}

    def total_gibbs_energy_curves_to_csv(self, delimiter: str = ',') -> Dict:
        return {state: curve.to_delimited_string(delimiter) for state, curve in self.total_gibbs_energy_curves.items()}

    def results_to_dataframe(self, results: List[MultiphaseEquilibriumResult]) -> pd.DataFrame:
        return results_to_dataframe(results, self.non_basis[0], self.phases)
