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
Homogeneous mixtures
====================
One candidate phase: an ordered list of species, each with its own pure
species equation of state, an immutable composition and an activity model.

Pure species properties come from the modeled phase root of each species'
EOS, found with ignore_equilibrium so that a hypothetical pure phase (e.g.
liquid benzene above its boiling point) still has a molar volume.
Non-ideality enters through the activity coefficients:

  μ_i = G_i(T, P, V_i) + RT ln γ_i + RT ln x_i
  f_i = γ_i x_i f_i(pure)

References:
- Sandler, Chemical, Biochemical and Engineering Thermodynamics, 5th ed., §9.1, §9.3
"""

import logging
from dataclasses import dataclass, field

import numpy as np
import pandas as pd
from typing import Dict, Optional

from pythermotoolbox.activity import ActivityModel, create_activity_model
from pythermotoolbox.classes import activity_method, Chemical
from pythermotoolbox.constants import R, DT_PRECISION, DP_PRECISION, REFERENCE_T, REFERENCE_P, PHASES
from pythermotoolbox.eos import EquationOfState, IdealGasLaw, create_eos, default_eos_for_phase
from pythermotoolbox.errors import PhaseNotFoundError
from pythermotoolbox.library import comp_library
from pythermotoolbox.quantities import (ThermoVarRelation, Composition, MolarVolume, Enthalpy, Entropy, GibbsEnergy,
                                        ChemicalPotential)
from pythermotoolbox.validate import validate_species

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MixtureSpecies:
    """ A species in a mixture, with the EOS and phase used for its pure properties """
    species: Chemical
    eos: EquationOfState
    modeled_phase: str

    @classmethod
    def default(cls, species, phase: str, eos_method=None) -> 'MixtureSpecies':
        species = validate_species(species)
        method = default_eos_for_phase(phase) if eos_method is None else eos_method
        return cls(species, create_eos(species, method), phase)


@dataclass(frozen=True)
class MixtureSample:
    """ Chemical potentials and total Gibbs energy of a mixture at one composition, T and P """
    T: float
    P: float
    composition: Composition
    chemical_potentials: Dict = field(default_factory=dict)
    total_gibbs_energy: float = np.nan


class HomogeneousMixture:
    """
    A single phase mixture.

    Args:
        species_list: MixtureSpecies, Chemical members or species names, in order
        phase: 'solid', 'liquid' or 'vapor', shared by every species
        composition: Composition, species -> mole fraction mapping or mole fractions in species order
        activity: activity_method member or name, or an ActivityModel instance
        dT_precision, dP_precision: step sizes for the finite difference excess properties
    """

    def __init__(self, species_list, phase: str, composition, activity=activity_method.IDEAL,
                 dT_precision: float = DT_PRECISION, dP_precision: float = DP_PRECISION):
        if phase not in PHASES:
            raise ValueError(f"Unknown phase: {phase}. Choose from {PHASES}")
        self.phase = phase
        self.species_list = tuple(s if isinstance(s, MixtureSpecies) else MixtureSpecies.default(s, phase)
                                  for s in species_list)
        for ms in self.species_list:
            if ms.modeled_phase != phase:
                raise ValueError(f"{ms.species.name} is modeled as {ms.modeled_phase} in a {phase} mixture")
        self._lookup = {ms.species: ms for ms in self.species_list}
        self.composition = self._ordered_composition(composition)
        if isinstance(activity, ActivityModel):
            self.activity_model = activity.with_composition(self.composition)
        else:
            self.activity_model = create_activity_model(activity, self.composition)
            logger.debug("%s mixture of %s using %s activity", phase, [s.name for s in self.species], self.activity_model.name)
        self.dT_precision = dT_precision
        self.dP_precision = dP_precision

    def __repr__(self):
        return f"HomogeneousMixture({self.phase}, {self.composition!r}, {self.activity_model.name})"

    def _ordered_composition(self, composition) -> Composition:
        species = [ms.species for ms in self.species_list]
        if isinstance(composition, (Composition, dict)):
            if set(composition) != set(species):
                raise ValueError(f"Composition species {list(composition)} do not match mixture species {species}")
            return Composition([(s, composition[s]) for s in species])
        fractions = list(composition)
        if len(fractions) != len(species):
            raise ValueError(f"{len(fractions)} mole fractions given for {len(species)} species")
        return Composition(zip(species, fractions))

    @property
    def species(self):
        return self.composition.species

    def with_composition(self, composition) -> 'HomogeneousMixture':
        """ New mixture with the same species, EOS instances and activity model at another composition """
        return HomogeneousMixture(self.species_list, self.phase, composition, self.activity_model,
                                  self.dT_precision, self.dP_precision)

    def mole_fraction(self, species) -> float:
        return float(self.composition[species])

    # -------------------------------------------------------------------------
    # Pure species
    # -------------------------------------------------------------------------
    def _mixture_species(self, species) -> MixtureSpecies:
        try:
            return self._lookup[species]
        except KeyError:
            raise KeyError(f"{getattr(species, 'name', species)} not found in mixture") from None

    def species_molar_volume(self, T, P, species) -> MolarVolume:
        """ Molar volume of the pure species in its modeled phase """
        ms = self._mixture_species(species)
        phases = ms.eos.phase_finder(T, P, ignore_equilibrium=True)
        V = phases.get(ms.modeled_phase)
        if V is None or V <= 0:
            raise PhaseNotFoundError(ms.modeled_phase, species, ms.eos.name)
        return V

    def _ln_x(self, species) -> float:
        x = self.mole_fraction(species)
        return np.log(x) if x > 0 else -np.inf

    # -------------------------------------------------------------------------
    # Partial molar excess properties (Sandler 9.3-19, 9.3-21)
    # -------------------------------------------------------------------------
    def species_activity_coefficient(self, T, P, species) -> float:
        return self.activity_model.species_activity_coefficient(species, T, P)

    def species_partial_molar_excess_volume(self, T, P, species) -> MolarVolume:
        T, P, dP = float(T), float(P), self.dP_precision
        gamma0 = self.activity_model.species_activity_coefficient(species, T, P)
        gamma1 = self.activity_model.species_activity_coefficient(species, T, P + dP)
        return MolarVolume(R * T / dP * np.log(gamma1 / gamma0), ThermoVarRelation.PARTIAL_MOLAR_EXCESS)

    def species_partial_molar_excess_enthalpy(self, T, P, species) -> Enthalpy:
        T, P, dT = float(T), float(P), self.dT_precision
        gamma0 = self.activity_model.species_activity_coefficient(species, T, P)
        gamma1 = self.activity_model.species_activity_coefficient(species, T + dT, P)
        value = -R * T / dT * (T + 2 * dT) * np.log(gamma1 / gamma0)
        return Enthalpy(value, ThermoVarRelation.PARTIAL_MOLAR_EXCESS)

    def species_partial_molar_excess_gibbs_energy(self, T, P, species) -> GibbsEnergy:
        gamma = self.activity_model.species_activity_coefficient(species, T, P)
        return GibbsEnergy(R * float(T) * np.log(gamma), ThermoVarRelation.PARTIAL_MOLAR_EXCESS)

    # -------------------------------------------------------------------------
    # Partial molar properties
    # -------------------------------------------------------------------------
    def species_partial_molar_volume(self, T, P, species) -> MolarVolume:
        V = self.species_molar_volume(T, P, species)
        V_ex = self.species_partial_molar_excess_volume(T, P, species)
        return MolarVolume(float(V) + float(V_ex), ThermoVarRelation.PARTIAL_MOLAR)

    def species_partial_molar_enthalpy(self, T, P, species) -> Enthalpy:
        ms = self._mixture_species(species)
        V = self.species_molar_volume(T, P, species)
        H = ms.eos.reference_molar_enthalpy(T, P, V)
        H_ex = self.species_partial_molar_excess_enthalpy(T, P, species)
        return Enthalpy(float(H) + float(H_ex), ThermoVarRelation.PARTIAL_MOLAR)

    def species_partial_molar_gibbs_energy(self, T, P, species) -> GibbsEnergy:
        ms = self._mixture_species(species)
        V = self.species_molar_volume(T, P, species)
        G = ms.eos.reference_molar_gibbs_energy(T, P, V)
        G_ex = self.species_partial_molar_excess_gibbs_energy(T, P, species)
        return GibbsEnergy(float(G) + float(G_ex) + R * float(T) * self._ln_x(species), ThermoVarRelation.PARTIAL_MOLAR)

    def species_chemical_potential(self, T, P, species) -> ChemicalPotential:
        return ChemicalPotential(self.species_partial_molar_gibbs_energy(T, P, species), ThermoVarRelation.REAL_MOLAR)

    def species_fugacity(self, T, P, species) -> float:
        ms = self._mixture_species(species)
        V = self.species_molar_volume(T, P, species)
        gamma = self.activity_model.species_activity_coefficient(species, T, P)
        return gamma * ms.eos.fugacity(T, P, V) * self.mole_fraction(species)

    # -------------------------------------------------------------------------
    # Excess and mixing properties
    # -------------------------------------------------------------------------
    def molar_excess_volume(self, T, P) -> MolarVolume:
        value = sum(self.mole_fraction(s) * float(self.species_partial_molar_excess_volume(T, P, s)) for s in self.species)
        return MolarVolume(value, ThermoVarRelation.MOLAR_EXCESS)

    def molar_excess_enthalpy(self, T, P) -> Enthalpy:
        value = sum(self.mole_fraction(s) * float(self.species_partial_molar_excess_enthalpy(T, P, s)) for s in self.species)
        return Enthalpy(value, ThermoVarRelation.MOLAR_EXCESS)

    def molar_volume_of_mixing(self, T, P) -> MolarVolume:
        return MolarVolume(self.molar_excess_volume(T, P), ThermoVarRelation.MIXING)

    def molar_enthalpy_of_mixing(self, T, P) -> Enthalpy:
        return Enthalpy(self.molar_excess_enthalpy(T, P), ThermoVarRelation.MIXING)

    def molar_gibbs_energy_of_mixing(self, T, P) -> GibbsEnergy:
        """ ΔG_mix = RT Σ x_i ln(γ_i x_i) """
        value = 0.0
        for s in self.species:
            x = self.mole_fraction(s)
            if x > 0:
                value += x * np.log(self.species_activity_coefficient(T, P, s) * x)
        return GibbsEnergy(R * float(T) * value, ThermoVarRelation.MIXING)

    # -------------------------------------------------------------------------
    # Total properties
    # -------------------------------------------------------------------------
    def total_molar_volume(self, T, P) -> MolarVolume:
        pure = sum(self.mole_fraction(s) * float(self.species_molar_volume(T, P, s)) for s in self.species)
        return MolarVolume(pure + float(self.molar_volume_of_mixing(T, P)), ThermoVarRelation.REAL_MOLAR)

    def total_molar_enthalpy(self, T, P) -> Enthalpy:
        pure = 0.0
        for s in self.species:
            V = self.species_molar_volume(T, P, s)
            pure += self.mole_fraction(s) * float(self._lookup[s].eos.reference_molar_enthalpy(T, P, V))
        return Enthalpy(pure + float(self.molar_enthalpy_of_mixing(T, P)), ThermoVarRelation.REAL_MOLAR)

    def total_molar_gibbs_energy(self, T, P) -> GibbsEnergy:
        """ G = Σ x_i μ_i, species with x_i = 0 contribute nothing """
        value = 0.0
        for s in self.species:
            x = self.mole_fraction(s)
            if x > 0:
                value += x * float(self.species_partial_molar_gibbs_energy(T, P, s))
        return GibbsEnergy(value, ThermoVarRelation.REAL_MOLAR)

    def molar_density(self, T, P) -> float:
        """ mol/m³ """
        return 1 / float(self.total_molar_volume(T, P))

    def average_molar_mass(self) -> float:
        """ g/mol """
        return sum(self.mole_fraction(s) * comp_library.constants(s).molar_mass for s in self.species)

    # -------------------------------------------------------------------------
    # Ideal gas mixture relations (Sandler §9.1)
    # -------------------------------------------------------------------------
    def igm_total_molar_volume(self, T, P) -> MolarVolume:
        return MolarVolume(self.composition.total() * float(IdealGasLaw.volume(T, P)), ThermoVarRelation.IG_MOLAR)

    def igm_total_molar_enthalpy(self, T) -> Enthalpy:
        value = sum(self.mole_fraction(s) * float(self._lookup[s].eos.ideal_molar_enthalpy_change(REFERENCE_T, T))
                    for s in self.species)
        return Enthalpy(value, ThermoVarRelation.IG_MOLAR)

    def _ig_gibbs_energy(self, T, P, species) -> float:
        eos = self._lookup[species].eos
        H = eos.ideal_molar_enthalpy_change(REFERENCE_T, T)
        S = eos.ideal_molar_entropy_change(REFERENCE_T, REFERENCE_P, T, P)
        return float(H) - float(T) * float(S)

    def igm_species_chemical_potential(self, T, P, species) -> ChemicalPotential:
        value = self._ig_gibbs_energy(T, P, species) + R * float(T) * self._ln_x(species)
        return ChemicalPotential(value, ThermoVarRelation.IG_MOLAR)

    def igm_total_molar_gibbs_energy(self, T, P) -> GibbsEnergy:
        value = sum(self.mole_fraction(s) * self._ig_gibbs_energy(T, P, s) for s in self.species)
        return GibbsEnergy(value + float(self.igm_molar_gibbs_energy_of_mixing(T)), ThermoVarRelation.IG_MOLAR)

    def igm_molar_entropy_of_mixing(self) -> Entropy:
        """ ΔS_mix = -R Σ x_i ln x_i """
        value = sum(x * np.log(x) for x in (self.mole_fraction(s) for s in self.species) if x > 0)
        return Entropy(-R * value, ThermoVarRelation.MIXING)

    def igm_molar_gibbs_energy_of_mixing(self, T) -> GibbsEnergy:
        return GibbsEnergy(-float(T) * float(self.igm_molar_entropy_of_mixing()), ThermoVarRelation.MIXING)

    # -------------------------------------------------------------------------
    # Sampling and reporting
    # -------------------------------------------------------------------------
    def sample(self, T, P) -> MixtureSample:
        """ Chemical potential of every species and the total Gibbs energy at this composition """
        potentials = {s: self.species_chemical_potential(T, P, s) for s in self.species}
        total = GibbsEnergy(sum(self.mole_fraction(s) * float(mu) for s, mu in potentials.items()
                                if self.mole_fraction(s) > 0), ThermoVarRelation.REAL_MOLAR)
        return MixtureSample(float(T), float(P), self.composition, potentials, total)

    def species_table(self, T, P, species: Optional[list] = None) -> pd.DataFrame:
        """ Mole fraction, activity coefficient, fugacity and chemical potential per species """
        species = self.species if species is None else species
        rows = []
        for s in species:
            rows.append({
                'Species': comp_library.name(s),
                'x': self.mole_fraction(s),
                'gamma': self.species_activity_coefficient(T, P, s),
                'f (Pa)': self.species_fugacity(T, P, s),
                'mu (J/mol)': float(self.species_chemical_potential(T, P, s)),
            })
        return pd.DataFrame(rows)
