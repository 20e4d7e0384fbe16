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
Pure species equations of state
================================
Cubic (Peng-Robinson, van der Waals) and quartic (modified solid-liquid-vapor)
equations of state, solved for candidate phase molar volumes by bracketing
each root between turning points of the polynomial and bisecting.

Root-finding scheme (cubic):
  1. Inflection point of the z-cubic in closed form
  2. Turning points by bisecting the first derivative over [0, inflection] and [inflection, upper]
  3. Liquid root bisected over [0, tp1], vapor root over [tp2, upper]; middle root never evaluated
  4. Unless equilibrium is ignored, phases whose fugacity coefficient lies more than the
     fugacity tolerance above the minimum are reported with molar volume 0

A bracket without a sign change omits that phase from the returned dictionary.

References:
- Sandler, Chemical, Biochemical and Engineering Thermodynamics, 5th ed.
- Mo & Zhang (2022), modified solid-liquid-vapor equation of state
"""

import logging

import numpy as np
from numpy.polynomial import Polynomial
from scipy.optimize import brentq
from typing import Dict, Optional, Tuple

from pythermotoolbox.classes import eos_method
from pythermotoolbox.constants import (R, SQRT2, PRECISION_LIMIT, UPPER_MOLAR_VOLUME, REFERENCE_T, REFERENCE_P,
                                       FUGACITY_TOLERANCE, VAPOR_PRESSURE_TOLERANCE, VAPOR_PRESSURE_MAX_ITER)
from pythermotoolbox.errors import ConvergenceError
from pythermotoolbox.library import comp_library
from pythermotoolbox.quantities import (ThermoVarRelation, Temperature, Pressure, MolarVolume, Enthalpy, Entropy,
                                        InternalEnergy, GibbsEnergy, HelmholtzEnergy)
from pythermotoolbox.shared_fns import bisect_solve, bisect_monotonic_roots
from pythermotoolbox.validate import validate_methods, validate_species

logger = logging.getLogger(__name__)

_PHASE_CACHE_SIZE = 1024


# =============================================================================
# Phase selection
# =============================================================================
def select_stable_phases(fugacity_coeffs: Dict[str, float], volumes: Dict[str, float],
                         tolerance: float = FUGACITY_TOLERANCE) -> Dict[str, float]:
    """
    Keeps the phases whose fugacity coefficient is within tolerance of the lowest one.

    Args:
        fugacity_coeffs: phase -> fugacity coefficient
        volumes: phase -> candidate molar volume (m³/mol)
        tolerance: maximum fugacity coefficient difference for coexistence

    Returns:
        phase -> molar volume, with 0.0 for every phase that is not stable
    """
    valid = [f for f in fugacity_coeffs.values() if not np.isnan(f)]
    if not valid:
        return {phase: 0.0 for phase in volumes}
    f_min = min(valid)
    selected = {}
    for phase, v in volumes.items():
        f = fugacity_coeffs[phase]
        if np.isnan(f) or abs(f - f_min) >= tolerance:
            selected[phase] = 0.0
        else:
            selected[phase] = v
    return selected


# =============================================================================
# Base class
# =============================================================================
class EquationOfState:
    """
    Base class for a pure species equation of state.

    Subclasses provide pressure, the P-V derivative, the critical molar volume,
    the fugacity coefficient, the departure functions and _candidate_volumes;
    the phase finder, ideal gas paths, reference state properties and
    saturation calculations are shared.
    """
    name = 'EquationOfState'
    modeled_phases = ('liquid', 'vapor')

    def __init__(self, species, use_high_temp_data: bool = False, fugacity_tolerance: float = FUGACITY_TOLERANCE):
        self.species = validate_species(species)
        self.constants = comp_library.constants(self.species)
        self.use_high_temp_data = use_high_temp_data
        self.fugacity_tolerance = fugacity_tolerance
        self._phase_cache = {}
        self._cp_warned = False

    def __repr__(self):
        return f"{type(self).__name__}({self.species.name})"

    # -------------------------------------------------------------------------
    # Equation-specific members
    # -------------------------------------------------------------------------
    def pressure(self, T, V) -> Pressure:
        raise NotImplementedError

    def pv_partial_derivative(self, T, V) -> float:
        raise NotImplementedError

    def critical_molar_volume(self) -> MolarVolume:
        raise NotImplementedError

    def fugacity_coeff(self, T, P, V) -> float:
        raise NotImplementedError

    def departure_enthalpy(self, T, P, V) -> Enthalpy:
        raise NotImplementedError

    def departure_entropy(self, T, P, V) -> Entropy:
        raise NotImplementedError

    def _candidate_volumes(self, T: float, P: float) -> Dict[str, float]:
        raise NotImplementedError

    # -------------------------------------------------------------------------
    # Shared state functions
    # -------------------------------------------------------------------------
    def compressibility_factor(self, T, P, V) -> float:
        return float(P) * float(V) / (R * float(T))

    def fugacity(self, T, P, V) -> float:
        return self.fugacity_coeff(T, P, V) * float(P)

    def upper_bound(self, T, P) -> float:
        """ Upper molar volume bracket, widened at low pressure so the vapor root stays inside """
        return max(UPPER_MOLAR_VOLUME, 2 * R * float(T) / float(P))

    # -------------------------------------------------------------------------
    # Ideal gas paths
    # -------------------------------------------------------------------------
    def heat_capacity_parameters(self):
        return comp_library.heat_capacity(self.species, self.use_high_temp_data)

    def _check_cp_limits(self, cp, *temperatures):
        if self._cp_warned:
            return
        for T in temperatures:
            if not cp.T_min <= T <= cp.T_max:
                logger.warning("%s: T = %.2f K outside heat capacity data range [%g, %g] K",
                               self.constants.name, T, cp.T_min, cp.T_max)
                self._cp_warned = True
                return

    def ideal_heat_capacity(self, T) -> float:
        cp = self.heat_capacity_parameters()
        return float(Polynomial(cp.coefficients)(float(T)))

    def ideal_molar_enthalpy_change(self, T1, T2) -> Enthalpy:
        """ ΔH* = ∫ Cp* dT from T1 to T2 """
        cp = self.heat_capacity_parameters()
        T1, T2 = float(T1), float(T2)
        self._check_cp_limits(cp, T2)
        H = Polynomial(cp.coefficients).integ()
        return Enthalpy(H(T2) - H(T1), ThermoVarRelation.CHANGE)

    def ideal_molar_entropy_change(self, T1, P1, T2, P2) -> Entropy:
        """ ΔS* = ∫ Cp*/T dT - R ln(P2/P1) """
        cp = self.heat_capacity_parameters()
        T1, T2 = float(T1), float(T2)
        self._check_cp_limits(cp, T2)
        c = cp.coefficients
        value = c[0] * np.log(T2 / T1)
        if len(c) > 1:
            S = Polynomial(c[1:]).integ()
            value += S(T2) - S(T1)
        value -= R * np.log(float(P2) / float(P1))
        return Entropy(value, ThermoVarRelation.CHANGE)

    def molar_enthalpy_change(self, T1, P1, V1, T2, P2, V2) -> Enthalpy:
        """ Real state 1 -> ideal gas -> ideal gas at T2 -> real state 2 """
        path_a = self.departure_enthalpy(T1, P1, V1)
        path_b = self.ideal_molar_enthalpy_change(T1, T2)
        path_c = self.departure_enthalpy(T2, P2, V2)
        return Enthalpy(float(path_c) + float(path_b) - float(path_a), ThermoVarRelation.CHANGE)

    def molar_entropy_change(self, T1, P1, V1, T2, P2, V2) -> Entropy:
        path_a = self.departure_entropy(T1, P1, V1)
        path_b = self.ideal_molar_entropy_change(T1, P1, T2, P2)
        path_c = self.departure_entropy(T2, P2, V2)
        return Entropy(float(path_c) + float(path_b) - float(path_a), ThermoVarRelation.CHANGE)

    # -------------------------------------------------------------------------
    # Properties relative to the reference state (298.15 K, 100 kPa, ideal gas)
    # -------------------------------------------------------------------------
    def reference_molar_enthalpy(self, T, P, V) -> Enthalpy:
        path_a = self.ideal_molar_enthalpy_change(REFERENCE_T, T)
        path_b = self.departure_enthalpy(T, P, V)
        return Enthalpy(float(path_a) + float(path_b), ThermoVarRelation.REAL_MOLAR)

    def reference_molar_entropy(self, T, P, V) -> Entropy:
        path_a = self.ideal_molar_entropy_change(REFERENCE_T, REFERENCE_P, T, P)
        path_b = self.departure_entropy(T, P, V)
        return Entropy(float(path_a) + float(path_b), ThermoVarRelation.REAL_MOLAR)

    def reference_molar_internal_energy(self, T, P, V) -> InternalEnergy:
        """ U = H - PV """
        H = self.reference_molar_enthalpy(T, P, V)
        return InternalEnergy(float(H) - float(P) * float(V), ThermoVarRelation.REAL_MOLAR)

    def reference_molar_gibbs_energy(self, T, P, V) -> GibbsEnergy:
        """ G = H - TS """
        H = self.reference_molar_enthalpy(T, P, V)
        S = self.reference_molar_entropy(T, P, V)
        return GibbsEnergy(float(H) - float(T) * float(S), ThermoVarRelation.REAL_MOLAR)

    def reference_molar_helmholtz_energy(self, T, P, V) -> HelmholtzEnergy:
        """ A = U - TS """
        U = self.reference_molar_internal_energy(T, P, V)
        S = self.reference_molar_entropy(T, P, V)
        return HelmholtzEnergy(float(U) - float(T) * float(S), ThermoVarRelation.REAL_MOLAR)

    def state_variables(self, T, P, V) -> dict:
        """ Compressibility factor, U, H, S, G, A and fugacity coefficient at a state """
        return {
            'Z': self.compressibility_factor(T, P, V),
            'U': self.reference_molar_internal_energy(T, P, V),
            'H': self.reference_molar_enthalpy(T, P, V),
            'S': self.reference_molar_entropy(T, P, V),
            'G': self.reference_molar_gibbs_energy(T, P, V),
            'A': self.reference_molar_helmholtz_energy(T, P, V),
            'phi': self.fugacity_coeff(T, P, V),
        }

    # -------------------------------------------------------------------------
    # Phase finding
    # -------------------------------------------------------------------------
    def phase_finder(self, T, P, ignore_equilibrium: bool = False) -> Dict[str, MolarVolume]:
        """
        Finds the molar volume of every phase the equation predicts at T, P.

        Args:
            T: temperature (K)
            P: pressure (Pa)
            ignore_equilibrium: skip the fugacity comparison and return every candidate root

        Returns:
            phase name -> molar volume (m³/mol). Phases without a root are absent;
            phases that are not stable (fugacity comparison) have molar volume 0.
        """
        T, P = float(T), float(P)
        key = (T, P, bool(ignore_equilibrium))
        cached = self._phase_cache.get(key)
        if cached is not None:
            return dict(cached)

        candidates = self._candidate_volumes(T, P)
        if not ignore_equilibrium and len(candidates) > 1:
            coeffs = {phase: self.fugacity_coeff(T, P, v) for phase, v in candidates.items()}
            candidates = select_stable_phases(coeffs, candidates, self.fugacity_tolerance)
        phases = {phase: MolarVolume(v) for phase, v in candidates.items()}

        if len(self._phase_cache) >= _PHASE_CACHE_SIZE:
            self._phase_cache.clear()
        self._phase_cache[key] = phases
        return dict(phases)

    def equilibrium_phases(self, T, P, tolerance: Optional[float] = None) -> Dict[str, MolarVolume]:
        """ Only the phases stable at T, P (fugacity coefficient within tolerance of the minimum) """
        tolerance = self.fugacity_tolerance if tolerance is None else tolerance
        candidates = self.phase_finder(T, P, ignore_equilibrium=True)
        coeffs = {phase: self.fugacity_coeff(T, P, v) for phase, v in candidates.items()}
        selected = select_stable_phases(coeffs, candidates, tolerance)
        return {phase: MolarVolume(v) for phase, v in selected.items() if v > 0}

    # -------------------------------------------------------------------------
    # Saturation
    # -------------------------------------------------------------------------
    def min_fluid_volume(self) -> float:
        """ Pole of the repulsive term bounding the fluid roots from below """
        raise NotImplementedError

    def spinodal_pressures(self, T) -> Optional[Tuple[float, float]]:
        """ (local minimum, local maximum) of the isotherm P(V), bracketed by the critical volume """
        T = float(T)
        Vc = float(self.critical_molar_volume())
        slope = lambda v: self.pv_partial_derivative(T, v)
        v_min = bisect_solve(slope, self.min_fluid_volume() * (1 + 1e-9), Vc)
        v_max = bisect_solve(slope, Vc, UPPER_MOLAR_VOLUME)
        if v_min is None or v_max is None:
            return None
        return float(self.pressure(T, v_min)), float(self.pressure(T, v_max))

    def vapor_pressure(self, T, tolerance: float = VAPOR_PRESSURE_TOLERANCE,
                       max_iter: int = VAPOR_PRESSURE_MAX_ITER) -> Pressure:
        """
        Saturation pressure from equal liquid and vapor fugacities (Sandler, Fig. 7.5-1).
        Returns NaN at or above the critical temperature.
        """
        T = float(T)
        Tc, Pc, omega = self.constants.Tc, self.constants.Pc, self.constants.omega
        if T >= Tc:
            logger.warning("%s: no vapor pressure at T = %.2f K >= Tc = %.2f K", self.constants.name, T, Tc)
            return Pressure(np.nan, ThermoVarRelation.VAPOR_PRESSURE)

        # Wilson correlation as the first guess, pulled inside the S-curve when needed
        P = Pc * np.exp(5.373 * (1 + omega) * (1 - Tc / T))
        phases = self.phase_finder(T, P, ignore_equilibrium=True)
        if 'liquid' not in phases or 'vapor' not in phases:
            spinodals = self.spinodal_pressures(T)
            if spinodals is None or spinodals[1] <= 0:
                raise ConvergenceError(f"{self.constants.name}: no starting pressure inside the S-curve at T = {T} K")
            P = 0.5 * (max(spinodals[0], 0.0) + spinodals[1])

        for _ in range(max_iter):
            phases = self.phase_finder(T, P, ignore_equilibrium=True)
            if 'liquid' not in phases or 'vapor' not in phases:
                raise ConvergenceError(f"{self.constants.name}: vapor pressure iteration left the two-root region at T = {T} K")
            f_L = self.fugacity(T, P, phases['liquid'])
            f_V = self.fugacity(T, P, phases['vapor'])
            if abs(f_L / f_V - 1) <= tolerance:
                return Pressure(P, ThermoVarRelation.VAPOR_PRESSURE)
            P = P * f_L / f_V
        raise ConvergenceError(f"{self.constants.name}: vapor pressure did not converge in {max_iter} iterations at T = {T} K")

    def boiling_temperature(self, P) -> Temperature:
        """ Saturation temperature at P, NaN at or above the critical pressure """
        P = float(P)
        Tc = self.constants.Tc
        if P >= self.constants.Pc:
            return Temperature(np.nan)
        T_lo, T_hi = 0.4 * Tc, 0.98 * Tc
        err_lo = float(self.vapor_pressure(T_lo)) - P
        err_hi = float(self.vapor_pressure(T_hi)) - P
        if err_lo * err_hi > 0:
            logger.warning("%s: boiling temperature at P = %g Pa outside [%.1f, %.1f] K", self.constants.name, P, T_lo, T_hi)
            return Temperature(np.nan)
        return Temperature(brentq(lambda t: float(self.vapor_pressure(t)) - P, T_lo, T_hi, xtol=1e-8))

    def vaporization_enthalpy(self, T) -> Enthalpy:
        """ H(vapor) - H(liquid) at the vapor pressure; the ideal gas path cancels """
        P = self.vapor_pressure(T)
        if np.isnan(P):
            return Enthalpy(np.nan, ThermoVarRelation.OF_VAPORIZATION)
        phases = self.phase_finder(T, P, ignore_equilibrium=True)
        value = float(self.departure_enthalpy(T, P, phases['vapor'])) - float(self.departure_enthalpy(T, P, phases['liquid']))
        return Enthalpy(value, ThermoVarRelation.OF_VAPORIZATION)

    def vaporization_entropy(self, T) -> Entropy:
        P = self.vapor_pressure(T)
        if np.isnan(P):
            return Entropy(np.nan, ThermoVarRelation.OF_VAPORIZATION)
        phases = self.phase_finder(T, P, ignore_equilibrium=True)
        value = float(self.departure_entropy(T, P, phases['vapor'])) - float(self.departure_entropy(T, P, phases['liquid']))
        return Entropy(value, ThermoVarRelation.OF_VAPORIZATION)


# =============================================================================
# Cubic equations of state
# =============================================================================
class CubicEquationOfState(EquationOfState):
    """ Cubic equation written in the compressibility factor z = PV/RT """
    name = 'CubicEquationOfState'

    def z_cubic(self, T, P, V) -> float:
        raise NotImplementedError

    def z_cubic_derivative(self, T, P, V) -> float:
        """ d(cubic)/dz evaluated at the z corresponding to V """
        raise NotImplementedError

    def z_cubic_inflection_point(self, T, P) -> float:
        """ Molar volume at which the second derivative of the cubic vanishes """
        raise NotImplementedError

    def critical_molar_volume(self) -> MolarVolume:
        return MolarVolume(self.z_cubic_inflection_point(self.constants.Tc, self.constants.Pc))

    def min_fluid_volume(self) -> float:
        return self.b

    def turning_points(self, T, P):
        """ (tp1, tp2) local extrema of the cubic; either may be None """
        T, P = float(T), float(P)
        inflection = self.z_cubic_inflection_point(T, P)
        derivative = lambda v: self.z_cubic_derivative(T, P, v)
        tp1 = bisect_solve(derivative, 0.0, inflection) if inflection > 0 else None
        tp2 = bisect_solve(derivative, max(inflection, 0.0), self.upper_bound(T, P))
        return tp1, tp2

    def _candidate_volumes(self, T: float, P: float) -> Dict[str, float]:
        cubic = lambda v: self.z_cubic(T, P, v)
        lower, upper = self.min_fluid_volume(), self.upper_bound(T, P)
        tp1, tp2 = self.turning_points(T, P)

        # Roots below b are not fluid states, so every bracket starts at b
        if tp1 is None or tp2 is None or tp1 <= lower:
            # Monotonic over the fluid region, a single real root
            root = bisect_solve(cubic, lower, upper, residual=PRECISION_LIMIT)
            if root is None:
                logger.debug("%s: no root at T=%g, P=%g", self, T, P)
                return {}
            phase = 'liquid' if root < self.critical_molar_volume() else 'vapor'
            return {phase: root}

        candidates = {}
        liquid = bisect_solve(cubic, lower, tp1, residual=PRECISION_LIMIT)
        if liquid is not None:
            candidates['liquid'] = liquid
        vapor = bisect_solve(cubic, tp2, upper, residual=PRECISION_LIMIT)
        if vapor is not None:
            candidates['vapor'] = vapor
        if len(candidates) < 2:
            logger.debug("%s: only %s found at T=%g, P=%g", self, list(candidates), T, P)
        return candidates


class PengRobinsonEOS(CubicEquationOfState):
    """
    Peng-Robinson (1976) equation of state.

    P = RT/(V-b) - a(T)/(V² + 2bV - b²)
    """
    name = 'PengRobinsonEOS'

    def __init__(self, species, **kwargs):
        super().__init__(species, **kwargs)
        Tc, Pc, omega = self.constants.Tc, self.constants.Pc, self.constants.omega
        self.kappa = 0.37464 + (1.54226 - 0.26992 * omega) * omega
        self.a_crit = 0.45724 * (R * Tc) ** 2 / Pc
        self.b = 0.07780 * R * Tc / Pc

    def alpha(self, T) -> float:
        return (1 + self.kappa * (1 - np.sqrt(float(T) / self.constants.Tc))) ** 2

    def a(self, T) -> float:
        return self.a_crit * self.alpha(T)

    def da(self, T) -> float:
        """ da/dT """
        T = float(T)
        return -self.a_crit * self.kappa * np.sqrt(self.alpha(T) / (self.constants.Tc * T))

    def _AB(self, T, P):
        RT = R * float(T)
        return self.a(T) * float(P) / RT ** 2, self.b * float(P) / RT

    def pressure(self, T, V) -> Pressure:
        T, V, b = float(T), float(V), self.b
        return Pressure(R * T / (V - b) - self.a(T) / (V * V + 2 * b * V - b * b))

    def pv_partial_derivative(self, T, V) -> float:
        T, V, b = float(T), float(V), self.b
        return -R * T / (V - b) ** 2 + 2 * self.a(T) * (V + b) / (V * V + 2 * b * V - b * b) ** 2

    def z_cubic(self, T, P, V) -> float:
        A, B = self._AB(T, P)
        z = self.compressibility_factor(T, P, V)
        return z ** 3 + (B - 1) * z ** 2 + (A - 3 * B ** 2 - 2 * B) * z + (-A * B + B ** 2 + B ** 3)

    def z_cubic_derivative(self, T, P, V) -> float:
        A, B = self._AB(T, P)
        z = self.compressibility_factor(T, P, V)
        return 3 * z ** 2 + 2 * (B - 1) * z + (A - 3 * B ** 2 - 2 * B)

    def z_cubic_inflection_point(self, T, P) -> float:
        return R * float(T) / (3 * float(P)) - self.b / 3

    def _log_term(self, z, B):
        return np.log((z + (1 + SQRT2) * B) / (z + (1 - SQRT2) * B))

    def fugacity_coeff(self, T, P, V) -> float:
        A, B = self._AB(T, P)
        z = self.compressibility_factor(T, P, V)
        ln_phi = z - 1 - np.log(z - B) - A / (2 * SQRT2 * B) * self._log_term(z, B)
        return float(np.exp(ln_phi))

    def departure_enthalpy(self, T, P, V) -> Enthalpy:
        """ H - H(ideal gas), Sandler eqn 6.4-29 """
        T = float(T)
        A, B = self._AB(T, P)
        z = self.compressibility_factor(T, P, V)
        value = R * T * (z - 1) + (T * self.da(T) - self.a(T)) / (2 * SQRT2 * self.b) * self._log_term(z, B)
        return Enthalpy(value, ThermoVarRelation.DEPARTURE)

    def departure_entropy(self, T, P, V) -> Entropy:
        """ S - S(ideal gas) at the same T, P, Sandler eqn 6.4-30 """
        A, B = self._AB(T, P)
        z = self.compressibility_factor(T, P, V)
        value = R * np.log(z - B) + self.da(T) / (2 * SQRT2 * self.b) * self._log_term(z, B)
        return Entropy(value, ThermoVarRelation.DEPARTURE)


class VanDerWaalsEOS(CubicEquationOfState):
    """
    van der Waals equation of state.

    P = RT/(V-b) - a/V²
    """
    name = 'VanDerWaalsEOS'

    def __init__(self, species, **kwargs):
        super().__init__(species, **kwargs)
        Tc, Pc = self.constants.Tc, self.constants.Pc
        self.a = 27 * (R * Tc) ** 2 / (64 * Pc)
        self.b = R * Tc / (8 * Pc)

    def _AB(self, T, P):
        RT = R * float(T)
        return self.a * float(P) / RT ** 2, self.b * float(P) / RT

    def pressure(self, T, V) -> Pressure:
        T, V = float(T), float(V)
        return Pressure(R * T / (V - self.b) - self.a / V ** 2)

    def pv_partial_derivative(self, T, V) -> float:
        T, V = float(T), float(V)
        return -R * T / (V - self.b) ** 2 + 2 * self.a / V ** 3

    def z_cubic(self, T, P, V) -> float:
        A, B = self._AB(T, P)
        z = self.compressibility_factor(T, P, V)
        return z ** 3 - (1 + B) * z ** 2 + A * z - A * B

    def z_cubic_derivative(self, T, P, V) -> float:
        A, B = self._AB(T, P)
        z = self.compressibility_factor(T, P, V)
        return 3 * z ** 2 - 2 * (1 + B) * z + A

    def z_cubic_inflection_point(self, T, P) -> float:
        return R * float(T) / (3 * float(P)) + self.b / 3

    def fugacity_coeff(self, T, P, V) -> float:
        A, B = self._AB(T, P)
        z = self.compressibility_factor(T, P, V)
        return float(np.exp(z - 1 - np.log(z - B) - A / z))

    def departure_enthalpy(self, T, P, V) -> Enthalpy:
        T, P, V = float(T), float(P), float(V)
        return Enthalpy(P * V - R * T - self.a / V, ThermoVarRelation.DEPARTURE)

    def departure_entropy(self, T, P, V) -> Entropy:
        A, B = self._AB(T, P)
        z = self.compressibility_factor(T, P, V)
        return Entropy(R * np.log(z - B), ThermoVarRelation.DEPARTURE)


# =============================================================================
# Quartic equation of state
# =============================================================================
class ModSolidLiquidVaporEOS(EquationOfState):
    """
    Modified solid-liquid-vapor equation of state (Mo & Zhang, 2022).

    P = RT(V-d)/((V-b)(V-c)) - a(T)/(V² + 2bV - b²)

    Four real roots are possible: solid in (b, d), then liquid, a non-physical
    root and vapor above c. Only species with fitted reduced parameters
    (CO2, ethane, H2S, methane, propane) are supported.
    """
    name = 'ModSolidLiquidVaporEOS'
    modeled_phases = ('solid', 'liquid', 'vapor')

    def __init__(self, species, **kwargs):
        super().__init__(species, **kwargs)
        params = comp_library.mslv_parameters(self.species)
        Tc, Pc, omega = self.constants.Tc, self.constants.Pc, self.constants.omega
        self.Vc = params.Vc
        self.a_crit = params.a_red * R ** 2 * Tc ** 2 / Pc
        self.b = params.b_red * params.Vc
        self.c = params.c_red * params.Vc
        self.d = params.d_red * params.Vc
        if omega < 0.491:
            self.kappa = 0.37464 + 1.54226 * omega - 0.26992 * omega ** 2
        else:
            self.kappa = 0.374642 + 1.48504 * omega - 0.165523 * omega ** 2 + 0.016666 * omega ** 3

    def alpha(self, T) -> float:
        return (1 + self.kappa * (1 - np.sqrt(float(T) / self.constants.Tc))) ** 2

    def a(self, T) -> float:
        return self.a_crit * self.alpha(T)

    def da(self, T) -> float:
        T = float(T)
        return -self.a_crit * self.kappa * np.sqrt(self.alpha(T) / (self.constants.Tc * T))

    def critical_molar_volume(self) -> MolarVolume:
        return MolarVolume(self.Vc)

    def min_fluid_volume(self) -> float:
        return self.c

    def pressure(self, T, V) -> Pressure:
        T, V = float(T), float(V)
        b, c, d = self.b, self.c, self.d
        return Pressure(R * T * (V - d) / ((V - b) * (V - c)) - self.a(T) / (V * V + 2 * b * V - b * b))

    def pv_partial_derivative(self, T, V) -> float:
        T, V = float(T), float(V)
        b, c, d = self.b, self.c, self.d
        den = (V - b) * (V - c)
        repulsive = ((V - b) * (V - c) - (V - d) * (2 * V - b - c)) / den ** 2
        return R * T * repulsive + self.a(T) * (2 * V + 2 * b) / (V * V + 2 * b * V - b * b) ** 2

    def _coefficients(self, T, P):
        """ Coefficients of f(z) = c0 + c1 z + c2 z² + c3 z³ - z⁴ """
        RT = R * float(T)
        P = float(P)
        A = self.a(T) * P / RT ** 2
        B, C, D = (x * P / RT for x in (self.b, self.c, self.d))
        c0 = C * B ** 3 + D * B ** 2 - A * B * C
        c1 = A * B + A * C - B ** 2 - 3 * B ** 2 * C - B ** 3 - 2 * B * D
        c2 = 2 * B - A - D + 3 * B ** 2 + B * C
        c3 = C - B + 1
        return c0, c1, c2, c3

    def z_quartic(self, T, P, V) -> float:
        c0, c1, c2, c3 = self._coefficients(T, P)
        z = self.compressibility_factor(T, P, V)
        return c0 + z * (c1 + z * (c2 + z * (c3 - z)))

    def z_quartic_derivative(self, T, P, V, order: int = 1) -> float:
        c0, c1, c2, c3 = self._coefficients(T, P)
        z = self.compressibility_factor(T, P, V)
        if order == 1:
            return c1 + 2 * c2 * z + 3 * c3 * z ** 2 - 4 * z ** 3
        if order == 2:
            return 2 * c2 + 6 * c3 * z - 12 * z ** 2
        if order == 3:
            return 6 * c3 - 24 * z
        raise ValueError(f"Derivative order must be 1, 2 or 3, got {order}")

    def jolt_point(self, T, P) -> float:
        """ Molar volume where the third derivative vanishes, z = c3/4 """
        c3 = self._coefficients(T, P)[3]
        return c3 / 4 * R * float(T) / float(P)

    def _candidate_volumes(self, T: float, P: float) -> Dict[str, float]:
        candidates = {}
        solid = bisect_solve(lambda v: self.z_quartic(T, P, v), self.b, self.d, residual=PRECISION_LIMIT)
        if solid is not None:
            candidates['solid'] = solid

        # Fluid roots above the c pole, split into monotonic intervals
        lo, hi = self.c, self.upper_bound(T, P)
        jolt = self.jolt_point(T, P)
        points = [lo, hi] + ([jolt] if lo < jolt < hi else [])
        inflections = bisect_monotonic_roots(lambda v: self.z_quartic_derivative(T, P, v, 2), points)
        turning = bisect_monotonic_roots(lambda v: self.z_quartic_derivative(T, P, v, 1), [lo, hi] + inflections)
        roots = bisect_monotonic_roots(lambda v: self.z_quartic(T, P, v), [lo, hi] + turning, residual=PRECISION_LIMIT)

        if len(roots) >= 2:
            candidates['liquid'] = roots[0]
            candidates['vapor'] = roots[-1]
        elif len(roots) == 1:
            phase = 'liquid' if roots[0] < self.Vc else 'vapor'
            candidates[phase] = roots[0]
        return candidates

    def _log_terms(self, V):
        V = float(V)
        b, c, d = self.b, self.c, self.d
        repulsive = ((d - b) * np.log(np.abs(1 - b / V)) + (c - d) * np.log(np.abs(1 - c / V))) / (c - b)
        attractive = np.log((V + (1 + SQRT2) * b) / (V + (1 - SQRT2) * b))
        return repulsive, attractive

    def fugacity_coeff(self, T, P, V) -> float:
        T = float(T)
        z = self.compressibility_factor(T, P, V)
        repulsive, attractive = self._log_terms(V)
        ln_phi = -repulsive - self.a(T) / (2 * SQRT2 * self.b * R * T) * attractive + z - 1 - np.log(z)
        return float(np.exp(ln_phi))

    def departure_enthalpy(self, T, P, V) -> Enthalpy:
        T = float(T)
        z = self.compressibility_factor(T, P, V)
        _, attractive = self._log_terms(V)
        value = R * T * (z - 1) + (T * self.da(T) - self.a(T)) / (2 * SQRT2 * self.b) * attractive
        return Enthalpy(value, ThermoVarRelation.DEPARTURE)

    def departure_entropy(self, T, P, V) -> Entropy:
        z = self.compressibility_factor(T, P, V)
        repulsive, attractive = self._log_terms(V)
        value = R * np.log(z) + R * repulsive + self.da(T) / (2 * SQRT2 * self.b) * attractive
        return Entropy(value, ThermoVarRelation.DEPARTURE)


# =============================================================================
# Ideal gas
# =============================================================================
class IdealGasLaw:
    @staticmethod
    def pressure(T, V) -> Pressure:
        return Pressure(R * float(T) / float(V))

    @staticmethod
    def volume(T, P) -> MolarVolume:
        return MolarVolume(R * float(T) / float(P))


# =============================================================================
# Factory
# =============================================================================
EOS_CLASSES = {
    eos_method.PR: PengRobinsonEOS,
    eos_method.VDW: VanDerWaalsEOS,
    eos_method.MSLV: ModSolidLiquidVaporEOS,
}

def create_eos(species, method=eos_method.PR, **kwargs) -> EquationOfState:
    """ Builds the equation of state for a species, method as an eos_method or its name ('PR', 'VDW', 'MSLV') """
    method = validate_methods(['eosmethod'], [method])
    return EOS_CLASSES[method](species, **kwargs)

def default_eos_for_phase(phase: str) -> eos_method:
    """ Equation of state used for a modeled phase when none is specified """
    if phase not in ('solid', 'liquid', 'vapor'):
        raise ValueError(f"Unknown phase: {phase}. Use 'solid', 'liquid' or 'vapor'")
    return eos_method.PR
