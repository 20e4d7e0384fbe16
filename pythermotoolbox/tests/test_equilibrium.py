#!/usr/bin/env python3
"""
Validation tests for the binary two-phase equilibrium search.
Run with: python3 -m pytest pythermotoolbox/tests/ -v
Or standalone: python3 pythermotoolbox/tests/run_all_tests.py
"""

import sys
import os
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
from pythermotoolbox.classes import Chemical
from pythermotoolbox.equilibrium import MultiphaseSystem, MoleFractionSearchRanges, MultiphaseStatePoint
from pythermotoolbox.mixture import HomogeneousMixture
from pythermotoolbox.quantities import Composition

B, T = Chemical.BENZENE, Chemical.TOLUENE
TEMP, PRES = 368.0, 101325.0


def benzene_toluene_system():
    species = [B, T]
    vapor = HomogeneousMixture(species, 'vapor', [0.5, 0.5], activity='IDEAL')
    liquid = HomogeneousMixture(species, 'liquid', [0.5, 0.5], activity='UNIFAC')
    return MultiphaseSystem(Composition.binary(B, T, 0.5), [vapor, liquid], basis=T)

# =============================================================================
# Construction
# =============================================================================

def test_requires_two_phases():
    vapor = HomogeneousMixture([B, T], 'vapor', [0.5, 0.5])
    with pytest.raises(ValueError):
        MultiphaseSystem(Composition.binary(B, T, 0.5), [vapor])

def test_requires_two_species():
    vapor = HomogeneousMixture([B], 'vapor', [1.0])
    liquid = HomogeneousMixture([B], 'liquid', [1.0])
    with pytest.raises(ValueError):
        MultiphaseSystem({B: 1.0}, [vapor, liquid])

def test_ternary_not_implemented():
    species = [B, T, Chemical.WATER]
    vapor = HomogeneousMixture(species, 'vapor', [0.3, 0.3, 0.4])
    liquid = HomogeneousMixture(species, 'liquid', [0.3, 0.3, 0.4])
    with pytest.raises(NotImplementedError):
        MultiphaseSystem(Composition(zip(species, [0.3, 0.3, 0.4])), [vapor, liquid])

def test_three_phases_not_implemented():
    mixtures = [HomogeneousMixture([B, T], phase, [0.5, 0.5]) for phase in ('vapor', 'liquid', 'solid')]
    with pytest.raises(NotImplementedError):
        MultiphaseSystem(Composition.binary(B, T, 0.5), mixtures)

def test_duplicate_phase_rejected():
    mixtures = [HomogeneousMixture([B, T], 'liquid', [0.5, 0.5]) for _ in range(2)]
    with pytest.raises(ValueError):
        MultiphaseSystem(Composition.binary(B, T, 0.5), mixtures)

def test_basis_defaults_to_last_species():
    system = benzene_toluene_system()
    assert system.basis == T
    assert system.non_basis == [B]

# =============================================================================
# Search ranges
# =============================================================================

def test_search_ranges_merge():
    ranges = MoleFractionSearchRanges([0.1, 0.13, 0.5], 0.02).ranges
    assert len(ranges) == 2, f"Expected 2 ranges, got {ranges}"
    assert abs(ranges[0][0] - 0.08) < 1e-12 and abs(ranges[0][1] - 0.15) < 1e-12
    assert abs(ranges[1][0] - 0.48) < 1e-12 and abs(ranges[1][1] - 0.52) < 1e-12

def test_search_ranges_clipped():
    ranges = MoleFractionSearchRanges([0.005, 0.998], 0.02).ranges
    assert ranges[0][0] == 0.001
    assert ranges[-1][1] == 0.999

def test_search_range_grid():
    grid = MoleFractionSearchRanges([0.5], 0.005).grid(0.001)
    assert len(grid) == 11
    assert abs(grid[0] - 0.495) < 1e-12 and abs(grid[-1] - 0.505) < 1e-12

# =============================================================================
# Curves
# =============================================================================

def test_curve_tabulation():
    system = benzene_toluene_system()
    system.calculate_potential_and_energy_curves(TEMP, PRES, 'liquid', [0.1, 0.5, 0.9])
    curves = system.get_chemical_potential_curves(TEMP, PRES, 'liquid')
    assert set(curves) == {B, T}
    assert curves[B].keys() == [0.1, 0.5, 0.9]
    # Benzene chemical potential rises with its mole fraction, toluene falls
    mu_B = curves[B].values()
    mu_T = curves[T].values()
    assert mu_B[0] < mu_B[1] < mu_B[2]
    assert mu_T[0] > mu_T[1] > mu_T[2]
    assert curves[B].state == MultiphaseStatePoint(B, 'liquid', TEMP, PRES)
    assert len(system.total_gibbs_energy_curves[('liquid', TEMP, PRES)]) == 3

# =============================================================================
# Equilibrium search
# =============================================================================

def test_benzene_toluene_equilibrium():
    system = benzene_toluene_system()
    results = system.find_phase_equilibria(TEMP, PRES)
    assert len(results) >= 1, "No equilibrium point found"
    for r in results:
        yB, yT = r.mole_fraction('vapor', B), r.mole_fraction('vapor', T)
        xB, xT = r.mole_fraction('liquid', B), r.mole_fraction('liquid', T)
        for x in (yB, yT, xB, xT):
            assert 0 < x < 1, f"Mole fraction {x} outside (0, 1)"
        assert abs(yB + yT - 1) < 1e-12 and abs(xB + xT - 1) < 1e-12
        # Benzene is the lighter component
        assert yB > xB, f"yB={yB} should exceed xB={xB}"
        assert 0.5 < yB < 0.8 and 0.25 < xB < 0.55, f"yB={yB}, xB={xB}"
    assert len(system.last_phase_equilibria_errors) > 0

def test_equilibrium_search_is_deterministic():
    system = benzene_toluene_system()
    first = system.find_phase_equilibria(TEMP, PRES)
    second = system.find_phase_equilibria(TEMP, PRES)
    assert first == second
    assert [r.value for r in first] == [r.value for r in second]

def test_refined_search():
    system = benzene_toluene_system()
    coarse = system.find_phase_equilibria(TEMP, PRES)
    refined = system.find_phase_equilibria(TEMP, PRES, refine=True)
    assert len(refined) >= 1
    for r in refined:
        yB = r.mole_fraction('vapor', B)
        assert any(abs(yB - c.mole_fraction('vapor', B)) <= 0.02 + 1e-9 for c in coarse)
        error = system.last_phase_equilibria_errors[float(yB)]
        assert error < 0.008

def test_curve_exports():
    system = benzene_toluene_system()
    system.find_phase_equilibria(TEMP, PRES)
    mu_csv = system.chemical_potential_curves_to_csv()
    assert len(mu_csv) == 4
    for text in mu_csv.values():
        assert text.startswith('mole fraction,chemical potential')
    g_csv = system.total_gibbs_energy_curves_to_csv()
    assert set(g_csv) == {('vapor', TEMP, PRES), ('liquid', TEMP, PRES)}

def test_results_dataframe():
    system = benzene_toluene_system()
    results = system.find_phase_equilibria(TEMP, PRES)
    df = system.results_to_dataframe(results)
    assert list(df.columns) == ['T', 'P', 'x_vapor', 'x_liquid']
    assert len(df) == len(results)

def test_binary_phase_diagram():
    system = benzene_toluene_system()
    df = system.binary_phase_diagram(PRES, [360.0, 375.0])
    assert list(df.columns) == ['T', 'xV', 'xL']
    assert set(df['T']) == {360.0, 375.0}
    mean = df.groupby('T').mean()
    # Raising T at fixed P leaves less of the lighter component in both phases
    assert mean.loc[375.0, 'xV'] < mean.loc[360.0, 'xV']
    assert mean.loc[375.0, 'xL'] < mean.loc[360.0, 'xL']
