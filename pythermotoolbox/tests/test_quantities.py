#!/usr/bin/env python3
"""
Validation tests for typed quantities, compositions, numerics and method validation.
Run with: python3 -m pytest pythermotoolbox/tests/ -v
Or standalone: python3 pythermotoolbox/tests/run_all_tests.py
"""

import sys
import os
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
from pythermotoolbox.classes import Chemical, eos_method, activity_method
from pythermotoolbox.errors import UnitMismatchError
from pythermotoolbox.quantities import (ThermoVarRelation, Temperature, Pressure, MolarVolume, ChemicalPotential,
                                        GibbsEnergy, Composition)
from pythermotoolbox.shared_fns import bisect_solve, bisect_monotonic_roots, composition_grid
from pythermotoolbox.validate import validate_methods, validate_species

# =============================================================================
# Physical quantities
# =============================================================================

def test_same_quantity_addition_keeps_type():
    T = Temperature(300) + Temperature(50)
    assert isinstance(T, Temperature), f"Expected Temperature, got {type(T)}"
    assert T == 350

def test_mismatched_quantity_addition_raises():
    with pytest.raises(UnitMismatchError):
        Pressure(101325) + Temperature(300)
    with pytest.raises(TypeError):
        ChemicalPotential(-1000) - GibbsEnergy(-1000)

def test_plain_number_arithmetic():
    P = Pressure(101325) + 1000
    assert isinstance(P, Pressure)
    assert P == 102325
    P = 1000 - Pressure(100)
    assert isinstance(P, Pressure) and P == 900

def test_products_are_plain_floats():
    PV = Pressure(101325) * MolarVolume(0.0244)
    assert type(PV) is float, f"Expected float, got {type(PV)}"
    assert abs(PV - 101325 * 0.0244) < 1e-9
    ratio = Pressure(200) / Pressure(100)
    assert type(ratio) is float and ratio == 2.0

def test_negation_keeps_type_and_relation():
    G = GibbsEnergy(-500, ThermoVarRelation.MIXING)
    neg = -G
    assert isinstance(neg, GibbsEnergy)
    assert neg.relation == ThermoVarRelation.MIXING
    assert neg == 500

def test_relation_default():
    assert Temperature(300).relation == ThermoVarRelation.UNDEFINED

# =============================================================================
# Compositions
# =============================================================================

def test_composition_binary():
    c = Composition.binary(Chemical.BENZENE, Chemical.TOLUENE, 0.3)
    assert c.species == (Chemical.BENZENE, Chemical.TOLUENE)
    assert abs(c[Chemical.BENZENE] - 0.3) < 1e-15
    assert abs(c[Chemical.TOLUENE] - 0.7) < 1e-15
    assert abs(c.total() - 1.0) < 1e-15

def test_composition_is_immutable():
    c = Composition.binary(Chemical.BENZENE, Chemical.TOLUENE, 0.3)
    with pytest.raises(TypeError):
        c[Chemical.BENZENE] = 0.5
    c2 = c.replace(Chemical.BENZENE, 0.5)
    assert c[Chemical.BENZENE] == 0.3, "replace() must not modify the original"
    assert c2[Chemical.BENZENE] == 0.5

def test_composition_hash_and_equality():
    c1 = Composition.binary(Chemical.WATER, Chemical.NPROPANOL, 0.4)
    c2 = Composition([(Chemical.WATER, 0.4), (Chemical.NPROPANOL, 0.6)])
    assert c1 == c2
    assert hash(c1) == hash(c2)
    assert len({c1, c2}) == 1

def test_composition_normalized():
    c = Composition({Chemical.WATER: 2.0, Chemical.NPROPANOL: 6.0}).normalized()
    assert abs(c[Chemical.WATER] - 0.25) < 1e-15
    assert abs(c.total() - 1.0) < 1e-15

def test_composition_duplicate_species():
    with pytest.raises(ValueError):
        Composition([(Chemical.WATER, 0.5), (Chemical.WATER, 0.5)])

# =============================================================================
# Numerics
# =============================================================================

def test_bisect_solve_root():
    root = bisect_solve(lambda x: x * x - 2, 0.0, 2.0)
    assert root is not None
    assert abs(root - np.sqrt(2)) < 1e-11, f"root={root}"

def test_bisect_solve_no_sign_change():
    assert bisect_solve(lambda x: x * x + 1, -1.0, 1.0) is None

def test_bisect_solve_endpoint_root():
    assert bisect_solve(lambda x: x - 1.0, 1.0, 3.0) == 1.0

def test_bisect_solve_residual():
    """A steep function needs more halvings than the bracket width alone asks for"""
    f = lambda x: 30.0 * (x - 0.3)
    root = bisect_solve(f, 0.0, 1.0, precision=1e-12, residual=1e-12)
    assert abs(f(root)) < 1e-12, f"residual {f(root)}"
    assert abs(root - 0.3) < 1e-12

def test_bisect_monotonic_roots():
    f = lambda x: (x - 1) * (x - 2) * (x - 3)
    roots = bisect_monotonic_roots(f, [0.0, 1.5, 2.5, 4.0])
    assert len(roots) == 3, f"Expected 3 roots, got {roots}"
    for r, expected in zip(roots, [1, 2, 3]):
        assert abs(r - expected) < 1e-10

def test_composition_grid():
    grid = composition_grid(0.001, 1.0, 0.01)
    assert len(grid) == 100, f"Expected 100 points, got {len(grid)}"
    assert grid[0] == 0.001
    assert grid[-1] == 0.991
    assert all(g < 1.0 for g in grid)

# =============================================================================
# Method validation
# =============================================================================

def test_validate_method_strings():
    assert validate_methods(['eosmethod'], ['pr']) == eos_method.PR
    assert validate_methods(['activitymethod'], ['Unifac']) == activity_method.UNIFAC
    assert validate_methods(['eosmethod', 'activitymethod'], [eos_method.VDW, 'ideal']) == [eos_method.VDW, activity_method.IDEAL]

def test_validate_species_names():
    assert validate_species('carbon dioxide') == Chemical.CARBON_DIOXIDE
    assert validate_species(Chemical.WATER) == Chemical.WATER

def test_validate_bad_method():
    with pytest.raises(ValueError):
        validate_methods(['eosmethod'], ['RK'])
