#!/usr/bin/env python3
"""
Validation tests for the component library data tables.
Run with: python3 -m pytest pythermotoolbox/tests/ -v
Or standalone: python3 pythermotoolbox/tests/run_all_tests.py
"""

import sys
import os
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
from pythermotoolbox.classes import Chemical
from pythermotoolbox.errors import UnsupportedSpeciesError
from pythermotoolbox.library import comp_library

# =============================================================================
# Species constants
# =============================================================================

def test_benzene_constants():
    c = comp_library.constants(Chemical.BENZENE)
    assert c.name == 'Benzene'
    assert c.cas == '71-43-2'
    assert abs(c.Tc - 562.1) < 1e-9
    assert abs(c.Pc - 4.894e6) < 1e-3
    assert abs(c.molar_mass - 78.114) < 1e-9

def test_every_species_has_constants():
    names = comp_library.names()
    assert len(names) == 26, f"Expected 26 species, got {len(names)}"
    for species in Chemical:
        assert species in names, f"{species.name} missing from the species table"

def test_summary_lists_requested_species():
    text = comp_library.summary([Chemical.WATER, Chemical.BENZENE])
    assert 'Water' in text and 'Benzene' in text
    assert 'Toluene' not in text
    assert 'Tc (K)' in text

# =============================================================================
# Heat capacity and MSLV
# =============================================================================

def test_heat_capacity_coefficients():
    cp = comp_library.heat_capacity(Chemical.BENZENE)
    assert len(cp.coefficients) == 4
    assert abs(cp.coefficients[0] + 36.193) < 1e-9
    assert cp.T_min < 298.15 < cp.T_max

def test_mslv_parameters():
    p = comp_library.mslv_parameters(Chemical.CARBON_DIOXIDE)
    assert abs(p.Vc - 0.094e-3) < 1e-12
    assert p.d_red < p.c_red
    with pytest.raises(UnsupportedSpeciesError):
        comp_library.mslv_parameters(Chemical.WATER)

# =============================================================================
# UNIFAC data
# =============================================================================

def test_unifac_decomposition():
    assert comp_library.unifac_subgroups(Chemical.TOLUENE) == [('ArylMethane', 1), ('UnsubAromaticC', 5)]
    assert Chemical.BENZENE in comp_library.unifac_species()
    with pytest.raises(UnsupportedSpeciesError) as excinfo:
        comp_library.unifac_subgroups(Chemical.HYDROGEN)
    assert excinfo.value.species == [Chemical.HYDROGEN]
    assert 'HYDROGEN' in str(excinfo.value)

def test_subgroup_lookup():
    g = comp_library.subgroup('UnsubAromaticC')
    assert g.label == 'aCH'
    assert g.maingroup == 'AromaticC'
    assert abs(g.R - 0.5313) < 1e-12 and abs(g.Q - 0.4) < 1e-12

def test_interaction_orientation():
    assert comp_library.interaction('AlkaneC', 'AromaticC') == (61.13, -11.12)
    assert comp_library.interaction('AromaticC', 'AlkaneC') is None
