"""
pythermotoolbox
===================================

-----------------------------------------------
A collection of Thermodynamic Equilibrium Utilities
-----------------------------------------------

Pure species equations of state, liquid activity coefficient models and a
binary two-phase equilibrium search, built around typed physical quantities.
Modules are imported separately.

Includes functions to perform calculations including;

- Phase molar volumes and stability from Peng-Robinson, van der Waals and modified solid-liquid-vapor EOS
- Fugacity coefficients, departure functions and reference state properties of pure species
- Vapor pressure, boiling temperature and heats of vaporization
- UNIFAC activity coefficients from group contribution decompositions
- Partial molar, excess and mixing properties of homogeneous mixtures
- Tabulated chemical potential curves with linear interpolation
- Vapor-liquid equilibrium compositions of binary systems and binary phase diagrams
- Physical constant, heat capacity and UNIFAC parameter tables for common species


"""

submodules = [
    'activity',
    'classes',
    'constants',
    'eos',
    'equilibrium',
    'errors',
    'library',
    'mixture',
    'quantities',
    'shared_fns',
    'table',
    'validate'
]

__all__ = submodules 

import importlib

def __dir__():
    return __all__


def __getattr__(name):
    if name in submodules:
        return importlib.import_module(f'pythermotoolbox.{name}')
    else:
        try:
            return globals()[name]
        except KeyError:
            raise AttributeError(
                f"Module 'pythermotoolbox' has no attribute '{name}'"
            )
