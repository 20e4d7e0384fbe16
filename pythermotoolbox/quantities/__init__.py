from .quantities import (ThermoVarRelation, PhysicalQuantity, Temperature, Pressure, MolarVolume, MoleFraction,
                         Enthalpy, Entropy, InternalEnergy, GibbsEnergy, HelmholtzEnergy, ChemicalPotential, Composition)
