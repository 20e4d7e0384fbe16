from .equilibrium import (MultiphaseSystem, MultiphaseStatePoint, MultiphaseEquilibriumResult, ChemicalPotentialCurve,
                          PhaseTotalGibbsEnergyCurve, MoleFractionSearchRanges, results_to_dataframe)
