from .eos import (EquationOfState, CubicEquationOfState, PengRobinsonEOS, VanDerWaalsEOS, ModSolidLiquidVaporEOS,
                  IdealGasLaw, select_stable_phases, create_eos, default_eos_for_phase, EOS_CLASSES)
