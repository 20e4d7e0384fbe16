from .errors import ThermoError, UnsupportedSpeciesError, UnsupportedInteractionError, PhaseNotFoundError, UnitMismatchError, ConvergenceError
