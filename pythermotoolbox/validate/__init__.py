from .validate import validate_methods, validate_species
