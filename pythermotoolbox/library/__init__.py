from .library import comp_library, component_library, SpeciesConstants, HeatCapacityParameters, MSLVParameters, UNIFACSubgroup
