from .mixture import MixtureSpecies, MixtureSample, HomogeneousMixture
