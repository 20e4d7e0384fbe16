from .shared_fns import bisect_solve, bisect_monotonic_roots, composition_grid
