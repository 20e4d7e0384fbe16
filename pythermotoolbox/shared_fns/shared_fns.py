#!/usr/bin/python3
# -*- coding: utf-8 -*-

"""
    pythermotoolbox - A collection of Thermodynamic Equilibrium Utilities
              Copyright (C) 2026, The pythermotoolbox developers

    This program is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This program is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
    GNU General Public License for more details.

    The GNU General Public License can be found in the LICENSE directory,
    and at  <https://www.gnu.org/licenses/>.
"""

import logging

import numpy as np
import numpy.typing as npt
from typing import Callable, Optional, List, Sequence

from pythermotoolbox.constants import PRECISION_LIMIT

logger = logging.getLogger(__name__)

def bisect_solve(f: Callable[[float], float], xmin: float, xmax: float, precision: float = PRECISION_LIMIT,
                 residual: Optional[float] = None) -> Optional[float]:
    """ Sign-based bisection of f over [xmin, xmax].
        Returns the bracketed root, or None when f(xmin) and f(xmax) share a sign,
        so that a missing root can never be mistaken for a genuine one.
        Stops once the bracket is narrower than precision and, when residual is given,
        |f| at the returned point is below residual. At float resolution the endpoint
        with the smaller |f| is returned.
    """
    if xmax < xmin:
        xmin, xmax = xmax, xmin
    err_lo = f(xmin)
    err_hi = f(xmax)
    if err_lo == 0:
        return xmin
    if err_hi == 0:
        return xmax
    if np.isnan(err_lo) or np.isnan(err_hi) or np.sign(err_lo) == np.sign(err_hi):
        logger.debug("No sign change in [%g, %g]", xmin, xmax)
        return None

    while True:
        mid_val = (xmax + xmin) / 2
        if mid_val <= xmin or mid_val >= xmax:  # Bracket already at float resolution
            return xmin if abs(err_lo) <= abs(err_hi) else xmax
        err_mid = f(mid_val)
        if err_mid == 0:
            return mid_val
        if xmax - xmin <= precision and (residual is None or abs(err_mid) < residual):
            return mid_val
        if np.sign(err_mid) == np.sign(err_lo):  # Root lies above mid_val
            xmin = mid_val
            err_lo = err_mid
        else:  # Otherwise root lies below mid_val
            xmax = mid_val
            err_hi = err_mid

def bisect_monotonic_roots(f: Callable[[float], float], breakpoints: Sequence[float], precision: float = PRECISION_LIMIT,
                           residual: Optional[float] = None) -> List[float]:
    """ Bisects f across each pair of consecutive breakpoints.
        Breakpoints are expected to split the domain into intervals over which f is monotonic,
        so each interval holds at most one root. Returns the roots found, ascending.
    """
    points = sorted(breakpoints)
    roots = []
    for lo, hi in zip(points[:-1], points[1:]):
        if hi <= lo:
            continue
        root = bisect_solve(f, lo, hi, precision, residual)
        if root is not None and (not roots or root > roots[-1]):
            roots.append(root)
    return roots

def composition_grid(start: float, stop: float, step: float) -> npt.ArrayLike:
    """ Evenly spaced grid from start up to (but excluding) stop, rounded to strip float drift """
    grid = np.round(np.arange(start, stop, step), 10)
    return grid[grid < stop]
