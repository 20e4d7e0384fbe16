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
"""
Sorted key -> value tables with linear interpolation.

InterpolableTable.get_value is a pure read. MemoizingTable wraps a table and
stores every interpolated point back into it, so repeated lookups of the same
key become exact hits.
"""

import bisect
import logging

import numpy as np
import pandas as pd
from typing import Optional, Tuple

from pythermotoolbox.quantities import PhysicalQuantity

logger = logging.getLogger(__name__)


class InterpolableTable:
    """
    Table of unique, sorted keys.

    Args:
        data: optional mapping or iterable of (key, value) pairs
        headers: column names used by to_dataframe and to_delimited_string
    """

    def __init__(self, data=None, headers: Tuple[str, str] = ('x', 'y')):
        self.headers = tuple(headers)
        self._keys = []
        self._data = {}
        self._arrays = None
        if data is not None:
            items = data.items() if hasattr(data, 'items') else data
            for key, value in items:
                self.add(key, value)

    def __len__(self):
        return len(self._keys)

    def __contains__(self, key):
        return key in self._data

    def __iter__(self):
        return iter(self._keys)

    def __repr__(self):
        return f"InterpolableTable({len(self)} rows, headers={self.headers})"

    def keys(self):
        return list(self._keys)

    def values(self):
        return [self._data[k] for k in self._keys]

    def items(self):
        return [(k, self._data[k]) for k in self._keys]

    def add(self, key, value):
        """ Inserts a row, overwriting the value of an existing key """
        if key not in self._data:
            bisect.insort(self._keys, key)
        self._data[key] = value
        self._arrays = None

    def append(self, table: 'InterpolableTable'):
        for key, value in table.items():
            self.add(key, value)

    def get_value(self, key) -> Optional[float]:
        """
        Stored value for key, linear interpolation between the bracketing keys when key lies
        strictly inside the key range, None when it lies outside or the table is empty.
        The stored rows are never modified.
        """
        if key is None or not self._keys:
            return None
        if key in self._data:
            return self._data[key]
        if key < self._keys[0] or key > self._keys[-1]:
            return None

        if self._arrays is None:
            self._arrays = (np.array(self._keys, dtype=float), np.array(self.values(), dtype=float))
        y = float(np.interp(float(key), *self._arrays))
        y0 = self._data[self._keys[0]]
        if isinstance(y0, PhysicalQuantity):
            return type(y0)(y, y0.relation)
        return y

    def invert(self) -> 'InterpolableTable':
        """ New table with keys and values swapped """
        inverted = InterpolableTable(headers=(self.headers[1], self.headers[0]))
        for key, value in self.items():
            inverted.add(value, key)
        return inverted

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame({self.headers[0]: [float(k) for k in self._keys],
                             self.headers[1]: [float(self._data[k]) for k in self._keys]})

    def to_delimited_string(self, delimiter: str = ',') -> str:
        return self.to_dataframe().to_csv(sep=delimiter, index=False)


class MemoizingTable:
    """ Read-through cache over an InterpolableTable: interpolated points are added to the wrapped table """

    def __init__(self, table: InterpolableTable):
        self.table = table
        self.cache_hits = 0
        self.memoized = set()

    def __len__(self):
        return len(self.table)

    def get_value(self, key) -> Optional[float]:
        if key in self.table:
            if key in self.memoized:
                self.cache_hits += 1
            return self.table.get_value(key)
        value = self.table.get_value(key)
        if value is not None:
            self.table.add(key, value)
            self.memoized.add(key)
            logger.debug("Memoized interpolated value at %s", key)
        return value
