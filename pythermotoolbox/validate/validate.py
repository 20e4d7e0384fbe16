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

from pythermotoolbox.classes import class_dic

def validate_methods(names, variables):
    """ Converts string method / species names into their Enum members.
        names: list of keys into class_dic, e.g. ['eosmethod', 'species']
        variables: list of values, either Enum members or case-insensitive strings
        Returns the single converted value, or the converted list when more than one
    """
    variables = list(variables)
    for m, method in enumerate(names):
        if type(variables[m]) == str:
            try:
                variables[m] = class_dic[method][variables[m].upper().replace('-', '_').replace(' ', '_')]
            except KeyError:
                choices = [e.name for e in class_dic[method]]
                raise ValueError(f"An incorrect {method} was specified: {variables[m]}. Choose from {choices}")
    if len(variables) == 1:
        return variables[0]
    else:
        return variables

def validate_species(species):
    """ Accepts a Chemical member or a species name string """
    return validate_methods(['species'], [species])
