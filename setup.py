#!/usr/bin/python3
# -*- coding: utf-8 -*-

from setuptools import setup, find_packages
import os

ROOT = os.path.abspath(os.path.dirname(__file__))

with open(os.path.join(ROOT, 'README.md'), 'r', encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='pythermotoolbox',
    include_package_data=True,
    package_data={'pythermotoolbox.library': ['*.csv']},
    version='0.1.0',
    packages=find_packages(include=['pythermotoolbox', 'pythermotoolbox.*']),
    description='pythermotoolbox - A collection of Thermodynamic Equilibrium Utilities',
    long_description=long_description,
    long_description_content_type='text/markdown',
    python_requires='>=3.9',
    keywords=['thermodynamics', 'equation of state', 'UNIFAC', 'phase equilibrium'],
    classifiers=[],
    install_requires=[
        'numpy',
        'scipy',
        'pandas',
        'tabulate',
    ],
    extras_require={
        'test': ['pytest'],
    }
)
