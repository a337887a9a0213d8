#!/usr/bin/env python

from setuptools import setup, find_packages


kwargs = {
    'name': 'pincoupling',
    'version': '0.1.0',
    'packages': find_packages(exclude=['tests*']),
    'python_requires': '>=3.10',
    'install_requires': [
        'numpy', 'scipy', 'h5py', 'lxml'
    ],
    'extras_require': {
        'openmc': ['openmc'],
        'mpi': ['mpi4py'],
        'test': ['pytest'],
    },
    'entry_points': {
        'console_scripts': [
            'pincoupling-run=pincoupling.scripts.pincoupling_run:run',
        ],
    },
}

setup(**kwargs)
