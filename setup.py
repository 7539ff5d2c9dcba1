#!/usr/bin/env python
from setuptools import setup

from ospfnm import __version__

external_deps = ['easysnmp']


setup(
    name='ospf-network-monitoring',
    version=__version__,
    description='Nagios check of OSPF neighbor states over SNMP',
    packages=['ospfnm'],
    py_modules=['check_ospf'],
    scripts=['graphite/ospf_neighbors.py'],
    install_requires=external_deps,
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'check_ospf = check_ospf:main',
        ],
    },
    python_requires='>=3.6',
)
