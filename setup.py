# Copyright Epic Games, Inc. All Rights Reserved.

from setuptools import setup, find_packages
import sys
import os.path

# Don't import colosseum module here, since dependencies may not be installed
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'colosseum'))
from version import VERSION
sys.path.pop(0)

module_name = 'colosseum'
module_root = os.path.dirname(__file__)

packages = [package for package in find_packages(module_root or '.') if package.startswith(module_name)]

setup(name='colosseum',
      version=VERSION,
      description='msgpack-rpc client for driving vehicles and the simulation in a running Colosseum '
                  '(AirSim) instance.',
      license='',
      packages=packages,
      zip_safe=True,
      install_requires=['gym', 'msgpack', 'numpy'],
      extras_require={'test': ['pytest']},
      python_requires='>=3.7',
)
