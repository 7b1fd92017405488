from setuptools import setup, find_packages
import sys
import os
import re


def extract_version(version_file):
    version_match = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]",
                              version_file, re.M)
    if version_match:
        return version_match.group(1)
    raise RuntimeError("Unable to find version string.")


if sys.version_info < (3, 8):
    sys.stderr.write('ERROR: You need Python 3.8 or later '
                     'to install the rationalize package.\n')
    exit(1)

packages = [package for package in find_packages()
            if package.startswith('rationalize')]

with open("README.md", "r") as fh:
    long_description = fh.read()

with open(os.path.join('rationalize', '__init__.py'), 'r') as init_file:
    init_file_content = init_file.read()

setup(name='rationalize',
      version=extract_version(init_file_content),
      description='Best rational approximation of floating point numbers within an absolute tolerance',
      long_description=long_description,
      long_description_content_type="text/markdown",

      author='Quantum Technology Group and Chair of Software Engineering, RWTH Aachen University',
      package_dir={'rationalize': 'rationalize'},
      packages=packages,
      package_data={'rationalize': ['*.pyi']},
      python_requires='>=3.8',
      install_requires=['numpy', 'gmpy2', 'lazy_loader'],
      extras_require={
          'test': ['pytest'],
      },
      test_suite="tests",
      classifiers=[
          "Programming Language :: Python :: 3",
          "License :: OSI Approved :: GNU Lesser General Public License v3 or later (LGPLv3+)",
          "Operating System :: OS Independent",
      ],
)
