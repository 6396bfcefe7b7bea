#!/usr/bin/env python
# -*- coding: utf-8 -*-

from setuptools import setup, find_packages

readme = """typediff finds regressions between two versions of a font by
diffing the decoded contents of their tables and the rendering of their
glyphs and of per-script word lists"""

setup(name='typediff',
      version='0.1.0',
      description='Font regression diffs',
      license="Apache",
      long_description=readme,
      author='Typediff Authors',
      python_requires='>=3.8',
      packages=find_packages(exclude=['tests']),
      include_package_data=True,
      install_requires=[
          'fontTools>=4.40',
          'uharfbuzz>=0.37',
          'freetype-py',
          'numpy',
          'Pillow',
          'brotli',
      ],
      extras_require={
          'test': ['pytest'],
      },
      package_data={
          'typediff': [
              'data/wordlists/*.txt',
              'data/wordlists/*.txt.br',
          ]
      },
      entry_points={
          'console_scripts': [
              'typediff = typediff.cli:main',
              'ttj = typediff.ttj:main',
          ]
      })
