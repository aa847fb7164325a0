#!/usr/bin/env python3
"""
Setup script for yamlbuild.

yamlbuild is pure Python: it turns YAML node trees into Python objects and
has no compiled parts.

Extras:
- test : pytest, for running the suite under tests/
"""

from setuptools import setup, find_packages

setup(
    name='yamlbuild',
    version='0.1.0',
    description='Tag-driven construction of Python objects from YAML node trees',
    packages=find_packages(include=['yamlbuild', 'yamlbuild.*']),
    python_requires='>=3.9',
    install_requires=[
        'pydantic>=2.0',
        'structlog>=22.1',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
)
