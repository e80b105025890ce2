#!/usr/bin/env python3

import os
from setuptools import setup, find_namespace_packages

install_requires = [
    "colorama",  # for colored log messages
]

VERSION_FILE = os.path.join(os.path.dirname(__file__), "VERSION.txt")

with open(VERSION_FILE) as f:
    version = f.read().strip()

setup(
    name="twterm",
    version=version,
    description="Querying the geometry of the terminal attached to the process",
    packages=find_namespace_packages(include=["tw.*"]),
    install_requires=install_requires,
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
    license="MIT",
)
