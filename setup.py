#!/usr/bin/env python3
"""Setup script for icobuilder."""

from setuptools import setup, find_packages

setup(
    name="icobuilder",
    version="1.0.0",
    description="Build multi-size ICO files from square source images",
    packages=find_packages(exclude=["tests"]),
    py_modules=["icobuilder"],
    install_requires=[
        "Pillow>=9.1",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "icobuilder=icobuilder:main",
        ],
    },
    python_requires=">=3.8",
)
