#!/usr/bin/env python3
"""Setup script for mlbootstrap.

Creates a virtual environment and installs a data-science / ML stack.
"""
from setuptools import setup, find_packages

setup(
    name="mlbootstrap",
    version="0.1.0",
    description="Bootstrap a Python virtual environment with core ML packages",
    python_requires=">=3.11",
    packages=find_packages(exclude=["tests*"]),
    # Runs on a bare interpreter, before any third-party package exists
    install_requires=[],
    extras_require={
        "dev": [
            "pytest>=8.0.0",
            "pytest-cov>=4.1.0",
            "hypothesis>=6.92.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "setup-ml-env=mlbootstrap.bootstrap:main",
        ],
    },
)
