#!/usr/bin/env python3
"""
Setup script for envregistry package.
"""

from setuptools import setup, find_packages

setup(
    name="envregistry",
    version="0.1.0",
    description="Process-wide configuration registry with dotted-path access and environment export",
    author="envregistry Team",
    package_dir={"": "src"},
    packages=find_packages(where="src", include=["envregistry", "envregistry.*"]),
    python_requires=">=3.10",
    install_requires=[
        "python-dotenv>=1.0",
        "rich>=13.0",
        "typer>=0.9",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "envregistry=envregistry.cli.main:main",
        ],
    },
)
