# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Endevor SCM contributors

"""Setup configuration for endevor-scm package."""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

setup(
    name="endevor-scm",
    version="0.1.0",
    author="Endevor SCM Contributors",
    description="Endevor source download and legacy host connection migration for CI jobs",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.11",
    install_requires=[
        "PyYAML>=6.0",  # Job, registry and plugin configuration files
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "pytest-mock>=3.10.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "endevor-scm=endevor_scm.__main__:main",
        ],
    },
)
