#!/usr/bin/env python
"""
Setup configuration for PersonLab decoder package

Installation:
    pip install -e .

Installation with development dependencies:
    pip install -e ".[dev]"
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setup(
    name="personlab-decoder",
    version="0.1.0",
    description="Greedy multi-person pose decoding for PersonLab network heads",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="PersonLab Project Team",
    author_email="",
    license="MIT",
    python_requires=">=3.8",

    packages=find_packages(include=["personlab*"]),

    # Core dependencies
    install_requires=[
        # Computer Vision
        "opencv-python>=4.5.0",
        "numpy>=1.21.0",

        # Scientific computing
        "scipy>=1.7.0",

        # Data handling
        "pyyaml>=5.4.0",

        # Progress bars
        "tqdm>=4.60.0",
    ],

    # Optional dependencies for development
    extras_require={
        "dev": [
            "pytest>=6.2.0",
            "pytest-cov>=2.12.0",
            "black>=21.0",
            "isort>=5.9.0",
            "flake8>=3.9.0",
        ],
    },

    # Entry points for CLI tools
    entry_points={
        "console_scripts": [
            "personlab-decode=personlab.cli:decode_main",
        ],
    },

    # Metadata
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
        "Topic :: Scientific/Engineering :: Image Recognition",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],

    keywords="pose-estimation personlab multi-person keypoints decoding",
)
