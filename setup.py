#!/usr/bin/env python3
"""
Packaging for PictureDSK.

Reading image files (BMP, PNG, ...) needs the "image" extra; numpy .npy
pictures work with the base install.
"""

from setuptools import setup, find_packages

setup(
    name="picturedsk",
    version="1.0.0",
    description="Apple II GCR track encoder and WOZ 2.0 picture disk builder",
    license="MIT",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.5.0",
        "rich>=13.7.0",
        "numpy>=1.26.0",
    ],
    extras_require={
        "image": ["PyQt6>=6.6.0"],
        "dev": ["pytest>=7.4.0"],
    },
    entry_points={
        "console_scripts": [
            "picturedsk=picturedsk.main:main",
        ],
    },
)
