"""
Setup script for blocknum.

To install:
    pip install .

To install in development mode:
    pip install -e .[dev]
"""

import os

from setuptools import setup, find_packages

setup(
    name="blocknum",
    version="0.1.0",
    author="VesterlundCoder",
    author_email="",
    description="blocknum: arbitrary-precision integers and rationals on 64-bit words",
    long_description=open("README.md").read() if os.path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(include=["blocknum", "blocknum.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.20",
        "pyyaml>=5.1",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "blocknum-sqrt-demo=blocknum.demo:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Mathematics",
    ],
    keywords="bignum arbitrary-precision rational newton sqrt",
)
