#!/usr/bin/env python3
"""
Setup script for the delegate vote tally tools.

Install with:
    pip install -e .

Or with development tools:
    pip install -e ".[dev]"
"""

from setuptools import setup
from pathlib import Path

# Read version
version_file = Path(__file__).parent / "version.py"
version_dict = {}
exec(version_file.read_text(), version_dict)
__version__ = version_dict.get("__version__", "1.2.0")

# Read README
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text() if readme_file.exists() else ""

setup(
    name="delegate-vote-tally",
    version=__version__,
    author="Delegate Vote Tally Contributors",
    author_email="",
    description="Secret voting token generation and token ballot tallying for delegate elections",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    py_modules=[
        "cli",
        "config",
        "logging_config",
        "roster_io",
        "table_layout",
        "tally_types",
        "token_generator",
        "token_pdf",
        "version",
        "vote_reporting",
        "vote_tally",
    ],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Sociology",
    ],
    python_requires=">=3.11",
    install_requires=[
        "reportlab>=4.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "vote-tally=cli:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
    keywords="election ballot tally tokens delegates",
)
