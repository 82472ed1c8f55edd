"""
Setup script for PDF Combiner CLI.

This script configures the package for installation via pip.
Supports both development and production installations.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README for long description
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

setup(
    name="pdf-combiner-cli",
    version="1.0.0",
    description="CLI tool for combining PDF files while preserving bookmarks, named destinations and layers",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="PDF Combiner CLI Contributors",
    author_email="",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pypdf>=5.0.0",
        "click>=8.0.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pdf-combiner=pdf_combiner.cli:cli",
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Office/Business",
        "Programming Language :: Python :: 3",
        "Environment :: Console",
    ],
    keywords="pdf combine merge cli bookmarks outline named-destinations layers ocg",
    license="MIT",
    include_package_data=True,
    zip_safe=False,
)
