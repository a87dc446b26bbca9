#!/usr/bin/env python3

from setuptools import setup, find_packages

setup(
    name="archive-guard",
    version="1.0.0",
    description="Validated zip extraction and creation for untrusted application bundles",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'archive-guard=archive_guard.cli:main',
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: System Administrators",
        "Topic :: System :: Archiving :: Compression",
        "Topic :: Security",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
