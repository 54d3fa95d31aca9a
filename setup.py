"""Setup configuration for agelum-runner."""

from setuptools import setup, find_packages

setup(
    name="agelum-runner",
    version="0.1.0",
    description="Runs remotely defined browser automation tests step by step",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "pyyaml>=6.0",
        "click>=8.1.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "agelum-runner=agelum_runner.cli:main",
        ],
    },
)
