#!/usr/bin/env python3
"""
Setup script for Gesture Phrases
"""

from pathlib import Path

from setuptools import setup, find_packages


def read_requirements():
    """Read install requirements from requirements.txt"""
    requirements_path = Path(__file__).parent / "requirements.txt"
    with open(requirements_path, "r") as f:
        return [line.strip() for line in f if line.strip() and not line.startswith("#")]


setup(
    name="gesture-phrases",
    version="0.1.0",
    description="Hand gesture to phrase demo with a deterministic gesture decision engine",
    packages=find_packages(include=["gesture_phrases", "gesture_phrases.*"]),
    package_data={"gesture_phrases": ["config.default.yaml"]},
    python_requires=">=3.9",
    install_requires=read_requirements(),
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "gesture-phrases=gesture_phrases.main:run",
        ],
    },
)
