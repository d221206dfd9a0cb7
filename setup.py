#!/usr/bin/env python3
"""
Setup script for Ministry Hub API

Install with:
    pip install -e .

With test dependencies:
    pip install -e ".[test]"
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_path = Path(__file__).parent / "README.md"
long_description = ""
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")

requirements = [
    "fastapi>=0.110.0",
    "uvicorn[standard]>=0.27.0",
    "sqlalchemy[asyncio]>=2.0.25",
    "asyncpg>=0.29.0",
    "aiosqlite>=0.19.0",
    "pydantic[email]>=2.5.0",
    "pydantic-settings>=2.1.0",
    "python-jose[cryptography]>=3.3.0",
    "bcrypt>=4.1.0",
    "slowapi>=0.1.9",
    "redis>=5.0.0",
    "anthropic>=0.18.0",
    "httpx>=0.26.0",
]

setup(
    name="ministry-hub",
    version="1.0.0",
    description="Ministry Hub - membership, discipleship and engagement API for a church ministry",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Ministry Hub Team",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*", "scripts"]),
    python_requires=">=3.10",
    install_requires=requirements,
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.23.0",
            "faker>=22.0.0",
            "httpx>=0.26.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "ministry-hub-seed-courses=ministry_hub.db.seed_courses:run",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Framework :: FastAPI",
        "Intended Audience :: Religion",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    keywords="church ministry membership fastapi",
)
