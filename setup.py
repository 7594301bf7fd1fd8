"""Setup script for the Settlers rules engine and action relay."""

from pathlib import Path

from setuptools import setup, find_packages

readme = Path(__file__).parent / "README.md"
long_description = readme.read_text(encoding="utf-8") if readme.exists() else ""

setup(
    name="settlers-engine",
    version="0.1.0",
    author="Ali Bekheet",
    description="Deterministic hex-board rules engine with an action-replicated multiplayer relay",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages("src"),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Games/Entertainment :: Board Games",
    ],
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.20.0",
        "fastapi>=0.95.0",
        "uvicorn>=0.20.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "httpx>=0.24",
            "black>=21.0",
            "isort>=5.0",
            "mypy>=0.900",
            "flake8>=3.8",
        ],
    },
    entry_points={
        "console_scripts": [
            "settlers-relay=settlers.web.server:main",
        ],
    },
)
