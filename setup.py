"""
Setup script for the todoctl todo API client.
"""
from setuptools import setup, find_packages

setup(
    name="todoctl",
    version="0.1.0",
    packages=find_packages(include=["todoctl", "todoctl.*"]),
    install_requires=[
        "click>=8.2.0",
        "httpx>=0.25.0",
        "rich>=13.0.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "todoctl=todoctl.cli:main",
        ],
    },
    python_requires=">=3.11",
)
