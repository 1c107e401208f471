# setup.py
from setuptools import setup, find_packages

setup(
    name="umami_load",
    version="0.1.0",
    description="Locust load generator for the Drupal Umami demo site",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "click>=8.1",
        "gevent>=22.10",
        "locust>=2.20",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "requests>=2.28",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    entry_points={
        "console_scripts": ["umami-load=umami_load.cli:cli"],
    },
    python_requires=">=3.11",
)
