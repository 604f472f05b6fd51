"""Setup configuration for action-testing."""

from setuptools import setup, find_packages

setup(
    name="action-testing",
    version="0.1.0",
    description="Scenario-based testing for HTTP-calling actions",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "pyyaml>=6.0",
        "click>=8.1.0",
        "responses>=0.23.0",
        "pytest>=7.0",
    ],
    entry_points={
        "console_scripts": [
            "action-testing-init=action_testing.cli:main",
        ],
    },
)
