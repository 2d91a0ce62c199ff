from setuptools import setup, find_packages

setup(
    name="pr-tracker",
    version="1.0.0",
    description="Hacktoberfest pull request tracker for GitHub users",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "aiohttp>=3.9.0",
        "rich>=13.0.0",
        "click>=8.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pr-tracker=pr_tracker.cli:main",
        ],
    },
)
