from setuptools import setup, find_packages

setup(
    name="c4term",
    version="0.1.0",
    description="Two-player Connect Four in the terminal",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "c4term=c4term.interfaces.cli:main",
        ],
    },
)
