from setuptools import setup, find_packages

setup(
    name="game2048",
    version="0.1.0",
    packages=find_packages(include=["game2048", "game2048.*"]),
    install_requires=[
        "numpy",
        "gymnasium",
        "pygame",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["game2048=game2048.main:main"],
    },
)
