from setuptools import setup, find_packages

setup(
    name="connectk",
    version="0.1.0",
    packages=find_packages(include=["connectk", "connectk.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["connectk=connectk.interfaces.cli:main"],
    },
)
