# setup.py
from setuptools import setup, find_packages

setup(
    name="plogic",
    version="0.1.0",
    description="Truth tables and rule-based rewriting for propositional formulas",
    packages=find_packages(include=["plogic", "plogic.*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["plogic=plogic.repl:main"],
    },
    zip_safe=False,
)
