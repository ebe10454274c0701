from setuptools import setup, find_packages

setup(
    name="fluxo",
    version="0.1.0",
    description="fluxo — a minimal dependently-typed lambda calculus kernel",
    packages=find_packages(include=["fluxo", "fluxo.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "hypothesis>=6.0",
        ],
    },
)
