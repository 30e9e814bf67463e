from setuptools import find_packages, setup

setup(
    name="annomath",
    version="0.1.0",
    description="Annotation-driven, sandboxed math expression substitution for block-based programming hosts.",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "click",
        "rich",
        "tabulate",
        "pydantic>=2",
        "toml",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
            "scipy",
        ],
    },
    entry_points={
        "console_scripts": [
            "annomath=annomath.cli.main:cli",
        ],
    },
)
