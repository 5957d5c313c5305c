from setuptools import setup, find_packages

setup(
    name="sisterclade",
    version="0.1.0",
    description="Posterior support and model-adequacy tables for amino-acid recoding runs",
    package_dir={"": "sisterclade"},
    packages=find_packages("sisterclade"),
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.24",
        "scipy>=1.10",
        "pandas>=2.0",
        "treeswift>=1.1",
        "matplotlib>=3.7",
    ],
    extras_require={
        "dev": ["pytest>=7.4"],
    },
    entry_points={
        "console_scripts": [
            "sisterclade=sisterclade.cli:main",
        ],
    },
)
