from setuptools import setup, find_packages

setup(
    name="MCUniform",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "pandas",
        "matplotlib",
        "scipy",
        "joblib",
    ],
    extras_require={
        "progress": ["tqdm"],
        "test": ["pytest"],
    },
    description="Monte Carlo power of chi-square and range tests for multinomial uniformity",
)
