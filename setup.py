from setuptools import setup, find_packages

setup(
    name="connectfour",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy",
        "gymnasium",  # Environment adapter over the engine
    ],
    extras_require={
        "test": ["pytest"],
    },
)
