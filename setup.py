from setuptools import setup, find_packages

setup(
    name="c4engine",
    version="0.2.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["run"],
    install_requires=[
        "numpy",
        "gymnasium",  # ConnectFourEnv
    ],
    extras_require={
        "test": ["pytest"],
    },
)
