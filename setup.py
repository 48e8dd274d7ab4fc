from setuptools import setup, find_packages

setup(
    name="connect-four",
    version="0.1.0",
    packages=find_packages(),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "gymnasium",  # Environment interface for automated drivers
    ],
    extras_require={
        "test": ["pytest"],
    },
)
