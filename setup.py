from setuptools import setup, find_packages

setup(
    name="sapling",
    version="1.0.0",
    description="Extension framework for the scriptevent channel",
    packages=find_packages(include=["sapling", "sapling.*"]),
    install_requires=[],
    extras_require={
        "dev": ["pytest", "pytest-asyncio", "black", "isort"],
        "test": ["pytest", "pytest-asyncio"],
    },
    python_requires=">=3.10",
)
