from setuptools import find_packages, setup

setup(
    name="zfa-lists",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    description="Hereditarily finite, set-like ZFA lists with a decision procedure "
    "for equivalence, subset, and membership",
    python_requires=">=3.9",
    install_requires=[
        "attrs>=22.2.0",
        "pyrsistent>=0.19.0",
        "typing_extensions>=4.7.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
)
