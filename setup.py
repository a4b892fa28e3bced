from setuptools import setup, find_packages

setup(
    name="trapsolver",
    version="0.1.0",
    description="Adaptive trapezoidal quadrature for single and double integrals",
    author="adamfilli",
    packages=find_packages(include=["trapsolver", "trapsolver.*"]),
    install_requires=[
        "numpy",
        "sympy",
        "matplotlib",
        "pandas",
    ],
    extras_require={
        "mcp": ["mcp"],
        "test": ["pytest"],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
