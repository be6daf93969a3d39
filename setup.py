from setuptools import find_packages, setup

setup(
    name="trapcol",
    version="0.1.0",
    description="Trajectory optimization by trapezoidal direct collocation",
    author="trapcol Authors",
    packages=find_packages(include=["trapcol", "trapcol.*"]),
    install_requires=[
        "numpy>=1.22.0",
        "scipy>=1.9.0",
        "casadi>=3.5.0",  # CasADi/IPOPT is the second NLP backend
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Mathematics",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
    keywords="optimal control, trajectory optimization, collocation, trapezoidal method",
)
