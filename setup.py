""" cryptoutils build script for setuptools.

"""

from setuptools import find_packages, setup  # type: ignore

import cryptoutils

with open("README.md", "r", encoding="ascii") as file_:
    longdescription = file_.read()

setup(
    name=cryptoutils.name,
    version=cryptoutils.__version__,
    license=cryptoutils.__license__,
    author=cryptoutils.__author__,
    author_email=cryptoutils.__author_email__,
    description="Number theory utilities, elliptic curves, and RSA attacks",
    long_description=longdescription,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=["sympy"],
    extras_require={"test": ["pytest"], "docs": ["sphinx", "sphinx_rtd_theme"]},
    keywords=(
        "number-theory cryptography elliptic-curves modular-square-root "
        "tonelli-shanks jacobi-symbol continued-fractions safe-primes "
        "rsa wiener-attack"
    ),
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Topic :: Security :: Cryptography",
        "Topic :: Scientific/Engineering :: Mathematics",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
