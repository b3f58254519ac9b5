from setuptools import setup, find_packages
import os

# Read version from __init__.py
def get_version():
    """Get version from enumselect/__init__.py"""
    init_file = os.path.join(os.path.dirname(__file__), "enumselect", "__init__.py")
    with open(init_file, "r") as f:
        for line in f:
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"\'')
    raise RuntimeError("Unable to find version string.")

# Installation Examples:
# - Base package only: pip install enumselect
# - With test tooling: pip install "enumselect[dev]"

extras_require = {
    # Development dependencies
    "dev": [
        "pytest>=7.4.0",
        "pytest-cov>=4.1.0",
        "coverage>=7.3.2",
    ],
}

setup(
    name="enumselect",
    version=get_version(),
    description="Indexable unit enumerations with validated positions, traversal and text rendering",
    long_description=open("README.md", "r", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Code Generators",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    keywords="enum, enumeration, index, code-generation, validation",
    packages=find_packages(include=["enumselect", "enumselect.*"]),
    install_requires=[
        # Schema files for the pre-build generator
        "PyYAML>=6.0.2",
    ],
    extras_require=extras_require,

    # Console script entry points
    entry_points={
        "console_scripts": [
            "enumselect=enumselect.cli:main",
        ],
    },
)
