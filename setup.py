"""Setup configuration for bikeflow."""

from setuptools import setup, find_packages

with open("docs/README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="bikeflow",
    version="0.1.0",
    description="Bike-share station traffic maps with time-of-day filtering",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Visualization",
        "Topic :: Scientific/Engineering :: GIS",
    ],
    python_requires=">=3.9",
    install_requires=[
        "requests>=2.25.0",
        "numpy>=1.22.0",
        "pandas>=2.0.0",
        "folium>=0.14.0",
    ],
    extras_require={
        "app": ["streamlit>=1.25.0"],
        "dev": ["pytest>=6.0", "black", "flake8"],
    },
)
