from setuptools import setup, find_packages

setup(
    name="orbit-analytics",
    version="1.4.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pandas>=2.0",
        "numpy>=1.24",
        "matplotlib>=3.7",
        "seaborn>=0.12",
        "python-dateutil>=2.8",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "orbit-analytics=orbit_analytics.cli:main",
        ],
    },
    python_requires=">=3.10",
    description="Operating-room analytics core: calendars, case financials and flag patterns",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ]
)
