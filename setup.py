#!/usr/bin/env python3
"""
Setup script for wwanconnect.
"""

from setuptools import setup, find_packages

setup(
    name="wwanconnect",
    version="0.1.0",
    description="Bring a QMI cellular modem online and configure the host network through it",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "pytest-timeout>=2.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "wwan-connect=wwanconnect.cli:main",
        ],
    },
    keywords=["qmi", "wwan", "modem", "cellular", "lte", "qmicli", "apn"],
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: System Administrators",
        "Topic :: System :: Networking",
        "Operating System :: POSIX :: Linux",
        "License :: OSI Approved :: MIT License",
    ],
)
