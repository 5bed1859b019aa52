#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from setuptools import setup, find_packages

# Read version from __init__.py
with open("src/lead_webhook_sync/__init__.py", "r") as f:
    for line in f:
        if line.startswith("__version__"):
            version = line.split("=")[1].strip().strip('"').strip("'")
            break
    else:
        version = "0.0.1"

# Read long description from README.md
with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="lead-webhook-sync",
    version=version,
    description="Syncs SalesGodCRM and Smartlead webhook contacts into HubSpot with source tagging",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[
        "fastapi>=0.100.0",
        "uvicorn>=0.23.0",
        "pydantic>=2.6.1",
        "requests>=2.31.0",
        "hubspot-api-client>=8.0.0",
        "urllib3>=1.26.0",
        "python-dotenv>=1.0.1",
        "tenacity>=8.2.3",
    ],
    extras_require={
        "dev": [
            "pytest>=8.0.0",
            "pytest-cov>=4.1.0",
            "httpx>=0.24.0",
            "black>=24.1.0",
            "ruff>=0.1.15",
            "mypy>=1.8.0",
            "isort>=5.13.2",
        ],
    },
    entry_points={
        "console_scripts": [
            "lead-webhook-sync=lead_webhook_sync.main:main",
            "lead-webhook-test=lead_webhook_sync.harness:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
