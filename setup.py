#!/usr/bin/env python3
"""
Setup script for book-printer package.

This file provides backward compatibility with older Python packaging tools.
The actual configuration is in pyproject.toml.
"""

from setuptools import setup

if __name__ == "__main__":
    setup()
