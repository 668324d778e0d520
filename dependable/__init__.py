"""Dependable - dependency health reporting for package-manager projects."""

__version__ = "0.3.0"
