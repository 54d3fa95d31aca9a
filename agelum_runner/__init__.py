"""Agelum test runner - executes remotely defined browser tests."""

__version__ = "0.1.0"
