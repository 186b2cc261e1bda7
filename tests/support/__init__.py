"""Fakes shared across the test suite."""
