"""Presentation layer: test framework integration."""
