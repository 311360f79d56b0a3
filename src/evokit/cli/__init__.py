"""Evokit command line interface."""
