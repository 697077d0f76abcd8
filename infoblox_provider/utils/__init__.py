"""Utilities for the Infoblox provider."""
