"""Unit tests for the infoblox_provider package."""
