"""Configuration and logging utilities for usergroup-manager."""
