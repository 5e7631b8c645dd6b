"""Shared pytest configuration."""

import matplotlib

# Snapshots are rendered off-screen
matplotlib.use("Agg")
