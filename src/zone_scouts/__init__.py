"""Autonomous zone-graph scouts."""
