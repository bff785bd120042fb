"""Operational scripts for Campus Market."""
