"""Ops Dashboard HTTP backend."""
