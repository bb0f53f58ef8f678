"""Artifact generation for evaluated build graphs."""
