"""Geometry helpers and silhouette lookups."""
