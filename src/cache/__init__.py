"""Incremental build cache: hashing, manifest, rebuild planning."""
