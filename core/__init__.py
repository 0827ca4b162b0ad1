"""Liquid Glass -- core math, sampling, validation and host helpers."""
