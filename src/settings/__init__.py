"""Enum-valued settings persistence.

This module stores per-owner settings and serializes them to value trees.
"""
