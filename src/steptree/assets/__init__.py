"""Bundled outlines shipped as package data."""
