"""Shared errors, logging, constants and models for Parcelize."""
