"""Shared base types for Parcelize."""

from .base import BaseDataclass

__all__ = ["BaseDataclass"]
