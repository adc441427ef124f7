"""Shared models and utilities."""

from .models import Quad

__all__ = ['Quad']
