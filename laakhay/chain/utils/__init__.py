"""Utility functions."""

from .storyboard import StoryBoard

__all__ = ["StoryBoard"]
