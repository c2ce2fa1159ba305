"""Criterion rules, one per criterion kind."""

from .document_rule import DocumentRule
from .profile_rule import ProfileRule

__all__ = [
    "DocumentRule",
    "ProfileRule",
]
