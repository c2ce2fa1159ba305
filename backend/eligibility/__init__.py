"""Eligibility evaluation engine and HTTP service."""
