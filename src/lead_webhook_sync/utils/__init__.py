"""
Shared utilities for the lead webhook sync service.
"""
