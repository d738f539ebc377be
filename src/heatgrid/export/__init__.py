"""Standalone HTML export."""
