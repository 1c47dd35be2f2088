"""Core functionality for ruledot."""
