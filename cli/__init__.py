"""
Command line interface for the pattern catalog.
"""
