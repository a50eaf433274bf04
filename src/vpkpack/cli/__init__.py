"""
Command-line interface for building VPK packages.
"""
