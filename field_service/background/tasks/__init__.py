"""
Background tasks package.
"""
