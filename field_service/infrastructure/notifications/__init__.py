"""
Customer notification infrastructure package.
"""
