"""
Core module - configuration.
"""
