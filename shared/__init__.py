"""
Shared library for GO AI Hub services
"""
