"""
Catalog Service
Solution listing, translation proxy and market insights status for GO AI Hub
"""
