"""
Utility helpers: rich console and logging setup, tree inspection.
"""
