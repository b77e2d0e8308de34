"""
Interactive client for the dawn2dusk API
"""
