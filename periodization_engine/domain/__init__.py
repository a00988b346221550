"""
Domain layer for the periodization engine.
"""
