"""
Core utilities shared by every layer: environment, logging, HTTP sessions.
"""
