"""
Core Infrastructure

Configuration, constants and the exception hierarchy shared by every layer.
"""
