"""
HTTP layer: routing, authentication and error mapping.
"""
