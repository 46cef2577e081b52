"""
API layer for Picverter: dependencies, exception handling and routers.
"""
