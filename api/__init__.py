"""
HTTP API for the Raster Vision Engine.
"""
