"""
Service layer: file-to-file image operations.
"""
