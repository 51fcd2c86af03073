"""
Core pipeline: annotation extraction and schema inference.
"""
