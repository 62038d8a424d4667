"""
HTTP surface for the converter.
"""
