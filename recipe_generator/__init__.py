"""
Smart Recipe Generator service.

Recommends recipes from a curated in-process catalog based on the
ingredients a user has on hand, with optional dietary, difficulty and
time filters, plus image-based ingredient detection.
"""
