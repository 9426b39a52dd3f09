"""Core business logic layer.

Subpackages:
- shopping: categorizing, scaling, consolidating and merging shopping list lines,
  and the generation flow that drives them from the stored meal plan
"""
__all__ = ["shopping"]
