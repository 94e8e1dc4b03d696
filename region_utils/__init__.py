"""
region_utils: build a lookup database of US regions (ZIP codes, cities, states)
with bounding boxes, simplified state outlines and a name search index.
"""

__version__ = "0.1.0"
