"""Recipe Cart Service.

Shopping-list aggregation, single-cart persistence and token-based cart
sharing for the recipe collection app.
"""

__version__ = "0.1.0"
