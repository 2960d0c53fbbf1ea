"""
structuredvg: typed SVG attribute encoding.

Renders structured element data into ``name="value"`` attribute lists,
deterministically and without data loss.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Parsing or validating markup
    - General string escaping
    - Document layout beyond single empty elements

Every write call receives its settings explicitly. There is no global
state, so independent elements can be encoded concurrently.
"""

__version__ = "0.1.0"
