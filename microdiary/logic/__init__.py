# microdiary/logic/__init__.py
"""Pure time arithmetic, interval analysis and entry validation."""
