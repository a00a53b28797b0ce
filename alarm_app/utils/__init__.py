"""
Utility functions module.

Date semantics:
- Price history and trigger dates are UTC calendar days, never datetimes
- A datetime is reduced to its UTC date before any comparison
- Composite matching defaults to the current UTC date
"""
