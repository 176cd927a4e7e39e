"""States API Package — U.S. state reference data with user-editable fun facts.

Invariants:
    - Package root holds no executable code beyond the version string
"""

__version__ = "1.0.0"
