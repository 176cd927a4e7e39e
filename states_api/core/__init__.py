"""Core Layer — domain types, errors, merge rules and the reference dataset.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - The only IO in core/ is reading the static dataset (reference_data)

Design Decisions:
    - Functional core separated from imperative shell: the fact store is reached
      only through the FactStore protocol
"""
