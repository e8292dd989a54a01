"""Infrastructure Layer — database pool and logging setup.

Invariants:
    - Infrastructure never imports core/ domain logic beyond the error hierarchy
    - All database failures leave here as DatabaseError
"""
