"""Services Layer — calculator catalog, guide content and seeding.

Invariants:
    - Services own IO (YAML files, database); core/ stays pure
    - Routes call services, never the other way round
"""
