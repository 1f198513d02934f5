"""
Service layer abstraction.

Services encapsulate data access for a domain so API handlers never
talk to the database driver directly.
"""
