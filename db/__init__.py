"""
db/ - Database Layer
====================
Owns the PostgreSQL connection pool and the schema for customers and reservations.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
