"""
db/ - Database Layer
====================
Owns the PostgreSQL schema file, the connection pool, the startup wait
and schema apply command, and the diagnostic check command.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
