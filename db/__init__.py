"""
db/ - Database Layer
====================
Owns the single PostgreSQL connection to the coverage database and the
retrying executor through which every query flows.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
