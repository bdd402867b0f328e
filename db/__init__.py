"""
db/ - Database Layer
====================
Opens and closes the PostgreSQL connection and initializes the schema.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
