"""
repositories/ - Data Access Layer
==================================
A generic record mapper over one table, plus one DAO per domain entity.
DAOs receive raw row mappings from the mapper and return domain model objects.
"""
