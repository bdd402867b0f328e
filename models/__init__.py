"""
models/ - Domain Layer
======================
Plain dataclasses for the personnel records handled by the admin console.
"""
