"""
services/ - Business Logic Layer
================================
Services combine DAOs and security helpers into the operations the UI calls.
"""
