"""
security/ - Credentials
=======================
Password hashing and sign-in attempt limiting.
"""
