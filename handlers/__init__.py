"""
handlers/ - Presentation Layer
================================
Console screens. Each screen reads user input, delegates to the
appropriate Service, and prints the response back to the user.
No business logic lives here.
"""
