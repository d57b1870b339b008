"""
Application package initializer.

The project is organised into logical pieces: ``core`` holds
configuration, logging and security helpers, ``stores`` the data
access layer (MongoDB with an in‑memory fallback), ``services`` the
business rules and ``api`` the versioned HTTP routers.
"""
