"""
Version 1 of the API.

Bundles the auth, users, services, contact and health endpoints.  The
router is mounted under ``settings.api_prefix`` (``/api`` by default).
"""
