"""
Pydantic schema definitions for API payloads.

Each domain (users, services, contacts) defines its own request and
response models.  Schemas are separated from the stored records so
that internal fields (password hashes, raw references) never reach
the API.
"""
