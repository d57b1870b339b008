"""
Service layer abstraction.

Each service encapsulates the business rules of one domain and talks
to persistence only through the ``DataStore`` it is constructed with.
"""
