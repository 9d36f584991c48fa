"""Business modules for the account service.

Each module is self-contained with its own schemas, services, and routes:
``auth`` covers credentials and bearer tokens, ``users`` covers profiles.
"""
