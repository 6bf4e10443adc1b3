"""
Catalog document store.

Responsibilities:
- Hold the ``games`` collection as camelCase documents keyed by id.
- Load it lazily from a JSON file and persist every write.
- Provide the admin console's validation and search helpers.
"""
