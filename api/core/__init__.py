"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every entity package uses (record
store client, field transforms, pagination, settings, logging). Keep
entity-specific field shaping in the corresponding package (e.g. `locations/`).
"""
