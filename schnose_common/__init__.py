"""
Shared Schnose library code.

Fetches KZ map metadata from the GlobalAPI and the SchnoseAPI, merges it into
`GlobalMap` records and provides fuzzy lookup over the merged collection.

Bots and services should import from `schnose_common` rather than talking to the
upstream APIs directly.
"""
