"""
Per-domain repository modules for database access.

Repositories only talk to the session; validation and invariants live in
`storekeeper.services`.
"""
