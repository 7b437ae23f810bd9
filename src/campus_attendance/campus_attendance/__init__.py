"""Campus attendance engine.

Feature modules (org, users, shifts, attendance, access, ledger) expose pure
resolvers over immutable snapshots, with a thin Flask controller layer on top.
"""
