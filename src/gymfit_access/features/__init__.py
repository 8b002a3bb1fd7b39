"""Features of the gymfit-access authorization core.

- permissions/: permission catalog, role registry, permission resolution
- identity/: principals, role assignments and identity binding
- branches/: branch directory and branch scope resolution
- audit/: append-only audit log
- session/: per-session authorization context
- navigation/: access gates and role-aware navigation
"""
