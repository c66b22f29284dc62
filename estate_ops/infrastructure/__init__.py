"""Infrastructure Layer — database access, the SQL entity store, and logging setup.

Invariants:
    - Driver exceptions never escape: mapped to ConflictError / StoreIntegrityError / DependencyError
    - Infrastructure reads core/ catalogs but never calls validators

Design Decisions:
    - Store implements core/repository_protocols.EntityStore so services stay driver-agnostic
"""
