"""
Control catalog for the CCC assessment engine.

The catalog holds the message constants, one check function per test,
the declarative test requirement table and the tactics built from it.
Import ``ccc_abs.catalog.tactics`` for the registry; this package module
stays import-free so helpers can use ``ccc_abs.catalog.messages``.
"""
