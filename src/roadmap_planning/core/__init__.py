"""Shared primitives: enums, errors, ids, configuration, file I/O."""
