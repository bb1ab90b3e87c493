"""Domain layer: value objects, entities, events, rule services.

Everything here is immutable.  Mutators return new instances; nothing in
this package performs I/O.
"""
