"""Roadmap planning: hierarchical roadmap aggregate with CQRS services.

Roadmap -> Timeframe -> Initiative -> Item, persisted as a whole
aggregate and mutated only through copy-on-write operations.
"""
