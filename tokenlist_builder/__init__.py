"""Token List Builder.

Aggregates per-chain token metadata files into a single validated,
versioned token list, optionally mirroring logos and the final list
to content-addressed storage.
"""

__version__ = "0.1.0"
