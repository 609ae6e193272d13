"""Network representation and helpers.

This package provides the immutable `CompactNetwork` (compact star layout),
the `NameMap` between external names and dense ids, and NetworkX conversion
(`convert`).
"""
