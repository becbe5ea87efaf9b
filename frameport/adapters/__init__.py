"""
Adapters sub-package for frameport.

Contains format-specific adapters that translate between a ``Frame`` and
one external representation.

Design: capability interfaces, no shared implementation
- base.py defines the Loader / Saver / Renderer / Sink ABCs and RawTable.
- delimited.py implements the CSV loader and saver.
- fixed_width.py implements the fixed-width (FWF) loader. There is no saver.
- markup.py implements the HTML renderer.
- relational.py implements the SQL sink (batched parameterized INSERTs).

Adapters never depend on each other, and none of them builds a ``Frame``.
Loaders hand back raw rows; ``Frame`` validates them once at its boundary.
The caller picks the adapter explicitly; nothing sniffs formats at runtime.
"""
