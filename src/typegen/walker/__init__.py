"""Accumulate generated declarations into a path-keyed namespace tree.

* :mod:`~typegen.walker.structure` -- The tree itself.
* :mod:`~typegen.walker.store` -- :class:`~typegen.walker.store.Store`, the
  per-run registry the converter and component generators write into.
"""

from typegen.walker.store import Store

__all__ = ["Store"]
