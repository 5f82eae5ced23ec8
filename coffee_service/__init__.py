"""Coffee service package.

A single "coffee" resource served over HTTP, with updates guarded by an
optimistic concurrency protocol: every record carries a version counter that is
handed out as an ETag and must be echoed back in If-Match to update it.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
