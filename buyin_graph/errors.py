from __future__ import annotations


class GraphDataError(ValueError):
    """Raised when host-supplied points cannot be normalized into amounts."""
