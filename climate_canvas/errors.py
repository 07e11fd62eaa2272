from __future__ import annotations


class SceneDataError(ValueError):
    """Raised when a dataset, scenario or lookup table cannot be rendered."""
