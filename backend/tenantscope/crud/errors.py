"""
Errors raised by the data-access clients.
"""

from typing import Any, Mapping, Optional


class RecordNotFound(LookupError):
    """Raised by the ``*_or_throw`` reads when nothing matches."""

    code = "not_found"
    status_code = 404

    def __init__(self, model_name: str, where: Optional[Mapping[str, Any]] = None):
        self.model_name = model_name
        self.where = dict(where or {})
        self.message = f"{model_name} not found"
        super().__init__(self.message)
