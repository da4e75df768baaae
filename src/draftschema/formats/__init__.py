"""Wire format adapters.

Each format module provides to_<format> and from_<format> functions that
encode the result of ``serialize`` and decode input for ``parse``.
"""

from draftschema.formats.json import from_json, to_json

__all__ = ["from_json", "to_json"]
