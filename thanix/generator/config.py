"""Generation settings shared by the emitters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

# NetBox objects whose responses are known to carry nulls in non-nullable fields.
DEFAULT_UNSANITARY_OBJECTS: Final = ("interface",)

# Components ending with this suffix are outbound payloads and keep strict nullability.
REQUEST_BODY_SUFFIX: Final = "Request"

DEFAULT_API_ROOT: Final = "/api/"


@dataclass(frozen=True)
class GeneratorConfig:
    """Options fixed for the duration of one generation run.

    Attributes:
        workaround_mode: Widen fields of unsanitary objects to ``Option``.
        debug: Emit request/response tracing into the generated functions.
        unsanitary_objects: Case-insensitive substrings naming unsanitary objects.
        infer_integer_width: Pick integer widths from ``minimum``/``maximum``
            instead of always using ``i64``.
        api_root: Prefix stripped from paths when deriving function names.
    """

    workaround_mode: bool = False
    debug: bool = False
    unsanitary_objects: tuple[str, ...] = DEFAULT_UNSANITARY_OBJECTS
    infer_integer_width: bool = True
    api_root: str = DEFAULT_API_ROOT

    def is_unsanitary(self, name: str) -> bool:
        """Check if a struct name contains any entry of the denylist."""
        lowered = name.lower()
        return any(word.strip().lower() in lowered for word in self.unsanitary_objects if word.strip())

    def needs_nullability_workaround(self, name: str) -> bool:
        """Whether fields of the named component are widened to ``Option``."""
        return self.workaround_mode and not name.endswith(REQUEST_BODY_SUFFIX) and self.is_unsanitary(name)
