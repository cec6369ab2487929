"""
Message template substitution.

Templates use ``str.format`` syntax: ``{}`` takes the next indexed variable,
``{0}`` picks an indexed variable by position and ``{name}`` picks a named
variable. Format specs and conversions (``{amount:,}``, ``{path!r}``) work as
usual. A placeholder whose variable is missing is written back verbatim so a
half-filled message is still readable.
"""

from __future__ import annotations

import string
from typing import Any, Mapping, Optional, Sequence, Tuple

from parex.core.logging.logger import get_logger

logger = get_logger(__name__)


class _Missing:
    __slots__ = ("field_name", "conversion")

    def __init__(self, field_name: str, conversion: Optional[str] = None) -> None:
        self.field_name = field_name
        self.conversion = conversion

    def placeholder(self, format_spec: str) -> str:
        conversion = f"!{self.conversion}" if self.conversion else ""
        spec = f":{format_spec}" if format_spec else ""
        return "{" + self.field_name + conversion + spec + "}"


class LenientFormatter(string.Formatter):
    """
    ``string.Formatter`` that leaves unresolved placeholders in place.

    Holds per-call state; use one instance per template.
    """

    def __init__(self) -> None:
        super().__init__()
        self._auto_numbered = False

    def parse(self, format_string: str):
        # Formatter numbers "{}" fields before get_field() sees them.
        for literal, field_name, format_spec, conversion in super().parse(format_string):
            self._auto_numbered = field_name == ""
            yield literal, field_name, format_spec, conversion

    def get_field(self, field_name: str, args: Sequence[Any], kwargs: Mapping[str, Any]) -> Tuple[Any, str]:
        try:
            return super().get_field(field_name, args, kwargs)
        except (KeyError, IndexError, AttributeError, TypeError):
            return _Missing("" if self._auto_numbered else field_name), field_name

    def convert_field(self, value: Any, conversion: Optional[str]) -> Any:
        if isinstance(value, _Missing):
            return _Missing(value.field_name, conversion)
        return super().convert_field(value, conversion)

    def format_field(self, value: Any, format_spec: str) -> str:
        if isinstance(value, _Missing):
            return value.placeholder(format_spec)
        return super().format_field(value, format_spec)


def make_string(
    template: str,
    named_vars: Optional[Mapping[str, Any]] = None,
    indexed_vars: Optional[Sequence[Any]] = None,
) -> str:
    """
    Substitute named and indexed variables into ``template``.

    Example:
        >>> make_string("Order {order_id} failed after {}s", {"order_id": 7}, [30])
        'Order 7 failed after 30s'
    """
    try:
        return LenientFormatter().vformat(template, tuple(indexed_vars or ()), dict(named_vars or {}))
    except (ValueError, TypeError):
        # Malformed template (e.g. mixing "{}" with "{0}") or a variable that
        # does not fit its format spec (e.g. "{order_id:d}" with None).
        logger.warning(
            "Unable to render message template",
            extra={"template": template},
            exc_info=True,
        )
        return template
