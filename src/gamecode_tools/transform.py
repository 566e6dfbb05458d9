"""Translation between plain JSON values and the wrapped encoding.

Some agent-hosting platforms exchange tool arguments and results in a "wrapped"
encoding where every scalar is boxed as ``{"type": "text", "text": <value>}``.
Objects and arrays are never boxed themselves; only their leaves are. The
functions here rewrite a JSON value tree between the two encodings and the
:class:`FormatTransformer` applies them independently to the decode side
(incoming parameters) and the encode side (outgoing results) of a dispatcher.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

WRAPPER_TYPE_KEY = "type"
WRAPPER_TEXT_KEY = "text"
WRAPPER_TYPE_TEXT = "text"


class WireFormat(str, Enum):
    """Encoding used on one side of the dispatcher."""

    PLAIN = "plain"
    WRAPPED = "wrapped"


def is_wrapped(value: Any) -> bool:
    """Return True if ``value`` already looks like a wrapper object.

    The check is structural: any object holding both a ``type`` and a ``text``
    key qualifies, whatever the values are.
    """
    return (
        isinstance(value, dict)
        and WRAPPER_TYPE_KEY in value
        and WRAPPER_TEXT_KEY in value
    )


def wrap(value: Any) -> Any:
    """Rewrite a plain JSON value into the wrapped encoding."""
    if is_wrapped(value):
        return value
    if isinstance(value, dict):
        return {key: wrap(member) for key, member in value.items()}
    if isinstance(value, list):
        return [wrap(element) for element in value]
    return {WRAPPER_TYPE_KEY: WRAPPER_TYPE_TEXT, WRAPPER_TEXT_KEY: value}


def unwrap(value: Any) -> Any:
    """Rewrite a wrapped JSON value back into plain JSON."""
    if isinstance(value, dict):
        if (
            value.get(WRAPPER_TYPE_KEY) == WRAPPER_TYPE_TEXT
            and WRAPPER_TEXT_KEY in value
        ):
            return unwrap(value[WRAPPER_TEXT_KEY])
        return {key: unwrap(member) for key, member in value.items()}
    if isinstance(value, list):
        return [unwrap(element) for element in value]
    return value


@dataclass(frozen=True)
class FormatConfig:
    """Encoding selection for both sides of a dispatcher.

    Attributes:
        input_format: Encoding of incoming parameters (decode side).
        output_format: Encoding of outgoing results (encode side).

    """

    input_format: WireFormat = WireFormat.PLAIN
    output_format: WireFormat = WireFormat.PLAIN

    @classmethod
    def plain(cls) -> FormatConfig:
        """Plain JSON in both directions."""
        return cls(WireFormat.PLAIN, WireFormat.PLAIN)

    @classmethod
    def wrapped(cls) -> FormatConfig:
        """Wrapped encoding in both directions."""
        return cls(WireFormat.WRAPPED, WireFormat.WRAPPED)

    @classmethod
    def plain_to_wrapped(cls) -> FormatConfig:
        """Accept plain parameters, produce wrapped results."""
        return cls(WireFormat.PLAIN, WireFormat.WRAPPED)

    @classmethod
    def wrapped_to_plain(cls) -> FormatConfig:
        """Accept wrapped parameters, produce plain results."""
        return cls(WireFormat.WRAPPED, WireFormat.PLAIN)

    @classmethod
    def from_names(cls, input_format: str, output_format: str) -> FormatConfig:
        """Build a configuration from format names such as ``"wrapped"``.

        Raises:
            ValueError: If either name is not a known format.

        """
        return cls(WireFormat(input_format.lower()), WireFormat(output_format.lower()))


class FormatTransformer:
    """Apply a :class:`FormatConfig` to parameters and results."""

    def __init__(self, config: FormatConfig | None = None) -> None:
        self._config = config or FormatConfig.plain()

    @property
    def config(self) -> FormatConfig:
        return self._config

    def transform_params(self, params: Any) -> Any:
        """Decode incoming parameters into plain JSON."""
        if self._config.input_format is WireFormat.WRAPPED:
            return unwrap(params)
        return params

    def transform_result(self, result: Any) -> Any:
        """Encode an outgoing plain JSON result for the configured output."""
        if self._config.output_format is WireFormat.WRAPPED:
            return wrap(result)
        return result

    @classmethod
    def plain(cls) -> FormatTransformer:
        return cls(FormatConfig.plain())

    @classmethod
    def wrapped(cls) -> FormatTransformer:
        return cls(FormatConfig.wrapped())

    @classmethod
    def plain_to_wrapped(cls) -> FormatTransformer:
        return cls(FormatConfig.plain_to_wrapped())

    @classmethod
    def wrapped_to_plain(cls) -> FormatTransformer:
        return cls(FormatConfig.wrapped_to_plain())

    def __repr__(self) -> str:
        return (
            f"FormatTransformer(input={self._config.input_format.value}, "
            f"output={self._config.output_format.value})"
        )
