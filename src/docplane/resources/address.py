"""Resource address grammar.

Addresses name a cached resource, what to do with it, and an optional
sub-range::

    gdrive:///<id>                               legacy, not cache-backed
    gdrive://docs/<id>/content
    gdrive://docs/<id>/chunk/<start>-<end>
    gdrive://docs/<id>/structure
    gdrive://sheets/<id>/values/<url-encoded-range>
    gdrive://files/<id>/content[/<start>-<end>]

Parsing is total: every input yields one of the address variants below, and
malformed input yields an :class:`InvalidAddress` carrying a reason and a
message the agent can act on. Ranges are validated here so the resolver
never has to.

The ``(type, action)`` combinations live in the ``ROUTES`` table. Adding a
resource type or action means adding a row there.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import ClassVar
from urllib.parse import quote, unquote

from docplane.config.constants import DEFAULT_SCHEME


class AddressType(StrEnum):
    LEGACY = "legacy"
    DOC = "doc"
    SHEET = "sheet"
    FILE = "file"


class Action(StrEnum):
    CONTENT = "content"
    CHUNK = "chunk"
    STRUCTURE = "structure"
    VALUES = "values"


class ParseErrorReason(StrEnum):
    """Why an address failed to parse."""

    INVALID_SCHEME = "invalid_scheme"
    EMPTY_ID = "empty_id"
    MISSING_TYPE_OR_ID = "missing_type_or_id"
    UNKNOWN_TYPE = "unknown_type"
    UNKNOWN_ACTION = "unknown_action"
    MISSING_PARAMS = "missing_params"
    MALFORMED_RANGE = "malformed_range"
    NEGATIVE_START = "negative_start"
    EMPTY_RANGE = "empty_range"


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open character range ``[start, end)``. Always ``0 <= start < end``."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end <= self.start:
            raise ValueError(f"Invalid span [{self.start}, {self.end})")

    @property
    def width(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


# =============================================================================
# Address variants
# =============================================================================


@dataclass(frozen=True, slots=True)
class LegacyAddress:
    """``scheme:///<id>``: served by the direct fetch path, not the cache."""

    type: ClassVar[AddressType] = AddressType.LEGACY
    valid: ClassVar[bool] = True

    resource_id: str


@dataclass(frozen=True, slots=True)
class DocAddress:
    type: ClassVar[AddressType] = AddressType.DOC
    valid: ClassVar[bool] = True

    resource_id: str
    action: Action
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class SheetAddress:
    type: ClassVar[AddressType] = AddressType.SHEET
    valid: ClassVar[bool] = True
    action: ClassVar[Action] = Action.VALUES

    resource_id: str
    range: str


@dataclass(frozen=True, slots=True)
class FileAddress:
    type: ClassVar[AddressType] = AddressType.FILE
    valid: ClassVar[bool] = True
    action: ClassVar[Action] = Action.CONTENT

    resource_id: str
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class InvalidAddress:
    valid: ClassVar[bool] = False

    error: str
    reason: ParseErrorReason


CachedAddress = DocAddress | SheetAddress | FileAddress
ParsedAddress = LegacyAddress | DocAddress | SheetAddress | FileAddress | InvalidAddress


# =============================================================================
# Route table
# =============================================================================


class ParamRule(Enum):
    """What the segment after the action must look like."""

    NONE = "none"  # ignored if present
    SPAN = "span"  # required <start>-<end>
    OPTIONAL_SPAN = "optional_span"  # absent means whole content
    SHEET_RANGE = "sheet_range"  # required, URL-decoded verbatim


@dataclass(frozen=True, slots=True)
class Route:
    """One supported ``(type, action)`` combination."""

    segment: str
    action: Action
    params: ParamRule
    build: Callable[[str, Span | str | None], CachedAddress]

    @property
    def templates(self) -> tuple[str, ...]:
        """Address path templates (without scheme) accepted by this route."""
        base = f"{self.segment}/<id>/{self.action.value}"
        if self.params is ParamRule.SPAN:
            return (f"{base}/<start>-<end>",)
        if self.params is ParamRule.OPTIONAL_SPAN:
            return (base, f"{base}/<start>-<end>")
        if self.params is ParamRule.SHEET_RANGE:
            return (f"{base}/<url-encoded-range>",)
        return (base,)


ROUTES: dict[tuple[str, str], Route] = {
    (r.segment, r.action.value): r
    for r in (
        Route("docs", Action.CONTENT, ParamRule.NONE, lambda rid, _: DocAddress(rid, Action.CONTENT)),
        Route(
            "docs",
            Action.CHUNK,
            ParamRule.SPAN,
            lambda rid, span: DocAddress(rid, Action.CHUNK, span),  # type: ignore[arg-type]
        ),
        Route(
            "docs", Action.STRUCTURE, ParamRule.NONE, lambda rid, _: DocAddress(rid, Action.STRUCTURE)
        ),
        Route(
            "sheets",
            Action.VALUES,
            ParamRule.SHEET_RANGE,
            lambda rid, rng: SheetAddress(rid, rng),  # type: ignore[arg-type]
        ),
        Route(
            "files",
            Action.CONTENT,
            ParamRule.OPTIONAL_SPAN,
            lambda rid, span: FileAddress(rid, span),  # type: ignore[arg-type]
        ),
    )
}

TYPE_SEGMENTS: dict[str, AddressType] = {
    "docs": AddressType.DOC,
    "sheets": AddressType.SHEET,
    "files": AddressType.FILE,
}
_SEGMENT_FOR_TYPE = {v: k for k, v in TYPE_SEGMENTS.items()}


def supported_routes() -> list[Route]:
    """All supported ``(type, action)`` routes, in table order."""
    return list(ROUTES.values())


def actions_for(segment: str) -> list[str]:
    """Supported action names for a type segment, sorted."""
    return sorted(action for seg, action in ROUTES if seg == segment)


def address_templates(scheme: str = DEFAULT_SCHEME) -> list[str]:
    """Every accepted address form, legacy first."""
    templates = [f"{scheme}:///<id>"]
    for route in ROUTES.values():
        templates.extend(f"{scheme}://{t}" for t in route.templates)
    return templates


# =============================================================================
# Parsing
# =============================================================================

_SPAN_RE = re.compile(r"([0-9]+)-([0-9]+)")


def _invalid(reason: ParseErrorReason, error: str) -> InvalidAddress:
    return InvalidAddress(error=error, reason=reason)


def _parse_span(segment: str) -> Span | InvalidAddress:
    match = _SPAN_RE.fullmatch(segment)
    if match is None:
        return _invalid(
            ParseErrorReason.MALFORMED_RANGE,
            f"malformed range '{segment}'; use <start>-<end> (e.g. 0-5000)",
        )
    start, end = int(match.group(1)), int(match.group(2))
    if start < 0:
        return _invalid(ParseErrorReason.NEGATIVE_START, f"range start ({start}) cannot be negative")
    if end <= start:
        return _invalid(
            ParseErrorReason.EMPTY_RANGE,
            f"range end ({end}) must be greater than start ({start})",
        )
    return Span(start, end)


def _parse_params(route: Route, segment: str | None) -> Span | str | InvalidAddress | None:
    if route.params is ParamRule.NONE:
        return None
    if route.params is ParamRule.OPTIONAL_SPAN:
        return None if segment is None else _parse_span(segment)
    if segment is None:
        example = "0-5000" if route.params is ParamRule.SPAN else "Sheet1%21A1%3AB10"
        return _invalid(
            ParseErrorReason.MISSING_PARAMS,
            f"{route.segment} {route.action.value} address requires a range "
            f"(e.g. {route.segment}/<id>/{route.action.value}/{example})",
        )
    if route.params is ParamRule.SPAN:
        return _parse_span(segment)
    return unquote(segment)


class AddressParser:
    """Parses addresses for a single URI scheme."""

    __slots__ = ("_scheme",)

    def __init__(self, scheme: str = DEFAULT_SCHEME) -> None:
        self._scheme = scheme

    @property
    def scheme(self) -> str:
        return self._scheme

    def parse(self, uri: str) -> ParsedAddress:
        """Parse *uri*. Never raises."""
        if not isinstance(uri, str):
            return _invalid(ParseErrorReason.INVALID_SCHEME, "invalid scheme: address must be a string")

        legacy_prefix = f"{self._scheme}:///"
        if uri.startswith(legacy_prefix):
            resource_id = uri[len(legacy_prefix) :]
            if not resource_id:
                return _invalid(ParseErrorReason.EMPTY_ID, "empty identifier in legacy address")
            return LegacyAddress(resource_id)

        prefix = f"{self._scheme}://"
        if not uri.startswith(prefix):
            return _invalid(
                ParseErrorReason.INVALID_SCHEME,
                f"invalid scheme: address must start with {prefix}",
            )

        segments = uri[len(prefix) :].split("/")
        type_segment = segments[0]
        resource_id = segments[1] if len(segments) > 1 else ""
        if not type_segment or not resource_id:
            return _invalid(
                ParseErrorReason.MISSING_TYPE_OR_ID,
                f"missing type or id; expected {prefix}<type>/<id>/<action>",
            )

        if type_segment not in TYPE_SEGMENTS:
            return _invalid(
                ParseErrorReason.UNKNOWN_TYPE,
                f"unsupported resource type '{type_segment}'; "
                f"supported types: {', '.join(TYPE_SEGMENTS)}",
            )

        action = segments[2] if len(segments) > 2 else ""
        route = ROUTES.get((type_segment, action))
        if route is None:
            supported = ", ".join(actions_for(type_segment))
            if not action:
                message = f"missing action for {type_segment}; supported actions: {supported}"
            else:
                message = (
                    f"unsupported action '{action}' for {type_segment}; "
                    f"supported actions: {supported}"
                )
            return _invalid(ParseErrorReason.UNKNOWN_ACTION, message)

        # Segments past the parameter are ignored; an empty one counts as absent.
        param_segment = segments[3] if len(segments) > 3 and segments[3] else None
        params = _parse_params(route, param_segment)
        if isinstance(params, InvalidAddress):
            return params
        return route.build(resource_id, params)

    def format(self, address: LegacyAddress | CachedAddress) -> str:
        """Render an address back to its string form."""
        if isinstance(address, LegacyAddress):
            return f"{self._scheme}:///{address.resource_id}"
        segment = _SEGMENT_FOR_TYPE[address.type]
        base = f"{self._scheme}://{segment}/{address.resource_id}/{address.action.value}"
        if isinstance(address, SheetAddress):
            return f"{base}/{quote(address.range, safe='')}"
        if address.span is not None:
            return f"{base}/{address.span}"
        return base


def parse_address(uri: str, scheme: str = DEFAULT_SCHEME) -> ParsedAddress:
    """Parse *uri* with a parser for *scheme*."""
    return AddressParser(scheme).parse(uri)


def format_address(address: LegacyAddress | CachedAddress, scheme: str = DEFAULT_SCHEME) -> str:
    """Render *address* with *scheme*."""
    return AddressParser(scheme).format(address)
