"""
Minimal RFC 6570 expansion for Harvest URL templates.

Supported expressions:
  {name}      simple expansion, value fully percent-encoded
  {+name}     reserved expansion, reserved characters kept as-is
  {?a,b,c}    form-style query, only present (non-None) values emitted
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote
from uuid import UUID

from .errors import ConfigurationError

EXPRESSION_RE = re.compile(r"\{([^{}]*)\}")
RESERVED_CHARS = ":/?#[]@!$&'()*+,;="
SUPPORTED_OPERATORS = {"", "+", "?"}


def _encode(value: str, *, allow_reserved: bool) -> str:
    # "%" is kept for reserved expansion so pre-encoded triplets are not doubled
    safe = RESERVED_CHARS + "%" if allow_reserved else ""
    return quote(value, safe=safe)


def _path_value(name: str, value: Any) -> str:
    if value is None:
        raise ConfigurationError(f"Missing required path parameter '{name}'.")
    if isinstance(value, bool) or not isinstance(value, (str, int, UUID)):
        raise ConfigurationError(
            f"Path parameter '{name}' must be str, int or UUID, "
            f"got {type(value).__name__}."
        )
    return str(value)


def parse_expressions(template: str) -> List[tuple[str, List[str]]]:
    """
    Return (operator, variable names) for every expression in the template.
    Example: '{+baseurl}/roles{?page,per_page}' -> [('+', ['baseurl']), ('?', ['page', 'per_page'])]
    """
    stripped = EXPRESSION_RE.sub("", template)
    if "{" in stripped or "}" in stripped:
        raise ConfigurationError(f"Unbalanced braces in URL template: {template!r}")

    expressions = []
    for match in EXPRESSION_RE.finditer(template):
        body = match.group(1)
        operator = body[:1] if body[:1] in ("+", "?", "#", ".", "/", ";", "&") else ""
        if operator not in SUPPORTED_OPERATORS:
            raise ConfigurationError(
                f"Unsupported URL template operator '{operator}' in {template!r}"
            )
        names = [n.strip() for n in body[len(operator) :].split(",") if n.strip()]
        if not names:
            raise ConfigurationError(f"Empty expression in URL template: {template!r}")
        expressions.append((operator, names))
    return expressions


def query_keys(template: str) -> List[str]:
    """Names declared by the template's {?...} expressions, in order."""
    keys: List[str] = []
    for operator, names in parse_expressions(template):
        if operator == "?":
            keys.extend(names)
    return keys


def expand(
    template: str,
    path_parameters: Mapping[str, Any],
    query_parameters: Optional[Mapping[str, Optional[str]]] = None,
) -> str:
    """
    Expand a URL template.

    path_parameters must supply every {name}/{+name} variable.
    query_parameters holds already-formatted strings; None values and keys the
    template does not declare are skipped.
    """
    parse_expressions(template)
    query_parameters = query_parameters or {}

    def _replace(match: re.Match[str]) -> str:
        body = match.group(1)
        if body.startswith("?"):
            pairs: Dict[str, str] = {}
            for name in (n.strip() for n in body[1:].split(",") if n.strip()):
                value = query_parameters.get(name)
                if value is None:
                    continue
                pairs[name] = _encode(value, allow_reserved=False)
            if not pairs:
                return ""
            return "?" + "&".join(f"{k}={v}" for k, v in pairs.items())

        allow_reserved = body.startswith("+")
        names = body[1:] if allow_reserved else body
        parts = [
            _encode(
                _path_value(name, path_parameters.get(name)),
                allow_reserved=allow_reserved,
            )
            for name in (n.strip() for n in names.split(",") if n.strip())
        ]
        return ",".join(parts)

    return EXPRESSION_RE.sub(_replace, template)


__all__ = ["expand", "parse_expressions", "query_keys"]
