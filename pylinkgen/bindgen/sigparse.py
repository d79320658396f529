# -*- coding: utf-8 -*-
"""
pylinkgen/bindgen/sigparse.py
Parser for textual parameter signatures such as ``(a, b, /, *, c=None, **kw)``.

The target declarations only model positional parameters, so parsing stops at
the first keyword-only marker, variadic parameter or keyword-variadic
parameter. Anything cut off that way is reported in ``ParsedSignature.dropped``.
Malformed tokens never raise; they come back as ordinary (possibly empty)
names.
"""

from typing import List, Optional

from .constants import (
    POSITIONAL_ONLY_MARKER,
    KEYWORD_ONLY_MARKERS,
    VAR_KEYWORD_PREFIX,
    VAR_POSITIONAL_PREFIX,
)
from .models import Parameter, ParsedSignature

_OPENERS = {'(': ')', '[': ']', '{': '}'}
_QUOTES = ('"', "'")


def split_top_level(text: str, sep: str = ',') -> List[str]:
    """Split ``text`` on ``sep`` outside brackets and string literals."""
    parts = []
    buf = []
    stack = []
    quote = None
    escaped = False

    for ch in text:
        if quote:
            buf.append(ch)
            if escaped:
                escaped = False
            elif ch == '\\':
                escaped = True
            elif ch == quote:
                quote = None
            continue

        if ch in _QUOTES:
            quote = ch
        elif ch in _OPENERS:
            stack.append(_OPENERS[ch])
        elif stack and ch == stack[-1]:
            stack.pop()
        elif ch == sep and not stack:
            parts.append(''.join(buf))
            buf = []
            continue
        buf.append(ch)

    parts.append(''.join(buf))
    return parts


def strip_parens(sig: str) -> str:
    """Return the text between the outer parentheses, dropping ``-> T``."""
    sig = sig.strip()
    if not sig.startswith('('):
        return sig

    depth = 0
    quote = None
    for i, ch in enumerate(sig):
        if quote:
            if ch == quote and sig[i - 1] != '\\':
                quote = None
            continue
        if ch in _QUOTES:
            quote = ch
        elif ch in '([{':
            depth += 1
        elif ch in ')]}':
            depth -= 1
            if depth == 0:
                return sig[1:i]
    # Unbalanced: take everything after the opening parenthesis
    return sig[1:]


def param_name(token: str) -> str:
    """Reduce one parameter token to its bare name (with ``*`` prefixes kept)."""
    token = token.strip().replace('\\', '')
    # Default value first: annotations may contain '=' only inside brackets
    token = split_top_level(token, '=')[0]
    token = split_top_level(token, ':')[0]
    return token.strip()


def parse_signature(sig: Optional[str]) -> ParsedSignature:
    """Parse a signature string into positional parameters.

    Args:
        sig: Signature text, e.g. ``"(a, b, /, *, c=None)"``. ``None`` and
            empty strings yield an empty, non-variadic signature.

    Returns:
        ParsedSignature with parameters in source order.
    """
    if not sig or not sig.strip():
        return ParsedSignature()

    body = strip_parens(sig)
    if not body.strip():
        return ParsedSignature()

    raw_tokens = split_top_level(body)
    params: List[Parameter] = []

    for index, raw in enumerate(raw_tokens):
        stripped = raw.strip()
        if not stripped and index == len(raw_tokens) - 1:
            # trailing comma
            break
        name = param_name(raw)
        rest = tuple(param_name(t) for t in raw_tokens[index + 1:] if t.strip())

        if name == POSITIONAL_ONLY_MARKER:
            params = [_positional_only(p) for p in params]
            continue
        if stripped in KEYWORD_ONLY_MARKERS or name == VAR_POSITIONAL_PREFIX:
            return ParsedSignature(tuple(params), False, rest)
        if name.startswith(VAR_KEYWORD_PREFIX):
            return ParsedSignature(tuple(params), False, (name,) + rest)
        if name.startswith(VAR_POSITIONAL_PREFIX):
            params.append(Parameter(name[1:], variadic_positional=True))
            return ParsedSignature(tuple(params), True, rest)

        params.append(Parameter(name))

    return ParsedSignature(tuple(params), False, ())


def _positional_only(p: Parameter) -> Parameter:
    return Parameter(
        p.name,
        positional_only=True,
        keyword_only=p.keyword_only,
        variadic_positional=p.variadic_positional,
        variadic_keyword=p.variadic_keyword,
    )


class SignatureParser:
    """Callable wrapper around parse_signature, for injection into emitters."""

    def parse(self, sig: Optional[str]) -> ParsedSignature:
        return parse_signature(sig)

    __call__ = parse


__all__ = ['SignatureParser', 'parse_signature', 'split_top_level', 'strip_parens', 'param_name']
