"""Key conversion policies applied to raw CSS module token names."""

from __future__ import annotations

import re
from enum import Enum
from typing import Callable, Optional, Union

KeyConverter = Callable[[str], str]

_DASH_RUN = re.compile(r"-+(\w)", re.ASCII)
_LEADING_SEPARATORS = re.compile(r"^[_.\- ]+")
_SEPARATOR_RUN = re.compile(r"[_.\- ]+(\w|$)", re.ASCII)
_DIGIT_RUN = re.compile(r"\d+(\w|$)", re.ASCII)
_LOWER_ALNUM = re.compile(r"^[a-z\d]+$")


class CasingPolicy(str, Enum):
    """Closed set of casing transforms a run can be configured with."""

    IDENTITY = "identity"
    CAMEL_CASE = "camelCase"
    DASHES = "dashes"

    @classmethod
    def from_option(cls, value: Union[str, bool, None]) -> "CasingPolicy":
        """Map a CLI/config value onto a policy.

        ``True`` (or ``"true"``) means full camel-casing, ``"dashes"`` the
        dash-only variant, and anything falsy the identity transform.
        """
        if value is None or value is False:
            return cls.IDENTITY
        if value is True:
            return cls.CAMEL_CASE
        normalized = str(value).strip().lower()
        if normalized in {"", "false", "no", "0", "none", "identity"}:
            return cls.IDENTITY
        if normalized in {"true", "yes", "1", "camelcase", "camel"}:
            return cls.CAMEL_CASE
        if normalized in {"dashes", "dashesonly", "dashes-only"}:
            return cls.DASHES
        raise ValueError(f"Unknown casing policy: {value!r}")


def identity(key: str) -> str:
    return key


def dashes_camel_case(key: str) -> str:
    """Upper-case the character following each run of dashes and drop the dashes.

    Underscores, digits and existing case are left as they are, matching the
    export naming of webpack's css-loader with ``camelCase: 'dashes'``.
    """
    return _DASH_RUN.sub(lambda match: match.group(1).upper(), key)


def camel_case(key: str) -> str:
    """Generic word-boundary camel-casing (``foo-bar``, ``Foo_Bar`` -> ``fooBar``)."""
    text = key.strip()
    if not text:
        return ""
    if len(text) == 1:
        return text.lower()
    if _LOWER_ALNUM.match(text):
        return text

    if text != text.lower():
        text = _preserve_camel_case(text)

    text = _LEADING_SEPARATORS.sub("", text).lower()
    text = _SEPARATOR_RUN.sub(lambda match: match.group(1).upper(), text)
    return _DIGIT_RUN.sub(lambda match: match.group(0).upper(), text)


def _preserve_camel_case(text: str) -> str:
    # Insert a dash at every lower->upper transition and before the last
    # capital of an acronym run ("XMLHttp" -> "XML-Http").
    chars = list(text)
    last_lower = last_upper = last_last_upper = False
    index = 0
    while index < len(chars):
        char = chars[index]
        is_letter = char.isascii() and char.isalpha()
        if last_lower and is_letter and char.isupper():
            chars.insert(index, "-")
            last_lower = False
            last_last_upper = last_upper
            last_upper = True
            index += 1
        elif last_upper and last_last_upper and is_letter and char.islower():
            chars.insert(index - 1, "-")
            last_last_upper = last_upper
            last_upper = False
            last_lower = True
        else:
            last_lower = char.lower() == char and char.upper() != char
            last_last_upper = last_upper
            last_upper = char.upper() == char and char.lower() != char
        index += 1
    return "".join(chars)


_CONVERTERS: dict[CasingPolicy, KeyConverter] = {
    CasingPolicy.IDENTITY: identity,
    CasingPolicy.CAMEL_CASE: camel_case,
    CasingPolicy.DASHES: dashes_camel_case,
}


def converter_for(policy: Optional[CasingPolicy]) -> KeyConverter:
    """Resolve a policy to its converter once, ahead of per-token work."""
    return _CONVERTERS[policy or CasingPolicy.IDENTITY]


def convert(key: str, policy: Optional[CasingPolicy]) -> str:
    return converter_for(policy)(key)


__all__ = [
    "CasingPolicy",
    "KeyConverter",
    "camel_case",
    "convert",
    "converter_for",
    "dashes_camel_case",
    "identity",
]
