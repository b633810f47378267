"""Naming-convention helpers for generated Dart code.

Every generator derives its type, variable and file identifiers from a single
user-supplied name (``"user_profile"``, ``"UserProfile"``, ``"user profile"``
all mean the same component).  The helpers here split such a name into
lower-case words and re-join them in the requested convention.

All functions are total: the empty string maps to the empty string, and
re-applying a transform to its own output returns the output unchanged.
"""

from __future__ import annotations

import re
from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Word splitting
# ---------------------------------------------------------------------------

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")
_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_WORD = re.compile(r"([A-Z]+)([A-Z][a-z])")
_PASCAL_IDENTIFIER = re.compile(r"[A-Z][A-Za-z0-9]*")
_CAMEL_IDENTIFIER = re.compile(r"[a-z][A-Za-z0-9]*")


def split_words(value: str) -> list[str]:
    """Split *value* into lower-case words.

    Separators are any non-alphanumeric characters plus the case boundaries
    ``fooBar`` and ``HTTPClient``.

    Examples::

        split_words("user_profile")  -> ["user", "profile"]
        split_words("HTTPClient")    -> ["http", "client"]
        split_words("  Order-Item ") -> ["order", "item"]
    """
    spaced = _NON_ALNUM.sub(" ", value)
    spaced = _ACRONYM_WORD.sub(r"\1 \2", spaced)
    spaced = _LOWER_UPPER.sub(r"\1 \2", spaced)
    return [word.lower() for word in spaced.split()]


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


# ---------------------------------------------------------------------------
# Case transforms
# ---------------------------------------------------------------------------


def to_pascal_case(value: str) -> str:
    """``user_profile`` -> ``UserProfile``.

    A value that is already a PascalCase identifier is returned as is, so
    runs of capitals such as ``XY`` (from ``x_y``) survive a second pass.
    """
    if _PASCAL_IDENTIFIER.fullmatch(value):
        return value
    return "".join(_capitalize(word) for word in split_words(value))


def to_camel_case(value: str) -> str:
    """``user_profile`` -> ``userProfile``; camelCase input is kept as is."""
    if _CAMEL_IDENTIFIER.fullmatch(value):
        return value
    words = split_words(value)
    if not words:
        return ""
    return words[0] + "".join(_capitalize(word) for word in words[1:])


def to_snake_case(value: str) -> str:
    """``UserProfile`` -> ``user_profile``."""
    return "_".join(split_words(value))


def to_kebab_case(value: str) -> str:
    """``UserProfile`` -> ``user-profile``."""
    return "-".join(split_words(value))


def to_constant_case(value: str) -> str:
    """``userProfile`` -> ``USER_PROFILE``."""
    return "_".join(word.upper() for word in split_words(value))


def to_title_case(value: str) -> str:
    """``user_profile`` -> ``User Profile``."""
    return " ".join(_capitalize(word) for word in split_words(value))


def to_sentence_case(value: str) -> str:
    """``user_profile`` -> ``User profile``."""
    return _capitalize(" ".join(split_words(value)))


def to_dot_case(value: str) -> str:
    """``UserProfile`` -> ``user.profile``."""
    return ".".join(split_words(value))


def to_path_case(value: str) -> str:
    """``UserProfile`` -> ``user/profile``."""
    return "/".join(split_words(value))


# ---------------------------------------------------------------------------
# Pluralisation
# ---------------------------------------------------------------------------

IRREGULAR_PLURALS: dict[str, str] = {
    "child": "children",
    "person": "people",
    "man": "men",
    "woman": "women",
    "tooth": "teeth",
    "foot": "feet",
    "mouse": "mice",
    "goose": "geese",
}

_VOWELS = frozenset("aeiou")
_SIBILANT_SUFFIXES = ("s", "x", "z", "ch", "sh")


def pluralize(word: str) -> str:
    """Return a heuristic English plural of *word*.

    Irregular nouns are looked up first (the case of the first letter is
    kept), then the suffix rules apply in order: consonant + ``y`` ->
    ``ies``, sibilants -> ``+es``, ``f`` -> ``ves``, ``fe`` -> ``ves``,
    otherwise ``+s``.

    Words that are already plural are not detected, so ``pluralize("boxes")``
    gives ``"boxeses"``.
    """
    if not word:
        return ""

    irregular = IRREGULAR_PLURALS.get(word.lower())
    if irregular is not None:
        if word[0].isupper():
            return _capitalize(irregular)
        return irregular

    lower = word.lower()
    if lower.endswith("y") and len(lower) > 1 and lower[-2] not in _VOWELS:
        return word[:-1] + "ies"
    if lower.endswith(_SIBILANT_SUFFIXES):
        return word + "es"
    if lower.endswith("f"):
        return word[:-1] + "ves"
    if lower.endswith("fe"):
        return word[:-2] + "ves"
    return word + "s"


# ---------------------------------------------------------------------------
# Component names
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ComponentNames:
    """All naming variants of one component, derived from a raw name."""

    raw: str
    snake: str
    pascal: str
    camel: str
    kebab: str
    constant: str
    title: str
    plural_camel: str
    plural_pascal: str
    plural_snake: str

    @classmethod
    def from_name(cls, name: str) -> "ComponentNames":
        camel = to_camel_case(name)
        plural_camel = pluralize(camel)
        return cls(
            raw=name,
            snake=to_snake_case(name),
            pascal=to_pascal_case(name),
            camel=camel,
            kebab=to_kebab_case(name),
            constant=to_constant_case(name),
            title=to_title_case(name),
            plural_camel=plural_camel,
            plural_pascal=to_pascal_case(plural_camel),
            plural_snake=to_snake_case(plural_camel),
        )
