"""Small string helpers used when reading scene descriptions."""

from __future__ import annotations

from .errors import SceneError

_INT_MAX = 2**31 - 1

_IDENTIFIERS = (("NO", 2), ("SO", 2), ("WE", 2), ("EA", 2), ("F", 1), ("C", 1))


def special_strncmp(s1: str, s2: str, n: int) -> int:
    """Compare up to ``n`` characters of ``s1`` (leading spaces skipped) with ``s2``.

    Comparison stops early when ``s1`` runs out, in which case the strings
    are considered equal.  Returns -1, 0 or 1.
    """
    if n <= 0:
        return 0
    body = s1.lstrip(" ")
    for a, b in zip(body[:n], s2.ljust(n, "\0")):
        if a > b:
            return 1
        if a < b:
            return -1
    return 0


def is_path_rgb(s: str) -> bool:
    """Tell whether a line starts with a texture or colour identifier."""
    return any(special_strncmp(s, ident, n) == 0 for ident, n in _IDENTIFIERS)


def endswith_ignoring_spaces(s: str, suffix: str) -> bool:
    """Tell whether ``s`` ends with ``suffix`` once trailing spaces are dropped."""
    stripped = s.rstrip(" ")
    if not stripped or len(stripped) < len(suffix):
        return False
    return stripped.endswith(suffix)


def is_str_digit(s: str) -> bool:
    """Tell whether ``s`` is an optional ``+`` followed by digits only.

    A string starting with ``-0`` is accepted as well.
    """
    if s.startswith("-0"):
        return True
    if s.startswith("+"):
        s = s[1:]
    return all("0" <= ch <= "9" for ch in s)


def parse_int(s: str) -> int:
    """Read a non-negative decimal number from the start of ``s``.

    Leading ``+`` signs are skipped and reading stops at the first
    non-digit.  A value starting with ``-0`` reads as zero.
    """
    if s.startswith("-0"):
        return 0
    body = s.lstrip("+")
    result = 0
    for ch in body:
        if not "0" <= ch <= "9":
            break
        result = result * 10 + (ord(ch) - ord("0"))
        if result > _INT_MAX:
            raise SceneError("invalid rgb values")
    return result


def trim_last_spaces(s: str) -> str:
    """Drop trailing spaces."""
    return s.rstrip(" ")


def has_non_space(s: str) -> bool:
    """Tell whether ``s`` holds any character other than a space."""
    return any(ch != " " for ch in s)


def extract_value(s: str, start: int) -> str:
    """Return the value part of an identifier line.

    Leading spaces are skipped, then ``start`` characters of identifier,
    then the spaces after it; trailing spaces are removed from the rest.
    """
    body = s.lstrip(" ")[start:]
    return trim_last_spaces(body.lstrip(" "))


def check_commas(floor: str, ceiling: str) -> None:
    """Require exactly two commas in both the floor and ceiling colours."""
    if floor.count(",") != 2 or ceiling.count(",") != 2:
        raise SceneError("invalid rgb syntax!")


def split_rgb(s: str | None, sep: str) -> list[str] | None:
    """Split a colour value on ``sep`` and spaces, dropping empty pieces.

    Doubled separators and a value not ending in a digit are rejected.
    """
    if s is None:
        return None
    if s and (sep * 2 in s or not is_str_digit(s[-1])):
        raise SceneError("invalid rgb form")
    return [piece for piece in s.replace(sep, " ").split(" ") if piece]


def has_cub_extension(path: str) -> bool:
    """Tell whether a file name ends in ``.cub``."""
    return path.endswith(".cub")