"""Split a user agent string into product sections.

A section is a product token such as ``Mozilla/5.0`` optionally followed by a
parenthesized comment, e.g. ``(X11; Linux x86_64; rv:109.0)``. Bracketed
trailers like ``[FBAN/FBIOS;...]`` are dropped.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Section:
    name: str = ""
    version: str = ""
    comment: tuple[str, ...] = ()


def _read_until(ua: str, index: int, delimiter: str, nested: bool) -> tuple[str, int]:
    """Read from ``index`` up to ``delimiter``.

    With ``nested``, parentheses opened inside the run must be closed before
    the delimiter counts. Returns the text read and the index right after the
    delimiter.
    """
    depth = 0
    i = index
    while i < len(ua):
        char = ua[i]
        if char == delimiter:
            if depth == 0:
                return ua[index:i], i + 1
            depth -= 1
        elif nested and char == "(":
            depth += 1
        i += 1
    return ua[index:], len(ua) + 1


def _parse_product(product: str) -> tuple[str, str]:
    name, _, version = product.partition("/")
    return name, version


def _parse_section(ua: str, index: int) -> tuple[Section, int]:
    name = version = ""
    comment: tuple[str, ...] = ()

    if index < len(ua) and ua[index] not in "([":
        product, index = _read_until(ua, index, " ", nested=False)
        name, version = _parse_product(product)

    if index < len(ua) and ua[index] == "(":
        text, index = _read_until(ua, index + 1, ")", nested=True)
        comment = tuple(text.split("; "))
        # skip the space after ")"
        index += 1

    if index < len(ua) and ua[index] == "[":
        _, index = _read_until(ua, index + 1, "]", nested=True)
        index += 1

    return Section(name, version, comment), index


def parse_sections(ua: str) -> list[Section]:
    """Tokenize ``ua`` into its sections, in order."""
    if not isinstance(ua, str):
        raise TypeError(f"user agent must be a str, not {type(ua).__name__}")

    sections = []
    index = 0
    while index < len(ua):
        section, index = _parse_section(ua, index)
        sections.append(section)
    return sections
