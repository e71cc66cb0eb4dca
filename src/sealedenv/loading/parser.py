"""
Dotenv entry parser.

Turns configuration text into an ordered list of `Entry` objects:

```text
# comment
export APP_ENV=production
DB_HOST=localhost            # inline comment
DB_URL="mysql://${DB_HOST}"  # double quotes: escapes and ${VAR} interpolation
LITERAL='${NOT_EXPANDED}'    # single quotes: taken as-is
UNSET                        # no '=': the variable is cleared on commit
```

Interpolation looks at earlier entries of the same text first, then at the
optional `lookup` callable (usually the repository). Unknown references are
left untouched.
"""

import logging
import re
from collections.abc import Callable

from ..exceptions import InvalidFile
from ..pipeline.entries import Entry

logger = logging.getLogger(__name__)

_NAME_PATTERN = re.compile(r"[^\s=\"'#$\\{}]+")
_REFERENCE_PATTERN = re.compile(r"\$\{([^{}$\s]+)\}")
_INLINE_COMMENT = re.compile(r"(?:^|\s+)#")
_ESCAPES = {
    "\\": "\\",
    '"': '"',
    "$": "$",
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "f": "\f",
    "v": "\v",
}
_MAX_INTERPOLATION_PASSES = 8

# A value is a list of (text, interpolate) chunks
Chunk = tuple[str, bool]
Lookup = Callable[[str], str | None]


def parse_entries(text: str, lookup: Lookup | None = None) -> list[Entry]:
    """Parse dotenv text into entries.

    Args:
        text: Configuration text
        lookup: Optional fallback for ``${VAR}`` references not defined earlier in the text

    Returns:
        Entries in declaration order

    Raises:
        InvalidFile: If a line cannot be parsed
    """
    entries: list[Entry] = []
    known: dict[str, str] = {}
    for lineno, line in enumerate(text.splitlines(), start=1):
        parsed = _parse_line(line, lineno)
        if parsed is None:
            continue
        name, chunks = parsed
        if chunks is None:
            known.pop(name, None)
            entries.append(Entry(name, None))
            continue
        value = _interpolate(chunks, known, lookup)
        known[name] = value
        entries.append(Entry(name, value))

    logger.debug(f"Parsed {len(entries)} entries")
    return entries


def _parse_line(line: str, lineno: int) -> tuple[str, list[Chunk] | None] | None:
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None
    if stripped.startswith(("export ", "export\t")):
        stripped = stripped[len("export") :].lstrip()

    if "=" not in stripped:
        return _check_name(stripped, lineno), None

    name, raw = stripped.split("=", 1)
    name = _check_name(name.strip(), lineno)
    return name, _parse_value(raw.strip(), name, lineno)


def _check_name(name: str, lineno: int) -> str:
    if not _NAME_PATTERN.fullmatch(name):
        raise InvalidFile(f"Failed to parse dotenv file. Invalid variable name at line {lineno}")
    return name


def _check_trailing(rest: str, name: str, lineno: int) -> None:
    rest = rest.strip()
    if rest and not rest.startswith("#"):
        raise InvalidFile(
            f"Failed to parse dotenv file. Unexpected characters after the quoted value "
            f"of {name} at line {lineno}"
        )


def _parse_value(raw: str, name: str, lineno: int) -> list[Chunk]:
    if not raw:
        return [("", False)]

    if raw[0] == "'":
        end = raw.find("'", 1)
        if end == -1:
            raise InvalidFile(
                f"Failed to parse dotenv file. Missing closing quote for {name} at line {lineno}"
            )
        _check_trailing(raw[end + 1 :], name, lineno)
        return [(raw[1:end], False)]

    if raw[0] == '"':
        return _parse_double_quoted(raw, name, lineno)

    value = _INLINE_COMMENT.split(raw, maxsplit=1)[0].rstrip()
    if any(char.isspace() for char in value):
        raise InvalidFile(
            f"Failed to parse dotenv file. Unexpected whitespace in the value of {name} at line {lineno}"
        )
    return [(value, True)]


def _parse_double_quoted(raw: str, name: str, lineno: int) -> list[Chunk]:
    chunks: list[Chunk] = []
    buffer: list[str] = []

    def flush() -> None:
        if buffer:
            chunks.append(("".join(buffer), True))
            buffer.clear()

    i = 1
    while i < len(raw):
        char = raw[i]
        if char == "\\" and i + 1 < len(raw) and raw[i + 1] in _ESCAPES:
            flush()
            # Escaped characters never take part in interpolation
            chunks.append((_ESCAPES[raw[i + 1]], False))
            i += 2
            continue
        if char == '"':
            flush()
            _check_trailing(raw[i + 1 :], name, lineno)
            return chunks or [("", False)]
        buffer.append(char)
        i += 1

    raise InvalidFile(
        f"Failed to parse dotenv file. Missing closing quote for {name} at line {lineno}"
    )


def _interpolate(chunks: list[Chunk], known: dict[str, str], lookup: Lookup | None) -> str:
    def replace(match: re.Match[str]) -> str:
        reference = match.group(1)
        if reference in known:
            return known[reference]
        if lookup is not None:
            value = lookup(reference)
            if value is not None:
                return value
        return match.group(0)

    parts = []
    for text, interpolate in chunks:
        if interpolate:
            # Nested references such as ${${NAME}} resolve inside-out
            for _ in range(_MAX_INTERPOLATION_PASSES):
                expanded = _REFERENCE_PATTERN.sub(replace, text)
                if expanded == text:
                    break
                text = expanded
        parts.append(text)
    return "".join(parts)
