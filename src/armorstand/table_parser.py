"""
Table parser: turn outfit table text into sections of entries.

Grammar, one item per line:

    # comment            (also ; comment)
    --- chestplate ---   section header, the bare word is lower-cased
    1black shirt leather black, m:white,black

An entry line is `<key> <name> <materials>`. Materials split on commas into
options; `<letter>:<v1>,<v2>` fragments become template candidates.

Parsing is total: lines that match nothing are dropped.
"""

import logging
import re
from types import MappingProxyType
from typing import Dict, List, Optional, Tuple

from .catalog import COLOR_MAP, MATERIAL_MAP
from .models import Entry, Sections

logger = logging.getLogger(__name__)

LINE_SPLIT_RE = re.compile(r"\r?\n")
HASH_COMMENT_RE = re.compile(r"#.*")
SEMICOLON_COMMENT_RE = re.compile(r";.*")
HEADER_RE = re.compile(r"^(?:---\s*)?(\w+)(?:\s*---)?$", re.IGNORECASE | re.ASCII)
ENTRY_RE = re.compile(r"^(\S+)\s+(.+)$")
NAME_RE = re.compile(r"^(\S+)\s*(.*)$")
OPTION_SPLIT_RE = re.compile(r"\s*,\s*")
TEMPLATE_RE = re.compile(r"([A-Za-z]):([^\s,;]+(?:,[^\s,;]+)*)")
NON_ALNUM_RE = re.compile(r"[^a-z0-9]")
BOM = "\ufeff"


def _strip_comments(raw: str) -> str:
    line = HASH_COMMENT_RE.sub("", raw, count=1)
    line = SEMICOLON_COMMENT_RE.sub("", line, count=1)
    return line.strip()


def _parse_options(materials_raw: str) -> List[str]:
    if not materials_raw:
        return [""]
    return [s.strip() for s in OPTION_SPLIT_RE.split(materials_raw) if s.strip()]


def _parse_templates(materials_raw: str) -> Dict[str, Tuple[str, ...]]:
    """Collect letter:values fragments; a repeated letter keeps its last values."""
    templates: Dict[str, Tuple[str, ...]] = {}
    for match in TEMPLATE_RE.finditer(materials_raw):
        letter, values = match.group(1), match.group(2)
        templates[letter] = tuple(v.strip() for v in values.split(",") if v.strip())
    return templates


def parse_entry_line(line: str) -> Optional[Entry]:
    """Parse a comment-stripped entry line, or None if it is malformed."""
    line_match = ENTRY_RE.match(line)
    if not line_match:
        return None

    key, rest = line_match.group(1), line_match.group(2)
    rest = rest.strip()
    name_match = NAME_RE.match(rest)
    name = name_match.group(1) if name_match else rest
    materials_raw = name_match.group(2).strip() if name_match else ""

    return Entry(
        key=key,
        name=name,
        raw=line,
        options=tuple(_parse_options(materials_raw)),
        templates=_parse_templates(materials_raw),
    )


def parse_outfit_table(text: str) -> Sections:
    """Parse outfit table text into section name -> ordered entries."""
    sections: Dict[str, List[Entry]] = {}
    current_section: Optional[str] = None
    dropped = 0

    # tolerate a leading byte order mark
    for raw in LINE_SPLIT_RE.split(text.lstrip(BOM)):
        line = _strip_comments(raw)
        if not line:
            continue

        header_match = HEADER_RE.match(line)
        if header_match:
            current_section = header_match.group(1).lower()
            sections[current_section] = []
            continue

        if current_section is None:
            dropped += 1
            continue

        entry = parse_entry_line(line)
        if entry is None:
            dropped += 1
            continue
        sections[current_section].append(entry)

    if dropped:
        logger.debug(f"Dropped {dropped} unparseable table lines")
    logger.debug(
        "Parsed sections: "
        + ", ".join(f"{name}={len(entries)}" for name, entries in sections.items())
    )
    return MappingProxyType({name: tuple(entries) for name, entries in sections.items()})


def detect_token(token: str) -> Dict[str, str]:
    """
    Classify a token as a material or a color keyword.

    Returns {"mat": keyword}, {"color": keyword} or {} - material takes
    precedence when a token could be both.
    """
    normalized = NON_ALNUM_RE.sub("", token.lower())

    if MATERIAL_MAP.get(normalized):
        return {"mat": normalized}

    if normalized in COLOR_MAP:
        return {"color": normalized}

    return {}
