"""
SimcData - Row Classifier
Classifies single lines of a generated data dump and extracts clean fields.

Dump rows are C initializer literals such as:

    { "Brimming Ember Shard", 175733, 0x00081000, ..., &__item_stats_data[12], 1, ... },
    {   7,  5259, 0.000000 },

A line is split on commas and braces/whitespace are stripped from every
field. Rows carrying a quoted string are split into a name (first to last
quote) and a data segment (everything after the last quote). The data
segment always starts with an empty field because it begins with the comma
that follows the closing quote.

Field parsers raise ValueError; the decoder turns that into MalformedRow
with the offending line attached.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

STATS_POINTER_PREFIX = "&__item_stats_data["
SPELL_DATA_PLACEHOLDER = "&__spell_data"

# Data field counts that identify spell table rows (incl. the trailing
# empty field after the row's last comma)
SPELL_EFFECT_FIELDS = 35
SPELL_POWER_FIELDS = 11
SPELL_HEADER_MIN_FIELDS = 20

# Item header data segment: blank, id .. artifact id
ITEM_HEADER_MIN_FIELDS = 29
ITEM_MOD_MIN_FIELDS = 4


class RowKind(Enum):
    SKIP = "skip"
    MOD = "mod"                       # unnamed row, shape checked by caller
    ITEM_HEADER = "item_header"
    SPELL_HEADER = "spell_header"
    SPELL_EFFECT = "spell_effect"
    SPELL_POWER = "spell_power"
    NAMED = "named"                   # numeric prefix + trailing name


@dataclass
class ClassifiedRow:
    kind: RowKind
    fields: List[str] = field(default_factory=list)
    name: str = ""
    line: str = ""


SKIP_ROW = ClassifiedRow(RowKind.SKIP)


# ─── Splitting ───────────────────────────────

def clean_fields(segment: str) -> List[str]:
    """Split on commas and strip braces and whitespace from each field."""
    return [f.replace("{", "").replace("}", "").strip() for f in segment.split(",")]


def split_named(line: str) -> Tuple[str, List[str]]:
    """Split a quoted row into (name, data fields).

    The name runs from just after the first quote to just before the last
    one, so embedded quotes survive. Data fields follow the last quote.
    """
    last = line.rfind('"')
    name_segment = line[:last]
    name = name_segment[name_segment.find('"') + 1:]
    return name, clean_fields(line[last + 1:])


def iter_lines(text: Optional[str]):
    """Yield the lines of a dump, tolerating any newline convention."""
    if not text:
        return
    yield from text.splitlines()


# ─── Classification ──────────────────────────

def classify_item_line(line: str) -> ClassifiedRow:
    """Item dump rows: unnamed rows are stat mods, named rows are items."""
    if '"' not in line:
        fields = clean_fields(line)
        if len(fields) < ITEM_MOD_MIN_FIELDS:
            return SKIP_ROW
        return ClassifiedRow(RowKind.MOD, fields, line=line)

    name, data = split_named(line)
    if len(data) < ITEM_HEADER_MIN_FIELDS:
        return SKIP_ROW
    return ClassifiedRow(RowKind.ITEM_HEADER, data, name=name, line=line)


def classify_spell_line(line: str) -> ClassifiedRow:
    """Spell dump rows are told apart by their field count."""
    if '"' not in line:
        fields = clean_fields(line)
        if len(fields) == SPELL_EFFECT_FIELDS:
            return ClassifiedRow(RowKind.SPELL_EFFECT, fields, line=line)
        if len(fields) == SPELL_POWER_FIELDS and SPELL_DATA_PLACEHOLDER not in fields[0]:
            return ClassifiedRow(RowKind.SPELL_POWER, fields, line=line)
        return SKIP_ROW

    name, data = split_named(line)
    if len(data) >= SPELL_HEADER_MIN_FIELDS:
        return ClassifiedRow(RowKind.SPELL_HEADER, data, name=name, line=line)
    return SKIP_ROW


def classify_simple(line: str, min_fields: Optional[int] = None,
                    exact_fields: Optional[int] = None) -> ClassifiedRow:
    """Rows of the single-entity tables, accepted on field count alone."""
    fields = clean_fields(line)
    if exact_fields is not None and len(fields) != exact_fields:
        return SKIP_ROW
    if min_fields is not None and len(fields) < min_fields:
        return SKIP_ROW
    return ClassifiedRow(RowKind.MOD, fields, line=line)


def classify_named_tail(line: str, numeric_fields: int) -> ClassifiedRow:
    """Rows with `numeric_fields` leading numbers and a trailing quoted name."""
    first = line.find('"')
    if first < 0:
        return SKIP_ROW
    fields = [f for f in clean_fields(line[:first]) if f != ""]
    if len(fields) < numeric_fields:
        return SKIP_ROW
    last = line.rfind('"')
    name = line[first + 1:last] if last > first else ""
    return ClassifiedRow(RowKind.NAMED, fields[:numeric_fields], name=name, line=line)


# ─── Field parsers ───────────────────────────

def parse_int(value: str) -> int:
    value = value.strip()
    if value.lower().startswith(("0x", "-0x")):
        return int(value, 16)
    return int(value)


def parse_hex(value: str) -> int:
    """Parse a hex mask; the `0x` prefix is optional."""
    value = value.strip()
    if value.lower().startswith("0x"):
        value = value[2:]
    return int(value, 16) if value else 0


def parse_float(value: str) -> float:
    """Parse a float literal, dropping a C `f` suffix."""
    value = value.strip()
    if value[-1:] in ("f", "F") and not value.lower().startswith("0x"):
        value = value[:-1]
    return float(value)


def parse_stats_pointer(value: str) -> int:
    """`0` means no stats; `&__item_stats_data[N]` means offset N."""
    value = value.strip()
    if value == "0":
        return 0
    if value.startswith(STATS_POINTER_PREFIX):
        return int(value[len(STATS_POINTER_PREFIX):].rstrip("]"))
    raise ValueError(f"bad stats pointer {value!r}")


def unquote(value: str) -> str:
    return value.strip().strip('"')
