"""
SimcData - Profile Parser
Parses the text export of the SimulationCraft in-game addon into a
ParsedProfile.

Export structure:
    # SimC Addon 9.0.2-01
    # Name - Balance - 2021-01-18 13:06 - US/Frostmourne
    druid="Name"
    level=60
    race=night_elf
    spec=balance
    head=,id=172323,bonus_id=6716/1487,drop_level=60
    # trinket2=,id=178769,bonus_id=6806   <- bag item, not equipped

Comment lines are parsed like any other line after stripping the leading
'#', so commented-out items and soulbinds are kept (flagged as not
equipped / not active).
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Union

from simc_enums import CLASS_KEYS, RACE_IDS, spec_id_for

logger = logging.getLogger(__name__)


@dataclass
class ParsedLine:
    raw_line: str = ""
    clean_line: str = ""              # comment marker stripped
    identifier: str = ""
    value: str = ""

    @property
    def commented(self) -> bool:
        return self.raw_line.lstrip().startswith("#")


@dataclass
class ParsedItem:
    slot: str = ""
    item_id: int = 0
    enchant_id: int = 0
    gem_ids: List[int] = field(default_factory=list)
    bonus_ids: List[int] = field(default_factory=list)
    context: int = 0
    drop_level: int = 0
    item_level: int = 0
    crafted_stat_ids: List[int] = field(default_factory=list)
    equipped: bool = True


@dataclass
class ParsedConduit:
    conduit_id: int = 0
    rank: int = 0


@dataclass
class ParsedSoulbind:
    name: str = ""
    soulbind_id: int = 0
    soulbind_spells: List[int] = field(default_factory=list)
    socketed_conduits: List[ParsedConduit] = field(default_factory=list)
    is_active: bool = True


@dataclass
class ParsedTalent:
    talent_id: int = 0                # trait node entry id
    rank: int = 0


@dataclass
class ParsedProfession:
    name: str = ""
    level: int = 0


@dataclass
class ParsedProfile:
    simc_addon_version: str = ""
    collection_date: Optional[datetime] = None
    name: str = ""
    player_class: str = ""
    class_id: int = 0
    spec: str = ""
    spec_id: int = 0
    level: int = 0
    race: str = ""
    race_id: int = 0
    region: str = ""
    server: str = ""
    role: str = ""
    covenant: str = ""
    renown: int = 0
    professions: List[ParsedProfession] = field(default_factory=list)
    talents: List[ParsedTalent] = field(default_factory=list)
    soulbinds: List[ParsedSoulbind] = field(default_factory=list)
    conduits: List[ParsedConduit] = field(default_factory=list)
    items: List[ParsedItem] = field(default_factory=list)
    profile_lines: List[ParsedLine] = field(default_factory=list)


# ─── Vocabulary ──────────────────────────────

ITEM_SLOTS = frozenset({
    "head", "neck", "shoulder", "back", "chest", "wrist", "hands", "waist",
    "legs", "feet", "finger1", "finger2", "trinket1", "trinket2",
    "main_hand", "off_hand",
})

ADDON_VERSION_PREFIX = "SimC Addon "
COLLECTION_DATE_FORMAT = "%Y-%m-%d %H:%M"
# "<name> - <spec> - YYYY-MM-DD HH:MM - <region>/<realm>" is at least this long
COLLECTION_LINE_MIN_LENGTH = 38


def _to_int(value: str) -> Optional[int]:
    try:
        return int(value.strip())
    except (ValueError, AttributeError):
        return None


def _id_list(value: str) -> List[int]:
    """'6716/1487//6977' -> [6716, 1487, 6977], skipping junk entries."""
    ids = []
    for part in value.split("/"):
        number = _to_int(part) if part.strip() else None
        if number is not None:
            ids.append(number)
    return ids


def _conduit(part: str) -> Optional[ParsedConduit]:
    pieces = part.split(":")
    if len(pieces) != 2:
        return None
    conduit_id, rank = _to_int(pieces[0]), _to_int(pieces[1])
    if conduit_id is None or rank is None:
        return None
    return ParsedConduit(conduit_id=conduit_id, rank=rank)


class ProfileParser:
    """Line-oriented parser for addon exports."""

    def parse(self, profile: Union[str, List[str]]) -> ParsedProfile:
        """Parse a whole export given as one string or as a list of lines."""
        lines = profile.splitlines() if isinstance(profile, str) else list(profile)
        logger.info(f"ProfileParser: parsing {len(lines)} lines")
        t0 = time.time()

        result = ParsedProfile()
        for raw_line in lines:
            parsed = self._split_line(result, raw_line)
            if parsed is not None:
                result.profile_lines.append(parsed)

        logger.debug(f"ProfileParser: {len(result.profile_lines)} key=value lines")
        for line in result.profile_lines:
            self._apply(result, line)

        # After the loop: the spec line may come before the class line
        result.spec_id = spec_id_for(CLASS_KEYS.get(result.player_class), result.spec)

        logger.info(f"ProfileParser: done in {(time.time() - t0) * 1000:.0f}ms "
                    f"({result.player_class or 'no class'}, {len(result.items)} items)")
        return result

    # ── Line handling ───────────────────────────────────────

    def _split_line(self, result: ParsedProfile, raw_line: str) -> Optional[ParsedLine]:
        if not raw_line or not raw_line.strip():
            return None

        clean = raw_line.strip()
        if clean.startswith("#"):
            clean = clean.strip("#").strip()

        self._try_addon_version(result, clean)
        self._try_collection_date(result, clean)

        if "=" not in clean:
            return None
        identifier, value = clean.split("=", 1)
        return ParsedLine(raw_line=raw_line, clean_line=clean,
                          identifier=identifier.strip(), value=value)

    def _apply(self, result: ParsedProfile, line: ParsedLine):
        key = line.identifier
        value = line.value.strip()

        if key in ITEM_SLOTS:
            result.items.append(self._parse_item(line))
        elif key in CLASS_KEYS:
            result.name = value.strip('"')
            result.player_class = key
            result.class_id = int(CLASS_KEYS[key])
        elif key == "level":
            result.level = _to_int(value) or 0
        elif key == "race":
            result.race = value
            result.race_id = RACE_IDS.get(value.lower(), 0)
        elif key == "region":
            result.region = value
        elif key == "server":
            result.server = value
        elif key == "role":
            result.role = value
        elif key == "spec":
            result.spec = value
        elif key == "covenant":
            result.covenant = value
        elif key == "renown":
            renown = _to_int(value)
            if renown is None:
                logger.warning(f"ProfileParser: invalid renown value {value!r}")
            else:
                result.renown = renown
        elif key == "professions":
            result.professions = self._parse_professions(line)
        elif key == "class_talents":
            result.talents = self._parse_talents(value)
        elif key == "soulbind":
            soulbind = self._parse_soulbind(line)
            if soulbind is not None:
                result.soulbinds.append(soulbind)
        elif key == "conduits_available":
            if result.conduits:
                logger.warning("ProfileParser: overriding conduits_available, "
                               "expected one per profile")
            result.conduits = self._parse_conduits(value)
        else:
            logger.warning(f"ProfileParser: unrecognised identifier {key!r}")

    @staticmethod
    def _try_addon_version(result: ParsedProfile, text: str):
        if len(text) > len(ADDON_VERSION_PREFIX) and text.startswith(ADDON_VERSION_PREFIX):
            result.simc_addon_version = text[len(ADDON_VERSION_PREFIX):]

    @staticmethod
    def _try_collection_date(result: ParsedProfile, text: str):
        if len(text) <= COLLECTION_LINE_MIN_LENGTH:
            return
        parts = text.split(" - ")
        if len(parts) != 4:
            return
        try:
            result.collection_date = datetime.strptime(parts[2].strip(), COLLECTION_DATE_FORMAT)
        except ValueError:
            logger.debug(f"ProfileParser: no collection date in {text!r}")

    # ── Values ──────────────────────────────────────────────

    @staticmethod
    def _parse_item(line: ParsedLine) -> ParsedItem:
        # trinket2=,id=177157,bonus_id=6938/603,drop_level=50
        item = ParsedItem(slot=line.identifier, equipped=not line.commented)
        for part in line.value.split(","):
            pieces = part.strip().split("=")
            if len(pieces) != 2:
                continue
            key, value = pieces
            if key in ("id", "enchant_id", "context", "drop_level", "ilevel"):
                number = _to_int(value)
                if number is None:
                    logger.warning(f"ProfileParser: bad {key} {value!r} in {line.raw_line!r}")
                    continue
                if key == "id":
                    item.item_id = number
                elif key == "enchant_id":
                    item.enchant_id = number
                elif key == "context":
                    item.context = number
                elif key == "drop_level":
                    item.drop_level = number
                else:
                    item.item_level = number
            elif key == "bonus_id":
                item.bonus_ids = _id_list(value)
            elif key == "gem_id":
                item.gem_ids = _id_list(value)
            elif key == "crafted_stats":
                item.crafted_stat_ids = _id_list(value)
        return item

    @staticmethod
    def _parse_professions(line: ParsedLine) -> List[ParsedProfession]:
        # professions=tailoring=1/jewelcrafting=1
        professions = []
        for part in line.value.split("/"):
            if not part.strip():
                continue
            name, _, level = part.partition("=")
            parsed_level = _to_int(level)
            if parsed_level is None:
                logger.warning(f"ProfileParser: bad profession level {part!r}")
                parsed_level = 0
            professions.append(ParsedProfession(name=name.strip(), level=parsed_level))
        return professions

    @staticmethod
    def _parse_talents(value: str) -> List[ParsedTalent]:
        # class_talents=103325:1/103324:2
        talents = []
        for part in value.split("/"):
            pieces = part.split(":")
            talent_id = _to_int(pieces[0]) if len(pieces) == 2 else None
            rank = _to_int(pieces[1]) if len(pieces) == 2 else None
            if talent_id is None or rank is None:
                logger.warning(f"ProfileParser: unable to parse talent {part!r}")
                continue
            talents.append(ParsedTalent(talent_id=talent_id, rank=rank))
        return talents

    @staticmethod
    def _parse_conduits(value: str) -> List[ParsedConduit]:
        # conduits_available=116:1/78:1/82:1
        if ":" not in value:
            logger.debug(f"ProfileParser: no conduits in {value!r}")
            return []
        conduits = []
        for part in value.split("/"):
            conduit = _conduit(part)
            if conduit is None:
                logger.warning(f"ProfileParser: invalid conduit {part!r}")
                continue
            conduits.append(conduit)
        return conduits

    @staticmethod
    def _parse_soulbind(line: ParsedLine) -> Optional[ParsedSoulbind]:
        # soulbind=niya:1,342270/82:1/73:1/320662
        if "," not in line.value:
            logger.debug(f"ProfileParser: no soulbind in {line.clean_line!r}")
            return None

        head, tail = line.value.split(",", 1)
        soulbind = ParsedSoulbind(is_active=not line.commented)
        name, _, soulbind_id = head.strip().partition(":")
        soulbind.name = name
        if soulbind_id:
            soulbind.soulbind_id = _to_int(soulbind_id) or 0
        if not name:
            logger.warning(f"ProfileParser: soulbind without a name: {line.raw_line!r}")

        for part in tail.split(",")[-1].split("/"):
            if ":" in part:
                conduit = _conduit(part)
                if conduit is None:
                    logger.warning(f"ProfileParser: invalid socketed conduit {part!r}")
                    continue
                soulbind.socketed_conduits.append(conduit)
            else:
                spell_id = _to_int(part)
                if spell_id is None:
                    logger.warning(f"ProfileParser: bad soulbind spell {part!r}")
                    continue
                soulbind.soulbind_spells.append(spell_id)
        return soulbind
