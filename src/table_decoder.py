"""
SimcData - Raw Table Decoder
Turns the text of generated client data dumps into typed tables.

One builder per table. Builders read their input from a dict of raw file
contents keyed by local file name ("ItemData.raw", "SpellData.raw", ...),
so a table that needs two dumps (items + item effects) gets both.

Usage:
    decoder = RawTableDecoder()
    items = decoder.decode(SimcFileType.ITEM_DATA_NEW, {
        "ItemData.raw": item_text,
        "ItemEffect.raw": effect_text,
    })
"""

import logging
import re
import time
from enum import Enum
from typing import Callable, Dict, List, Optional

import numpy as np

from config import (
    MAX_ITEM_LEVEL,
    MULTIPLIER_TABLE_ROWS,
    SPELL_SCALING_ROWS,
    SPELL_SCALING_LEVELS,
    ITEM_DATA_NEW_MIN_ID,
    ITEM_DATA_OLD_MAX_ID,
)
from errors import MalformedRow, UnsupportedFileType
from raw_data import (
    RawCurvePoint,
    RawGemProperty,
    RawItem,
    RawItemBonus,
    RawItemEffect,
    RawItemEnchantment,
    RawItemMod,
    RawItemSubEnchantment,
    RawRandomPropData,
    RawRppmEntry,
    RawSpell,
    RawSpellConduitRankEntry,
    RawSpellEffect,
    RawSpellPower,
    RawTrait,
)
from row_classifier import (
    RowKind,
    classify_item_line,
    classify_named_tail,
    classify_simple,
    classify_spell_line,
    iter_lines,
    parse_float,
    parse_hex,
    parse_int,
    parse_stats_pointer,
    unquote,
)

logger = logging.getLogger(__name__)


class SimcFileType(Enum):
    ITEM_DATA_NEW = "ItemDataNew"
    ITEM_DATA_OLD = "ItemDataOld"
    SPELL_DATA = "SpellData"
    ITEM_BONUS_DATA = "ItemBonusData"
    ITEM_ENCHANT_DATA = "ItemEnchantData"
    GEM_DATA = "GemData"
    CURVE_POINTS = "CurvePoints"
    RPPM_DATA = "RppmData"
    CONDUIT_RANK_DATA = "ConduitRankData"
    TRAIT_DATA = "TraitData"
    RANDOM_PROP_POINTS = "RandomPropPoints"
    COMBAT_RATING_MULTIPLIERS = "CombatRatingMultipliers"
    STAMINA_MULTIPLIERS = "StaminaMultipliers"
    SPELL_SCALE_MULTIPLIERS = "SpellScaleMultipliers"
    GAME_DATA_VERSION = "GameDataVersion"


# ─── Raw file keys ───────────────────────────
ITEM_DATA_KEY = "ItemData.raw"
ITEM_EFFECT_KEY = "ItemEffect.raw"
SPELL_DATA_KEY = "SpellData.raw"
SCALE_DATA_KEY = "ScaleData.raw"
SPELL_SCALE_DATA_KEY = "SpellScaleData.raw"
RANDOM_PROP_KEY = "RandomPropPoints.raw"
ITEM_BONUS_KEY = "ItemBonusData.raw"
GEM_DATA_KEY = "GemData.raw"
ITEM_ENCHANT_KEY = "ItemEnchantData.raw"
CURVE_DATA_KEY = "CurveData.raw"
RPPM_DATA_KEY = "RppmData.raw"
CONDUIT_DATA_KEY = "ConduitData.raw"
TRAIT_DATA_KEY = "TraitData.raw"
VERSION_DATA_KEY = "VersionData.raw"

# ─── Markers and patterns ────────────────────
_MULTIPLIER_TEMPLATE = (
    r"{name}.+?\{{.+?(\{{.+?\}}),.+?(\{{.+?\}}),.+?(\{{.+?\}}),.+?(\{{.+?\}}).+?\}};"
)
COMBAT_RATING_PATTERN = re.compile(
    _MULTIPLIER_TEMPLATE.format(name="__combat_ratings_mult_by_ilvl"), re.DOTALL)
STAMINA_PATTERN = re.compile(
    _MULTIPLIER_TEMPLATE.format(name="__stamina_mult_by_ilvl"), re.DOTALL)
MULTIPLIER_VALUE_PATTERN = re.compile(r"\s+([01]\.?\d*),")

SPELL_SCALING_MARKER = f"__spell_scaling[][{SPELL_SCALING_LEVELS}] = {{"
SPELL_SCALING_ROW_PATTERN = re.compile(r"\{.+?\},", re.DOTALL)
SPELL_SCALING_VALUE_PATTERN = re.compile(r"(\d+(?:\.\d+)?),")

CONDUIT_RANK_MARKER = "__conduit_rank_data {"
TRAIT_DATA_MARKER = "__trait_data_data { {"
VERSION_PATTERN = re.compile(r'CLIENT_DATA_WOW_VERSION[^"\n]*"([^"]*)"')

# Field counts per simple table (incl. trailing empty field)
ITEM_EFFECT_MIN_FIELDS = 9
ITEM_BONUS_MIN_FIELDS = 9
GEM_MIN_FIELDS = 4
ENCHANT_MIN_FIELDS = 20
RANDOM_PROP_MIN_FIELDS = 10
CURVE_POINT_FIELDS = 7
RPPM_FIELDS = 5
CONDUIT_RANK_FIELDS = 5
TRAIT_NUMERIC_FIELDS = 22


def _at(fields: List[str], index: int, default: str = "0") -> str:
    """Field by index, `default` when the row is shorter."""
    if index < len(fields) and fields[index] != "":
        return fields[index]
    return default


def _slice_after(text: str, marker: str) -> str:
    """Text between `marker` and the next `};`, empty when absent."""
    start = text.find(marker)
    if start < 0:
        return ""
    start += len(marker)
    end = text.find("};", start)
    return text[start:end] if end >= 0 else text[start:]


class RawTableDecoder:
    """Decodes raw dump text into typed tables, one builder per file type."""

    def __init__(self):
        self._builders: Dict[SimcFileType, Callable[[Dict[str, str]], object]] = {
            SimcFileType.ITEM_DATA_NEW: lambda raw: self.build_items(
                raw, min_id=ITEM_DATA_NEW_MIN_ID),
            SimcFileType.ITEM_DATA_OLD: lambda raw: self.build_items(
                raw, min_id=0, max_id=ITEM_DATA_OLD_MAX_ID),
            SimcFileType.SPELL_DATA: self.build_spells,
            SimcFileType.ITEM_BONUS_DATA: self.build_item_bonuses,
            SimcFileType.ITEM_ENCHANT_DATA: self.build_item_enchantments,
            SimcFileType.GEM_DATA: self.build_gem_properties,
            SimcFileType.CURVE_POINTS: self.build_curve_points,
            SimcFileType.RPPM_DATA: self.build_rppm_entries,
            SimcFileType.CONDUIT_RANK_DATA: self.build_conduit_ranks,
            SimcFileType.TRAIT_DATA: self.build_traits,
            SimcFileType.RANDOM_PROP_POINTS: self.build_random_props,
            SimcFileType.COMBAT_RATING_MULTIPLIERS: self.build_combat_rating_multipliers,
            SimcFileType.STAMINA_MULTIPLIERS: self.build_stamina_multipliers,
            SimcFileType.SPELL_SCALE_MULTIPLIERS: self.build_spell_scaling,
            SimcFileType.GAME_DATA_VERSION: self.build_version,
        }

    def decode(self, file_type: SimcFileType, raw_data: Dict[str, str]):
        """Decode the raw files for one table.

        Raises:
            UnsupportedFileType: no builder exists for `file_type`.
            MalformedRow: an item or spell header row could not be parsed.
        """
        builder = self._builders.get(file_type)
        if builder is None:
            raise UnsupportedFileType(file_type)

        t0 = time.time()
        result = builder(raw_data)
        size = len(result) if isinstance(result, list) else getattr(result, "shape", "")
        logger.debug(f"RawTableDecoder: {file_type.value} decoded "
                     f"({size}) in {(time.time() - t0) * 1000:.0f}ms")
        return result

    # ── Row plumbing ────────────────────────────────────────

    @staticmethod
    def _parse(row, entity: str, parse: Callable):
        try:
            return parse(row.fields)
        except (ValueError, IndexError) as e:
            raise MalformedRow(row.line, entity, str(e)) from e

    def _simple_rows(self, text: Optional[str], entity: str, parse: Callable,
                     min_fields: Optional[int] = None,
                     exact_fields: Optional[int] = None) -> list:
        """Decode a one-entity-per-row table, dropping rows that fail to parse."""
        results = []
        for line in iter_lines(text):
            row = classify_simple(line, min_fields=min_fields, exact_fields=exact_fields)
            if row.kind is RowKind.SKIP:
                continue
            try:
                results.append(self._parse(row, entity, parse))
            except MalformedRow as e:
                logger.warning(f"RawTableDecoder: dropped {e}")
        return results

    # ── Items ───────────────────────────────────────────────

    def build_items(self, raw_data: Dict[str, str], min_id: int = 0,
                    max_id: Optional[int] = None) -> List[RawItem]:
        """Items with ids in [min_id, max_id], with their mods and effects.

        First pass collects every unnamed (stat mod) row in file order, so
        the `&__item_stats_data[N]` offsets of the named rows resolve no
        matter where the stats block sits in the dump.
        """
        effects_by_item: Dict[int, List[RawItemEffect]] = {}
        for effect in self.build_item_effects(raw_data.get(ITEM_EFFECT_KEY)):
            effects_by_item.setdefault(effect.item_id, []).append(effect)

        lines = list(iter_lines(raw_data.get(ITEM_DATA_KEY)))
        mods: List[RawItemMod] = []
        headers = []
        for line in lines:
            row = classify_item_line(line)
            if row.kind is RowKind.MOD:
                mods.append(self._parse(row, "item mod", _item_mod_from_fields))
            elif row.kind is RowKind.ITEM_HEADER:
                headers.append(row)

        items = []
        for row in headers:
            item_id = self._parse(row, "item", lambda f: parse_int(f[1]))
            if item_id < min_id or (max_id is not None and item_id > max_id):
                continue
            item = self._parse(row, "item", _item_from_fields)
            item.name = row.name
            if item.dbc_stats_count > 0:
                end = item.dbc_stats + item.dbc_stats_count
                if end > len(mods):
                    raise MalformedRow(row.line, "item",
                                       f"stats [{item.dbc_stats}:{end}] past {len(mods)} mods")
                item.item_mods = list(mods[item.dbc_stats:end])
            item.item_effects = list(effects_by_item.get(item.id, []))
            items.append(item)
        return items

    def build_item_effects(self, text: Optional[str]) -> List[RawItemEffect]:
        return self._simple_rows(text, "item effect", _item_effect_from_fields,
                                 min_fields=ITEM_EFFECT_MIN_FIELDS)

    def build_item_bonuses(self, raw_data: Dict[str, str]) -> List[RawItemBonus]:
        return self._simple_rows(raw_data.get(ITEM_BONUS_KEY), "item bonus",
                                 _item_bonus_from_fields, min_fields=ITEM_BONUS_MIN_FIELDS)

    def build_gem_properties(self, raw_data: Dict[str, str]) -> List[RawGemProperty]:
        return self._simple_rows(raw_data.get(GEM_DATA_KEY), "gem property",
                                 _gem_from_fields, min_fields=GEM_MIN_FIELDS)

    def build_item_enchantments(self, raw_data: Dict[str, str]) -> List[RawItemEnchantment]:
        return self._simple_rows(raw_data.get(ITEM_ENCHANT_KEY), "item enchantment",
                                 _enchant_from_fields, min_fields=ENCHANT_MIN_FIELDS)

    def build_random_props(self, raw_data: Dict[str, str]) -> List[RawRandomPropData]:
        return self._simple_rows(raw_data.get(RANDOM_PROP_KEY), "random property",
                                 _random_prop_from_fields, min_fields=RANDOM_PROP_MIN_FIELDS)

    def build_curve_points(self, raw_data: Dict[str, str]) -> List[RawCurvePoint]:
        return self._simple_rows(raw_data.get(CURVE_DATA_KEY), "curve point",
                                 _curve_point_from_fields, exact_fields=CURVE_POINT_FIELDS)

    # ── Spells ──────────────────────────────────────────────

    def build_spells(self, raw_data: Dict[str, str]) -> List[RawSpell]:
        """Spells with their effects and power costs joined by spell id."""
        spells: List[RawSpell] = []
        effects: Dict[int, List[RawSpellEffect]] = {}
        powers: Dict[int, List[RawSpellPower]] = {}

        for line in iter_lines(raw_data.get(SPELL_DATA_KEY)):
            row = classify_spell_line(line)
            if row.kind is RowKind.SKIP:
                continue
            if row.kind is RowKind.SPELL_HEADER:
                spell = self._parse(row, "spell", _spell_from_fields)
                spell.name = row.name
                spells.append(spell)
                continue
            try:
                if row.kind is RowKind.SPELL_EFFECT:
                    effect = self._parse(row, "spell effect", _spell_effect_from_fields)
                    effects.setdefault(effect.spell_id, []).append(effect)
                elif row.kind is RowKind.SPELL_POWER:
                    power = self._parse(row, "spell power", _spell_power_from_fields)
                    powers.setdefault(power.spell_id, []).append(power)
            except MalformedRow as e:
                logger.warning(f"RawTableDecoder: dropped {e}")

        for spell in spells:
            spell.effects = list(effects.get(spell.id, []))
            spell.spell_powers = list(powers.get(spell.id, []))
        return spells

    def build_rppm_entries(self, raw_data: Dict[str, str]) -> List[RawRppmEntry]:
        return self._simple_rows(raw_data.get(RPPM_DATA_KEY), "rppm",
                                 _rppm_from_fields, exact_fields=RPPM_FIELDS)

    def build_conduit_ranks(self, raw_data: Dict[str, str]) -> List[RawSpellConduitRankEntry]:
        chunk = _slice_after(raw_data.get(CONDUIT_DATA_KEY) or "", CONDUIT_RANK_MARKER)
        return self._simple_rows(chunk, "conduit rank", _conduit_rank_from_fields,
                                 exact_fields=CONDUIT_RANK_FIELDS)

    # ── Talents ─────────────────────────────────────────────

    def build_traits(self, raw_data: Dict[str, str]) -> List[RawTrait]:
        chunk = _slice_after(raw_data.get(TRAIT_DATA_KEY) or "", TRAIT_DATA_MARKER)
        traits = []
        for line in iter_lines(chunk):
            row = classify_named_tail(line, TRAIT_NUMERIC_FIELDS)
            if row.kind is RowKind.SKIP:
                continue
            try:
                trait = self._parse(row, "trait", _trait_from_fields)
            except MalformedRow as e:
                logger.warning(f"RawTableDecoder: dropped {e}")
                continue
            trait.name = row.name
            traits.append(trait)
        return traits

    # ── Matrices ────────────────────────────────────────────

    def build_combat_rating_multipliers(self, raw_data: Dict[str, str]) -> np.ndarray:
        return self._multiplier_matrix(raw_data.get(SCALE_DATA_KEY), COMBAT_RATING_PATTERN)

    def build_stamina_multipliers(self, raw_data: Dict[str, str]) -> np.ndarray:
        return self._multiplier_matrix(raw_data.get(SCALE_DATA_KEY), STAMINA_PATTERN)

    @staticmethod
    def _multiplier_matrix(text: Optional[str], pattern: re.Pattern) -> np.ndarray:
        """4 x 1300 float32 table, zero-filled where the dump has no value."""
        table = np.zeros((MULTIPLIER_TABLE_ROWS, MAX_ITEM_LEVEL), dtype=np.float32)
        match = pattern.search(text or "")
        if not match:
            logger.warning("RawTableDecoder: multiplier table not found")
            return table
        for row in range(MULTIPLIER_TABLE_ROWS):
            values = MULTIPLIER_VALUE_PATTERN.findall(match.group(row + 1))
            for col, value in enumerate(values[:MAX_ITEM_LEVEL]):
                table[row, col] = float(value)
        return table

    def build_spell_scaling(self, raw_data: Dict[str, str]) -> np.ndarray:
        """21 x 80 table: one row per scaling class, one column per level."""
        table = np.zeros((SPELL_SCALING_ROWS, SPELL_SCALING_LEVELS), dtype=np.float64)
        text = raw_data.get(SPELL_SCALE_DATA_KEY) or raw_data.get(SCALE_DATA_KEY) or ""
        if SPELL_SCALING_MARKER not in text:
            logger.warning("RawTableDecoder: spell scaling table not found")
            return table
        chunk = _slice_after(text, SPELL_SCALING_MARKER)
        rows = SPELL_SCALING_ROW_PATTERN.findall(chunk)
        for r, row_text in enumerate(rows[:SPELL_SCALING_ROWS]):
            values = SPELL_SCALING_VALUE_PATTERN.findall(row_text)
            for c, value in enumerate(values[:SPELL_SCALING_LEVELS]):
                table[r, c] = float(value)
        return table

    # ── Version ─────────────────────────────────────────────

    def build_version(self, raw_data: Dict[str, str]) -> str:
        match = VERSION_PATTERN.search(raw_data.get(VERSION_DATA_KEY) or "")
        if not match:
            logger.warning("RawTableDecoder: client data version not found")
            return ""
        return match.group(1)


# ─────────────────────────────────────────────
# Field maps
# ─────────────────────────────────────────────

def _item_mod_from_fields(f: List[str]) -> RawItemMod:
    return RawItemMod(
        mod_type=parse_int(f[0]),
        stat_allocation=parse_int(f[1]),
        socket_multiplier=parse_float(f[2]),
    )


def _item_from_fields(f: List[str]) -> RawItem:
    # f[0] is the blank field after the name
    return RawItem(
        id=parse_int(f[1]),
        flags1=parse_hex(f[2]),
        flags2=parse_hex(f[3]),
        type_flags=parse_hex(f[4]),
        item_level=parse_int(f[5]),
        required_level=parse_int(f[6]),
        required_skill=parse_int(f[7]),
        required_skill_level=parse_int(f[8]),
        quality=parse_int(f[9]),
        inventory_type=parse_int(f[10]),
        item_class=parse_int(f[11]),
        item_subclass=parse_int(f[12]),
        bind_type=parse_int(f[13]),
        delay=int(parse_float(f[14])),
        damage_range=parse_float(f[15]),
        item_modifier=parse_float(f[16]),
        dbc_stats=parse_stats_pointer(f[17]),
        dbc_stats_count=parse_int(f[18]),
        class_mask=parse_hex(f[19]),
        race_mask=parse_hex(f[20]),
        socket_colours=[parse_int(f[21]), parse_int(f[22]), parse_int(f[23])],
        gem_properties=parse_int(f[24]),
        socket_bonus_id=parse_int(f[25]),
        set_id=parse_int(f[26]),
        curve_id=parse_int(f[27]),
        artifact_id=parse_int(f[28]),
    )


def _item_effect_from_fields(f: List[str]) -> RawItemEffect:
    return RawItemEffect(
        id=parse_int(f[0]),
        spell_id=parse_int(f[1]),
        item_id=parse_int(f[2]),
        index=parse_int(f[3]),
        type=parse_int(f[4]),
        cooldown_group=parse_int(f[5]),
        cooldown_duration=parse_int(f[6]),
        cooldown_group_duration=parse_int(f[7]),
    )


def _item_bonus_from_fields(f: List[str]) -> RawItemBonus:
    return RawItemBonus(
        id=parse_int(f[0]),
        bonus_id=parse_int(f[1]),
        type=parse_int(f[2]),
        value1=parse_int(f[3]),
        value2=parse_int(f[4]),
        value3=parse_int(f[5]),
        value4=parse_int(f[6]),
        index=parse_int(f[7]),
    )


def _gem_from_fields(f: List[str]) -> RawGemProperty:
    return RawGemProperty(
        id=parse_int(f[0]),
        enchant_id=parse_int(f[1]),
        colour=parse_hex(f[2]),
    )


def _enchant_from_fields(f: List[str]) -> RawItemEnchantment:
    # 7-9 types, 10-12 amounts, 13-15 properties, 16-18 coefficients
    subs = [
        RawItemSubEnchantment(
            type=parse_int(f[7 + i]),
            amount=parse_int(f[10 + i]),
            property=parse_int(f[13 + i]),
            coefficient=parse_float(f[16 + i]),
        )
        for i in range(3)
    ]
    return RawItemEnchantment(
        id=parse_int(f[0]),
        gem_id=parse_int(f[1]),
        scaling_id=parse_int(f[2]),
        min_scaling_level=parse_int(f[3]),
        max_scaling_level=parse_int(f[4]),
        required_skill=parse_int(f[5]),
        required_skill_level=parse_int(f[6]),
        sub_enchantments=subs,
        spell_id=parse_int(f[19]),
        name=unquote(_at(f, 20, "")),
    )


def _random_prop_from_fields(f: List[str]) -> RawRandomPropData:
    return RawRandomPropData(
        item_level=parse_int(f[0]),
        damage_replace_stat=parse_float(f[1]),
        damage_secondary=parse_float(f[2]),
        epic=[parse_float(_at(f, 3 + i)) for i in range(5)],
        rare=[parse_float(_at(f, 8 + i)) for i in range(5)],
        uncommon=[parse_float(_at(f, 13 + i)) for i in range(5)],
    )


def _curve_point_from_fields(f: List[str]) -> RawCurvePoint:
    return RawCurvePoint(
        curve_id=parse_int(f[0]),
        index=parse_int(f[1]),
        primary1=parse_float(f[2]),
        primary2=parse_float(f[3]),
        secondary1=parse_float(f[4]),
        secondary2=parse_float(f[5]),
    )


def _spell_effect_from_fields(f: List[str]) -> RawSpellEffect:
    return RawSpellEffect(
        id=parse_int(f[0]),
        spell_id=parse_int(f[1]),
        effect_index=parse_int(f[2]),
        effect_type=parse_int(f[3]),
        effect_subtype=parse_int(f[4]),
        coefficient=parse_float(f[5]),
        delta=parse_float(f[6]),
        bonus=parse_float(f[7]),
        sp_coefficient=parse_float(f[8]),
        ap_coefficient=parse_float(f[9]),
        amplitude=parse_float(f[10]),
        radius=parse_float(f[11]),
        radius_max=parse_float(f[12]),
        base_value=parse_float(f[13]),
        misc_value1=parse_int(f[14]),
        misc_value2=parse_int(f[15]),
        class_flags=[parse_int(f[16 + i]) for i in range(4)],
        trigger_spell_id=parse_int(f[20]),
        chain_multiplier=parse_float(f[21]),
        combo_points=parse_float(f[22]),
        real_ppl=parse_float(f[23]),
        mechanic=parse_int(f[24]),
        chain_targets=parse_int(f[25]),
        targeting1=parse_int(f[26]),
        targeting2=parse_int(f[27]),
        value=parse_float(f[28]),
        pvp_coefficient=parse_float(f[29]),
        pvp_coefficient2=parse_float(f[30]),
        scaled_value_type=parse_int(f[31]),
    )


def _spell_power_from_fields(f: List[str]) -> RawSpellPower:
    return RawSpellPower(
        id=parse_int(f[0]),
        spell_id=parse_int(f[1]),
        aura_id=parse_int(f[2]),
        power_type=parse_int(f[3]),
        cost=parse_int(f[4]),
        cost_max=parse_int(f[5]),
        cost_per_tick=parse_int(f[6]),
        percent_cost=parse_float(f[7]),
        percent_cost_max=parse_float(f[8]),
        percent_cost_per_tick=parse_float(f[9]),
    )


def _spell_from_fields(f: List[str]) -> RawSpell:
    # f[0] is the blank field after the name; 56+ are row counts
    return RawSpell(
        id=parse_int(f[1]),
        school=parse_int(_at(f, 2)),
        projectile_speed=parse_float(_at(f, 3)),
        race_mask=parse_hex(_at(f, 4)),
        class_mask=parse_hex(_at(f, 5)),
        scaling_type=parse_int(_at(f, 6)),
        max_scaling_level=parse_int(_at(f, 7)),
        spell_level=parse_int(_at(f, 8)),
        max_level=parse_int(_at(f, 9)),
        require_max_level=parse_int(_at(f, 10)),
        min_range=parse_float(_at(f, 11)),
        max_range=parse_float(_at(f, 12)),
        cooldown=parse_int(_at(f, 13)),
        gcd=parse_int(_at(f, 14)),
        category_cooldown=parse_int(_at(f, 15)),
        charges=parse_int(_at(f, 16)),
        charge_cooldown=parse_int(_at(f, 17)),
        category=parse_int(_at(f, 18)),
        damage_class=parse_int(_at(f, 19)),
        max_targets=parse_int(_at(f, 20)),
        duration=parse_float(_at(f, 21)),
        max_stack=parse_int(_at(f, 22)),
        proc_chance=parse_int(_at(f, 23)),
        proc_charges=parse_int(_at(f, 24)),
        proc_flags=parse_int(_at(f, 25)),
        internal_cooldown=parse_int(_at(f, 26)),
        rppm=parse_float(_at(f, 27)),
        equipped_class=parse_int(_at(f, 28)),
        equipped_inventory_type_mask=parse_int(_at(f, 29)),
        equipped_subclass_mask=parse_int(_at(f, 30)),
        cast_time=parse_int(_at(f, 31)),
        attributes=[parse_int(_at(f, 32 + i)) for i in range(15)],
        class_flags=[parse_int(_at(f, 47 + i)) for i in range(4)],
        class_flags_family=parse_int(_at(f, 51)),
        stance_mask=parse_hex(_at(f, 52)),
        mechanic=parse_int(_at(f, 53)),
        power_id=parse_int(_at(f, 54)),
        essence_id=parse_int(_at(f, 55)),
    )


def _rppm_from_fields(f: List[str]) -> RawRppmEntry:
    return RawRppmEntry(
        spell_id=parse_int(f[0]),
        type=parse_int(f[1]),
        modifier_type=parse_int(f[2]),
        coefficient=parse_float(f[3]),
    )


def _conduit_rank_from_fields(f: List[str]) -> RawSpellConduitRankEntry:
    return RawSpellConduitRankEntry(
        conduit_id=parse_int(f[0]),
        rank=parse_int(f[1]),
        spell_id=parse_int(f[2]),
        value=parse_float(f[3]),
    )


def _trait_from_fields(f: List[str]) -> RawTrait:
    return RawTrait(
        tree_index=parse_int(f[0]),
        class_id=parse_int(f[1]),
        trait_node_entry_id=parse_int(f[2]),
        node_id=parse_int(f[3]),
        max_ranks=parse_int(f[4]),
        required_points=parse_int(f[5]),
        trait_definition_id=parse_int(f[6]),
        spell_id=parse_int(f[7]),
        replace_spell_id=parse_int(f[8]),
        override_spell_id=parse_int(f[9]),
        row=parse_int(f[10]),
        column=parse_int(f[11]),
        selection_index=parse_int(f[12]),
        spec_ids=[parse_int(f[13 + i]) for i in range(4)],
        spec_starter_ids=[parse_int(f[17 + i]) for i in range(4)],
        node_type=parse_int(f[21]),
    )


if __name__ == "__main__":
    import sys
    from pathlib import Path

    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")

    # python table_decoder.py <SpellData.raw>
    path = Path(sys.argv[1])
    decoder = RawTableDecoder()
    spells = decoder.decode(SimcFileType.SPELL_DATA, {SPELL_DATA_KEY: path.read_text()})
    print(f"{len(spells)} spells")
    for spell in spells[:10]:
        print(f"  {spell.id:>8}  {spell.name}  ({len(spell.effects)} effects)")
