"""
SimcData - Raw Data Records
Flat records for the rows of the generated client data dumps.

One dataclass per upstream struct. Fields keep the dump's raw integers;
enum conversion happens in the builders. Every record round-trips through
plain JSON dicts (see the serialization helpers at the bottom) so the data
provider can cache decoded tables on disk.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List


# ─── Items ───────────────────────────────────

@dataclass
class RawItemMod:
    mod_type: int = 0                 # ItemModType
    stat_allocation: int = 0          # budget share, in 1/10000ths
    socket_multiplier: float = 0.0


@dataclass
class RawItemEffect:
    id: int = 0
    spell_id: int = 0
    item_id: int = 0
    index: int = 0
    type: int = 0
    cooldown_group: int = 0
    cooldown_duration: int = 0
    cooldown_group_duration: int = 0


@dataclass
class RawItem:
    id: int = 0
    name: str = ""
    flags1: int = 0
    flags2: int = 0
    type_flags: int = 0
    item_level: int = 0
    required_level: int = 0
    required_skill: int = 0
    required_skill_level: int = 0
    quality: int = 0                  # ItemQuality
    inventory_type: int = 0           # InventoryType
    item_class: int = 0               # ItemClass
    item_subclass: int = 0
    bind_type: int = 0
    delay: int = 0
    damage_range: float = 0.0
    item_modifier: float = 0.0
    dbc_stats: int = 0                # offset into the shared stats table
    dbc_stats_count: int = 0
    class_mask: int = 0
    race_mask: int = 0
    socket_colours: List[int] = field(default_factory=lambda: [0, 0, 0])
    gem_properties: int = 0
    socket_bonus_id: int = 0
    set_id: int = 0
    curve_id: int = 0
    artifact_id: int = 0
    item_mods: List[RawItemMod] = field(default_factory=list)
    item_effects: List[RawItemEffect] = field(default_factory=list)


@dataclass
class RawItemBonus:
    id: int = 0
    bonus_id: int = 0
    type: int = 0                     # ItemBonusType
    value1: int = 0
    value2: int = 0
    value3: int = 0
    value4: int = 0
    index: int = 0


@dataclass
class RawGemProperty:
    id: int = 0
    enchant_id: int = 0
    colour: int = 0                   # ItemSocketColor bits


@dataclass
class RawItemSubEnchantment:
    type: int = 0
    amount: int = 0
    property: int = 0                 # ItemModType for stat enchants
    coefficient: float = 0.0


@dataclass
class RawItemEnchantment:
    id: int = 0
    gem_id: int = 0
    scaling_id: int = 0
    min_scaling_level: int = 0
    max_scaling_level: int = 0
    required_skill: int = 0
    required_skill_level: int = 0
    sub_enchantments: List[RawItemSubEnchantment] = field(default_factory=list)
    spell_id: int = 0
    name: str = ""


@dataclass
class RawRandomPropData:
    item_level: int = 0
    damage_replace_stat: float = 0.0
    damage_secondary: float = 0.0
    epic: List[float] = field(default_factory=lambda: [0.0] * 5)
    rare: List[float] = field(default_factory=lambda: [0.0] * 5)
    uncommon: List[float] = field(default_factory=lambda: [0.0] * 5)


@dataclass
class RawCurvePoint:
    curve_id: int = 0
    index: int = 0
    primary1: float = 0.0
    primary2: float = 0.0
    secondary1: float = 0.0
    secondary2: float = 0.0


# ─── Spells ──────────────────────────────────

@dataclass
class RawSpellEffect:
    id: int = 0
    spell_id: int = 0
    effect_index: int = 0
    effect_type: int = 0
    effect_subtype: int = 0
    coefficient: float = 0.0
    delta: float = 0.0
    bonus: float = 0.0
    sp_coefficient: float = 0.0
    ap_coefficient: float = 0.0
    amplitude: float = 0.0
    radius: float = 0.0
    radius_max: float = 0.0
    base_value: float = 0.0
    misc_value1: int = 0
    misc_value2: int = 0
    class_flags: List[int] = field(default_factory=lambda: [0, 0, 0, 0])
    trigger_spell_id: int = 0
    chain_multiplier: float = 0.0
    combo_points: float = 0.0
    real_ppl: float = 0.0
    mechanic: int = 0
    chain_targets: int = 0
    targeting1: int = 0
    targeting2: int = 0
    value: float = 0.0
    pvp_coefficient: float = 0.0
    pvp_coefficient2: float = 0.0
    scaled_value_type: int = 0


@dataclass
class RawSpellPower:
    id: int = 0
    spell_id: int = 0
    aura_id: int = 0
    power_type: int = 0
    cost: int = 0
    cost_max: int = 0
    cost_per_tick: int = 0
    percent_cost: float = 0.0
    percent_cost_max: float = 0.0
    percent_cost_per_tick: float = 0.0


@dataclass
class RawSpell:
    id: int = 0
    name: str = ""
    school: int = 0
    projectile_speed: float = 0.0
    race_mask: int = 0
    class_mask: int = 0
    scaling_type: int = 0             # PlayerScaling as a raw scale number
    max_scaling_level: int = 0
    spell_level: int = 0
    max_level: int = 0
    require_max_level: int = 0
    min_range: float = 0.0
    max_range: float = 0.0
    cooldown: int = 0
    gcd: int = 0
    category_cooldown: int = 0
    charges: int = 0
    charge_cooldown: int = 0
    category: int = 0
    damage_class: int = 0
    max_targets: int = 0
    duration: float = 0.0
    max_stack: int = 0
    proc_chance: int = 0
    proc_charges: int = 0
    proc_flags: int = 0
    internal_cooldown: int = 0
    rppm: float = 0.0
    equipped_class: int = 0
    equipped_inventory_type_mask: int = 0
    equipped_subclass_mask: int = 0
    cast_time: int = 0
    attributes: List[int] = field(default_factory=lambda: [0] * 15)
    class_flags: List[int] = field(default_factory=lambda: [0] * 4)
    class_flags_family: int = 0
    stance_mask: int = 0
    mechanic: int = 0
    power_id: int = 0
    essence_id: int = 0
    effects: List[RawSpellEffect] = field(default_factory=list)
    spell_powers: List[RawSpellPower] = field(default_factory=list)


@dataclass
class RawRppmEntry:
    spell_id: int = 0
    type: int = 0                     # spec id when modifier_type is SPEC
    modifier_type: int = 0            # RppmModifierType
    coefficient: float = 0.0


@dataclass
class RawSpellConduitRankEntry:
    conduit_id: int = 0
    rank: int = 0
    spell_id: int = 0
    value: float = 0.0


# ─── Talents ─────────────────────────────────

@dataclass
class RawTrait:
    tree_index: int = 0
    class_id: int = 0
    trait_node_entry_id: int = 0
    node_id: int = 0
    max_ranks: int = 0
    required_points: int = 0
    trait_definition_id: int = 0
    spell_id: int = 0
    replace_spell_id: int = 0
    override_spell_id: int = 0
    row: int = 0
    column: int = 0
    selection_index: int = 0
    spec_ids: List[int] = field(default_factory=lambda: [0] * 4)
    spec_starter_ids: List[int] = field(default_factory=lambda: [0] * 4)
    node_type: int = 0
    name: str = ""


# ─────────────────────────────────────────────
# JSON serialization helpers
# ─────────────────────────────────────────────

def record_to_dict(record) -> Dict[str, Any]:
    return asdict(record)


def _dict_to_item(d: dict) -> RawItem:
    d = dict(d)
    mods = [RawItemMod(**m) for m in d.pop("item_mods", [])]
    effects = [RawItemEffect(**e) for e in d.pop("item_effects", [])]
    return RawItem(item_mods=mods, item_effects=effects, **d)


def _dict_to_spell(d: dict) -> RawSpell:
    d = dict(d)
    effects = [RawSpellEffect(**e) for e in d.pop("effects", [])]
    powers = [RawSpellPower(**p) for p in d.pop("spell_powers", [])]
    return RawSpell(effects=effects, spell_powers=powers, **d)


def _dict_to_enchantment(d: dict) -> RawItemEnchantment:
    d = dict(d)
    subs = [RawItemSubEnchantment(**s) for s in d.pop("sub_enchantments", [])]
    return RawItemEnchantment(sub_enchantments=subs, **d)


# Record types whose dicts are flat and rebuild with cls(**d)
_FLAT_RECORDS = {
    "RawItemBonus": RawItemBonus,
    "RawGemProperty": RawGemProperty,
    "RawRandomPropData": RawRandomPropData,
    "RawCurvePoint": RawCurvePoint,
    "RawRppmEntry": RawRppmEntry,
    "RawSpellConduitRankEntry": RawSpellConduitRankEntry,
    "RawTrait": RawTrait,
}

_NESTED_RECORDS = {
    "RawItem": _dict_to_item,
    "RawSpell": _dict_to_spell,
    "RawItemEnchantment": _dict_to_enchantment,
}


def dict_to_record(record_type: str, d: dict):
    """Rebuild a record from its dict form, by dataclass name."""
    if record_type in _NESTED_RECORDS:
        return _NESTED_RECORDS[record_type](d)
    if record_type in _FLAT_RECORDS:
        return _FLAT_RECORDS[record_type](**d)
    raise KeyError(f"Unknown record type: {record_type}")
