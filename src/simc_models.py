"""
SimcData - Built Models
Fully scaled items, spells and profiles handed to consumers, plus the option
objects used to request them.
"""

from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional


# ─── Request options ─────────────────────────

@dataclass
class ItemOptions:
    """Build an item without a profile line."""
    item_id: int = 0
    item_level: int = 0               # 0 = computed from base level + bonuses
    bonus_ids: List[int] = field(default_factory=list)
    gem_ids: List[int] = field(default_factory=list)
    quality: int = -1                 # ItemQuality, -1 = keep the item's own
    drop_level: int = 0


@dataclass
class SpellOptions:
    """Build a spell in item context (item_level > 0) or player context."""
    spell_id: int = 0
    item_level: int = 0
    player_level: int = 0
    item_quality: int = 0             # ItemQuality
    item_inventory_type: int = 0      # InventoryType


# ─── Spells ──────────────────────────────────

@dataclass
class SimcSpellRppmModifier:
    spell_id: int = 0
    is_hasted: bool = False
    is_spec_modified: bool = False
    spec: int = 0
    coefficient: float = 0.0


@dataclass
class SimcSpellEffect:
    id: int = 0
    effect_index: int = 0
    effect_type: int = 0
    effect_subtype: int = 0
    coefficient: float = 0.0
    sp_coefficient: float = 0.0
    ap_coefficient: float = 0.0
    delta: float = 0.0
    amplitude: float = 0.0
    radius: float = 0.0
    radius_max: float = 0.0
    base_value: float = 0.0
    scale_budget: float = 0.0
    trigger_spell_id: int = 0
    trigger_spell: Optional["SimcSpell"] = None


@dataclass
class SimcSpell:
    spell_id: int = 0
    name: str = ""
    school: int = 0
    scaling_type: int = 0
    min_range: float = 0.0
    max_range: float = 0.0
    cooldown: int = 0
    gcd: int = 0
    category: int = 0
    category_cooldown: int = 0
    charges: int = 0
    charge_cooldown: int = 0
    max_targets: int = 0
    duration: float = 0.0
    max_stacks: int = 0
    proc_chance: int = 0
    proc_flags: int = 0
    internal_cooldown: int = 0
    rppm: float = 0.0
    cast_time: int = 0
    scale_budget: float = 0.0
    combat_rating_multiplier: float = 0.0
    power_cost: float = 0.0                  # percent cost of the first power entry
    power_costs: Dict[int, float] = field(default_factory=dict)   # power id -> percent cost
    conduit_id: int = 0
    conduit_ranks: Dict[int, float] = field(default_factory=dict)  # rank -> value
    rppm_modifiers: List[SimcSpellRppmModifier] = field(default_factory=list)
    effects: List[SimcSpellEffect] = field(default_factory=list)
    cycle_detected: bool = False             # placeholder for a trigger loop or depth cut

    def to_dict(self) -> dict:
        return asdict(self)


# ─── Items ───────────────────────────────────

@dataclass
class SimcItemMod:
    type: int = 0                     # ItemModType
    raw_stat_allocation: int = 0
    stat_rating: int = 0


@dataclass
class SimcItemGem:
    gem_id: int = 0
    enchant_id: int = 0
    stat_type: int = 0                # ItemModType
    stat_rating: int = 0


@dataclass
class SimcItemEffect:
    effect_id: int = 0
    type: int = 0
    cooldown_group: int = 0
    cooldown_duration: int = 0
    cooldown_group_duration: int = 0
    spell: Optional[SimcSpell] = None


@dataclass
class SimcItem:
    item_id: int = 0
    name: str = ""
    item_level: int = 0
    quality: int = 0                  # ItemQuality
    inventory_type: int = 0           # InventoryType
    item_class: int = 0               # ItemClass
    item_subclass: int = 0
    drop_level: int = 0
    equipped: bool = True
    sockets: List[int] = field(default_factory=list)      # ItemSocketColor per socket
    mods: List[SimcItemMod] = field(default_factory=list)
    gems: List[SimcItemGem] = field(default_factory=list)
    effects: List[SimcItemEffect] = field(default_factory=list)

    def mod(self, mod_type: int) -> Optional[SimcItemMod]:
        for m in self.mods:
            if m.type == mod_type:
                return m
        return None

    def to_dict(self) -> dict:
        return asdict(self)


# ─── Profiles ────────────────────────────────

@dataclass
class SimcTalent:
    trait_entry_id: int = 0
    spell_id: int = 0
    name: str = ""
    rank: int = 0


@dataclass
class SimcProfile:
    parsed_profile: object = None     # profile_parser.ParsedProfile
    generated_items: List[SimcItem] = field(default_factory=list)
    talents: List[SimcTalent] = field(default_factory=list)
