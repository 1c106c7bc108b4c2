"""
SimcData - Spell Builder
Builds scaled SimcSpell objects from raw spell data.

Two contexts:
  item:   budget from the item's random property points at its item level,
          adjusted by the spell's scaling class (rating multiplier for
          SPECIAL_SCALE7, damage replace stat for SPECIAL_SCALE8)
  player: budget from the spell scaling table row of the spell's class at
          the player's level

Effects that trigger other spells get the triggered spell built in the same
context. A spell id already on the current trigger path, or a path deeper
than MAX_TRIGGER_DEPTH, yields a placeholder spell with cycle_detected set.
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, Optional

from config import MAX_TRIGGER_DEPTH
from raw_data import RawSpell
from simc_enums import CombatRatingMultiplierType, PlayerScaling, RppmModifierType
from simc_models import SimcSpell, SimcSpellEffect, SimcSpellRppmModifier

logger = logging.getLogger(__name__)

SX_SCALE_ILEVEL = 354             # spell attribute: scales with item level


def has_attribute(raw: RawSpell, attribute: int) -> bool:
    """Whether a spell attribute bit is set in the raw attribute words."""
    word, bit = divmod(attribute, 32)
    if word >= len(raw.attributes):
        return False
    return bool(raw.attributes[word] & (1 << bit))


@dataclass(frozen=True)
class _SpellContext:
    item_mode: bool
    item_level: int = 0
    quality: int = 0
    inventory_type: int = 0
    player_level: int = 0


class SpellBuilder:
    """Turns raw spells into scaled SimcSpell trees."""

    def __init__(self, lookup, max_depth: int = MAX_TRIGGER_DEPTH):
        self.lookup = lookup
        self.max_depth = max_depth

    # ── Entry points ────────────────────────────────────────

    def build_item_spell(self, spell_id: int, item_level: int, quality: int,
                         inventory_type: int) -> Optional[SimcSpell]:
        """Spell as granted by an item of the given level, quality and slot."""
        ctx = _SpellContext(item_mode=True, item_level=item_level,
                            quality=quality, inventory_type=inventory_type)
        return self._build(spell_id, ctx, frozenset(), 0)

    def build_player_spell(self, player_level: int, spell_id: int) -> Optional[SimcSpell]:
        """Spell as cast by a player of the given level."""
        ctx = _SpellContext(item_mode=False, player_level=player_level)
        return self._build(spell_id, ctx, frozenset(), 0)

    # ── Internals ───────────────────────────────────────────

    def _build(self, spell_id: int, ctx: _SpellContext,
               path: FrozenSet[int], depth: int) -> Optional[SimcSpell]:
        raw = self.lookup.spell(spell_id)
        if raw is None:
            return None

        spell = _copy_static_fields(raw)
        if ctx.item_mode:
            spell.scale_budget, spell.combat_rating_multiplier = self._item_budget(raw, ctx)
        else:
            spell.scale_budget = self._player_budget(raw, ctx)

        if raw.spell_powers:
            spell.power_cost = raw.spell_powers[0].percent_cost
        spell.power_costs = {p.id: p.percent_cost for p in raw.spell_powers}

        for entry in self.lookup.rppm_modifiers(raw.id):
            is_spec = entry.modifier_type == RppmModifierType.SPEC
            spell.rppm_modifiers.append(SimcSpellRppmModifier(
                spell_id=entry.spell_id,
                is_hasted=entry.modifier_type == RppmModifierType.HASTE,
                is_spec_modified=is_spec,
                spec=entry.type if is_spec else 0,
                coefficient=entry.coefficient,
            ))

        path = path | {raw.id}
        for raw_effect in sorted(raw.effects, key=lambda e: e.effect_index):
            effect = SimcSpellEffect(
                id=raw_effect.id,
                effect_index=raw_effect.effect_index,
                effect_type=raw_effect.effect_type,
                effect_subtype=raw_effect.effect_subtype,
                coefficient=raw_effect.coefficient,
                sp_coefficient=raw_effect.sp_coefficient,
                ap_coefficient=raw_effect.ap_coefficient,
                delta=raw_effect.delta,
                amplitude=raw_effect.amplitude,
                radius=raw_effect.radius,
                radius_max=raw_effect.radius_max,
                base_value=raw_effect.base_value,
                scale_budget=spell.scale_budget,
                trigger_spell_id=raw_effect.trigger_spell_id,
            )
            if raw_effect.trigger_spell_id > 0:
                effect.trigger_spell = self._trigger(raw_effect.trigger_spell_id,
                                                     ctx, path, depth + 1)
            spell.effects.append(effect)

        if not ctx.item_mode:
            ranks = self.lookup.conduit_ranks(raw.id)
            if ranks:
                spell.conduit_id = ranks[0].conduit_id
                spell.conduit_ranks = {r.rank: r.value for r in ranks}

        return spell

    def _trigger(self, spell_id: int, ctx: _SpellContext,
                 path: FrozenSet[int], depth: int) -> Optional[SimcSpell]:
        if spell_id in path or depth > self.max_depth:
            reason = "cycle" if spell_id in path else f"depth {depth}"
            logger.warning(f"SpellBuilder: not expanding trigger spell {spell_id} ({reason})")
            raw = self.lookup.spell(spell_id)
            return SimcSpell(spell_id=spell_id, name=raw.name if raw else "",
                             cycle_detected=True)
        return self._build(spell_id, ctx, path, depth)

    def _item_budget(self, raw: RawSpell, ctx: _SpellContext):
        """(budget, combat rating multiplier) for a spell on an item."""
        budget = self.lookup.item_budget(ctx.item_level, ctx.quality, raw.max_scaling_level)
        scaling = self.lookup.scale_class(raw.scaling_type)

        cr_type = self.lookup.combat_rating_multiplier_type(ctx.inventory_type)
        multiplier = 0.0
        if cr_type != CombatRatingMultiplierType.INVALID:
            multiplier = self.lookup.combat_rating_multiplier(ctx.item_level, cr_type)

        if scaling == PlayerScaling.SPECIAL_SCALE7:
            budget *= multiplier
        elif scaling == PlayerScaling.SPECIAL_SCALE8:
            props = self.lookup.random_props(ctx.item_level)
            budget = props.damage_replace_stat if props else 0.0
        elif scaling == PlayerScaling.NONE and has_attribute(raw, SX_SCALE_ILEVEL):
            logger.debug(f"SpellBuilder: spell {raw.id} scales with item level by attribute, "
                         f"not implemented, keeping item budget")

        return budget, multiplier

    def _player_budget(self, raw: RawSpell, ctx: _SpellContext) -> float:
        scaling = self.lookup.scale_class(raw.scaling_type)
        if scaling == PlayerScaling.NONE:
            return 0.0

        level = ctx.player_level
        if raw.max_scaling_level > 0:
            level = min(level, raw.max_scaling_level)
        return self.lookup.spell_scaling(self.lookup.class_id(scaling), level)


def _copy_static_fields(raw: RawSpell) -> SimcSpell:
    return SimcSpell(
        spell_id=raw.id,
        name=raw.name,
        school=raw.school,
        scaling_type=raw.scaling_type,
        min_range=raw.min_range,
        max_range=raw.max_range,
        cooldown=raw.cooldown,
        gcd=raw.gcd,
        category=raw.category,
        category_cooldown=raw.category_cooldown,
        charges=raw.charges,
        charge_cooldown=raw.charge_cooldown,
        max_targets=raw.max_targets,
        duration=raw.duration,
        max_stacks=raw.max_stack,
        proc_chance=raw.proc_chance,
        proc_flags=raw.proc_flags,
        internal_cooldown=raw.internal_cooldown,
        rppm=raw.rppm,
        cast_time=raw.cast_time,
    )
