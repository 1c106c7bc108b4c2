"""
ScalingEngine: facade over the SimcData pipeline.

Single entry point wrapping DataProvider, Lookup, ProfileParser,
ItemBuilder and SpellBuilder. Consumers pass a DataConfig to configure
the data source without importing from config.py directly.

Usage:
    from core import ScalingEngine
    from games.wow import create_wow_config

    engine = ScalingEngine(create_wow_config())
    engine.initialize()
    profile = engine.generate_profile(addon_export_text)
    spell = engine.generate_spell(SpellOptions(spell_id=274740, player_level=60))
"""

import logging
from typing import List, Optional, Union

from core.data_config import DataConfig

logger = logging.getLogger(__name__)


class ScalingEngine:
    """Profile, item and spell generation over one data source."""

    def __init__(self, config: DataConfig, provider=None):
        self.config = config
        self._provider = provider
        self._lookup = None
        self._parser = None
        self._spell_builder = None
        self._item_builder = None
        self._ready = False

    @property
    def ready(self) -> bool:
        return self._ready

    def initialize(self) -> bool:
        """Wire all components and check the data source. Never raises.

        Returns True when the client data version could be read.
        """
        try:
            from data_provider import DataProvider
            from item_builder import ItemBuilder
            from lookup import Lookup
            from profile_parser import ProfileParser
            from spell_builder import SpellBuilder

            if self._provider is None:
                self._provider = DataProvider(
                    cache_dir=self.config.cache_dir,
                    branch=self.config.branch,
                    use_ptr=self.config.use_ptr,
                    cache_ttl=self.config.cache_ttl,
                    http_timeout=self.config.http_timeout,
                    raw_base_url=self.config.raw_base_url,
                )
            self._lookup = Lookup(self._provider)
            self._parser = ProfileParser()
            self._spell_builder = SpellBuilder(self._lookup,
                                               max_depth=self.config.max_trigger_depth)
            self._item_builder = ItemBuilder(self._lookup, self._spell_builder,
                                             gem_scaling_level=self.config.gem_scaling_level)

            version = self._lookup.game_data_version()
            self._ready = bool(version)
            logger.info(f"ScalingEngine initialized (ready={self._ready}, "
                        f"game={self.config.game_id}, branch={self.branch_name}, "
                        f"data={version or 'unknown'})")
            return self._ready
        except Exception as e:
            logger.error(f"ScalingEngine init failed: {e}", exc_info=True)
            return False

    def _require(self):
        if self._lookup is None:
            raise RuntimeError("ScalingEngine.initialize() has not been called")

    # ── Public API ──────────────────────────────────────────

    def generate_profile(self, profile: Union[str, List[str]]):
        """Parse an addon export and build its items and talents.

        Items that are unknown or hit an unsupported scaling branch are
        logged and left out.

        Returns:
            SimcProfile.

        Raises:
            ValueError: the export is empty.
        """
        from errors import UnsupportedFeature
        from simc_models import SimcProfile

        self._require()
        if not profile:
            raise ValueError("profile must contain at least one line")

        parsed = self._parser.parse(profile)
        result = SimcProfile(parsed_profile=parsed)

        for parsed_item in parsed.items:
            try:
                item = self._item_builder.build(parsed_item)
            except UnsupportedFeature as e:
                logger.warning(f"ScalingEngine: skipped {parsed_item.slot} "
                               f"item {parsed_item.item_id}: {e}")
                continue
            if item is not None:
                result.generated_items.append(item)

        for parsed_talent in parsed.talents:
            talent = self.get_talent(parsed_talent.talent_id, parsed_talent.rank)
            if talent is not None:
                result.talents.append(talent)

        logger.info(f"ScalingEngine: profile {parsed.name or '(unnamed)'} built "
                    f"({len(result.generated_items)}/{len(parsed.items)} items, "
                    f"{len(result.talents)} talents)")
        return result

    def generate_item(self, options):
        """Build one item from ItemOptions.

        Raises:
            ValueError: item_id is 0 or unknown.
            UnsupportedFeature: the item needs an unimplemented scaling branch.
        """
        self._require()
        if options is None or options.item_id == 0:
            raise ValueError(f"invalid item id: {getattr(options, 'item_id', None)}")
        item = self._item_builder.build_from_options(options)
        if item is None:
            raise ValueError(f"unknown item id: {options.item_id}")
        return item

    def generate_spell(self, options):
        """Build a spell from SpellOptions: item context when item_level is set."""
        self._require()
        if options.item_level != 0:
            return self._spell_builder.build_item_spell(
                options.spell_id, options.item_level,
                options.item_quality, options.item_inventory_type)
        return self._spell_builder.build_player_spell(options.player_level, options.spell_id)

    def get_game_data_version(self) -> str:
        self._require()
        return self._lookup.game_data_version()

    def get_available_talents(self, class_id: int, spec_id: int) -> list:
        from simc_models import SimcTalent

        self._require()
        traits = self._lookup.traits_for(class_id, spec_id)
        if not traits:
            logger.warning(f"ScalingEngine: no traits for class {class_id} spec {spec_id}")
        return [
            SimcTalent(trait_entry_id=t.trait_node_entry_id, spell_id=t.spell_id, name=t.name)
            for t in traits
        ]

    def get_talent(self, trait_entry_id: int, rank: int):
        """SimcTalent for a trait node entry, None when unknown."""
        from simc_models import SimcTalent

        self._require()
        trait = self._lookup.trait(trait_entry_id)
        if trait is None:
            return None
        return SimcTalent(trait_entry_id=trait.trait_node_entry_id, spell_id=trait.spell_id,
                          name=trait.name, rank=rank)

    def spell_id_for_conduit(self, conduit_id: int) -> int:
        self._require()
        return self._lookup.spell_id_for_conduit(conduit_id)

    # ── Data source settings ────────────────────────────────

    @property
    def use_ptr_data(self) -> bool:
        return self._provider.use_ptr if self._provider else self.config.use_ptr

    @use_ptr_data.setter
    def use_ptr_data(self, value: bool):
        self.config.use_ptr = bool(value)
        if self._provider is not None:
            self._provider.use_ptr = value

    @property
    def branch_name(self) -> str:
        return self._provider.branch if self._provider else self.config.branch

    @branch_name.setter
    def branch_name(self, value: str):
        self.config.branch = value
        if self._provider is not None:
            self._provider.branch = value

    def clear_cache(self):
        if self._provider is not None:
            self._provider.clear_cache()
