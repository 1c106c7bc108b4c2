"""
SimcData - Enumerations
Numeric codes used by the generated client data dumps and the addon export.

Values mirror the client's data enums so that raw integers read from a dump
can be converted with e.g. ``InventoryType(12)``.
"""

from enum import IntEnum
from typing import Dict, Optional


class ItemModType(IntEnum):
    NONE = -1
    MANA = 0
    HEALTH = 1
    AGILITY = 3
    STRENGTH = 4
    INTELLECT = 5
    SPIRIT = 6
    STAMINA = 7
    DEFENSE_SKILL_RATING = 12
    DODGE_RATING = 13
    PARRY_RATING = 14
    BLOCK_RATING = 15
    HIT_MELEE_RATING = 16
    HIT_RANGED_RATING = 17
    HIT_SPELL_RATING = 18
    CRIT_MELEE_RATING = 19
    CRIT_RANGED_RATING = 20
    CRIT_SPELL_RATING = 21
    CORRUPTION = 22
    CORRUPTION_RESISTANCE = 23
    BONUS_STAT_1 = 24
    BONUS_STAT_2 = 25
    CRIT_TAKEN_RANGED_RATING = 26
    CRIT_TAKEN_SPELL_RATING = 27
    HASTE_MELEE_RATING = 28
    HASTE_RANGED_RATING = 29
    HASTE_SPELL_RATING = 30
    HIT_RATING = 31
    CRIT_RATING = 32
    HIT_TAKEN_RATING = 33
    CRIT_TAKEN_RATING = 34
    RESILIENCE_RATING = 35
    HASTE_RATING = 36
    EXPERTISE_RATING = 37
    ATTACK_POWER = 38
    RANGED_ATTACK_POWER = 39
    VERSATILITY_RATING = 40
    SPELL_HEALING_DONE = 41
    SPELL_DAMAGE_DONE = 42
    MANA_REGENERATION = 43
    ARMOR_PENETRATION_RATING = 44
    SPELL_POWER = 45
    HEALTH_REGEN = 46
    SPELL_PENETRATION = 47
    BLOCK_VALUE = 48
    MASTERY_RATING = 49
    EXTRA_ARMOR = 50
    FIRE_RESISTANCE = 51
    FROST_RESISTANCE = 52
    HOLY_RESISTANCE = 53
    SHADOW_RESISTANCE = 54
    NATURE_RESISTANCE = 55
    ARCANE_RESISTANCE = 56
    PVP_POWER = 57
    MULTISTRIKE_RATING = 59
    READINESS_RATING = 60
    SPEED_RATING = 61
    LEECH_RATING = 62
    AVOIDANCE_RATING = 63
    INDESTRUCTIBLE = 64
    WOD_5 = 65
    WOD_6 = 66
    STRENGTH_AGILITY_INTELLECT = 71
    STRENGTH_AGILITY = 72
    AGILITY_INTELLECT = 73
    STRENGTH_INTELLECT = 74


class ItemClass(IntEnum):
    CONSUMABLE = 0
    CONTAINER = 1
    WEAPON = 2
    GEM = 3
    ARMOR = 4
    REAGENT = 5
    PROJECTILE = 6
    TRADE_GOODS = 7
    GENERIC = 8
    RECIPE = 9
    MONEY = 10
    QUIVER = 11
    QUEST = 12
    KEY = 13
    PERMANENT = 14
    MISC = 15
    GLYPH = 16


class ItemSubclassWeapon(IntEnum):
    AXE = 0
    AXE2 = 1
    BOW = 2
    GUN = 3
    MACE = 4
    MACE2 = 5
    POLEARM = 6
    SWORD = 7
    SWORD2 = 8
    WARGLAIVE = 9
    STAFF = 10
    EXOTIC = 11
    EXOTIC2 = 12
    FIST = 13
    MISC = 14
    DAGGER = 15
    THROWN = 16
    SPEAR = 17
    CROSSBOW = 18
    WAND = 19
    FISHING_POLE = 20
    INVALID = 31


class InventoryType(IntEnum):
    NON_EQUIP = 0
    HEAD = 1
    NECK = 2
    SHOULDERS = 3
    BODY = 4
    CHEST = 5
    WAIST = 6
    LEGS = 7
    FEET = 8
    WRISTS = 9
    HANDS = 10
    FINGER = 11
    TRINKET = 12
    WEAPON = 13
    SHIELD = 14
    RANGED = 15
    CLOAK = 16
    TWO_HAND_WEAPON = 17
    BAG = 18
    TABARD = 19
    ROBE = 20
    WEAPON_MAIN_HAND = 21
    WEAPON_OFF_HAND = 22
    HOLDABLE = 23
    AMMO = 24
    THROWN = 25
    RANGED_RIGHT = 26
    QUIVER = 27
    RELIC = 28
    MAX = 29


class ItemQuality(IntEnum):
    NONE = -1
    POOR = 0
    COMMON = 1
    UNCOMMON = 2
    RARE = 3
    EPIC = 4
    LEGENDARY = 5
    ARTIFACT = 6
    MAX = 7


class ItemBonusType(IntEnum):
    ILEVEL = 1
    MOD = 2
    QUALITY = 3
    DESC = 4
    SUFFIX = 5
    SOCKET = 6
    REQ_LEVEL = 8
    SCALING = 11
    SCALING_2 = 13
    SET_ILEVEL = 14
    ADD_RANK = 17
    ADD_ITEM_EFFECT = 23
    MOD_ITEM_STAT = 25


class ItemSocketColor(IntEnum):
    NONE = 0
    META = 1
    RED = 2
    YELLOW = 4
    BLUE = 8
    ORANGE = 6
    PURPLE = 10
    GREEN = 12
    HYDRAULIC = 16
    PRISMATIC = 14
    COGWHEEL = 32
    IRON = 64
    BLOOD = 128
    SHADOW = 256
    FEL = 512
    ARCANE = 1024
    FROST = 2048
    FIRE = 4096
    WATER = 8192
    LIFE = 16384
    WIND = 32768
    HOLY = 65536
    RED_PUNCHCARD = 131072
    YELLOW_PUNCHCARD = 262144
    BLUE_PUNCHCARD = 524288


class CombatRatingMultiplierType(IntEnum):
    INVALID = -1
    ARMOR = 0
    WEAPON = 1
    TRINKET = 2
    JEWELLERY = 3


class PlayerScaling(IntEnum):
    """Scaling class of a spell or enchantment.

    Negative members are the "special" scaling rows of the spell scaling
    table; positive members are player classes in the simulator's order.
    """
    SPECIAL_SCALE8 = -8
    SPECIAL_SCALE7 = -7
    SPECIAL_SCALE6 = -6
    SPECIAL_SCALE5 = -5
    SPECIAL_SCALE4 = -4
    SPECIAL_SCALE3 = -3
    SPECIAL_SCALE2 = -2
    SPECIAL_SCALE = -1
    NONE = 0
    DEATH_KNIGHT = 1
    DEMON_HUNTER = 2
    DRUID = 3
    HUNTER = 4
    MAGE = 5
    MONK = 6
    PALADIN = 7
    PRIEST = 8
    ROGUE = 9
    SHAMAN = 10
    WARLOCK = 11
    WARRIOR = 12
    PET = 13
    GUARDIAN = 14
    HEALING_ENEMY = 15
    ENEMY = 16
    ENEMY_ADD = 17
    ENEMY_ADD_BOSS = 18
    TANK_DUMMY = 19
    MAX = 20


class RppmModifierType(IntEnum):
    HASTE = 1
    SPEC = 4


# ─────────────────────────────────────────────
# Profile vocabulary (addon export)
# ─────────────────────────────────────────────

class PlayerClass(IntEnum):
    WARRIOR = 1
    PALADIN = 2
    HUNTER = 3
    ROGUE = 4
    PRIEST = 5
    DEATH_KNIGHT = 6
    SHAMAN = 7
    MAGE = 8
    WARLOCK = 9
    MONK = 10
    DRUID = 11
    DEMON_HUNTER = 12
    EVOKER = 13


# Export key -> class, e.g. `deathknight="Name"`
CLASS_KEYS: Dict[str, PlayerClass] = {
    "warrior": PlayerClass.WARRIOR,
    "paladin": PlayerClass.PALADIN,
    "hunter": PlayerClass.HUNTER,
    "rogue": PlayerClass.ROGUE,
    "priest": PlayerClass.PRIEST,
    "deathknight": PlayerClass.DEATH_KNIGHT,
    "shaman": PlayerClass.SHAMAN,
    "mage": PlayerClass.MAGE,
    "warlock": PlayerClass.WARLOCK,
    "monk": PlayerClass.MONK,
    "druid": PlayerClass.DRUID,
    "demonhunter": PlayerClass.DEMON_HUNTER,
    "evoker": PlayerClass.EVOKER,
}

# (class, spec name) -> specialisation id
SPEC_IDS: Dict[tuple, int] = {
    (PlayerClass.MAGE, "arcane"): 62,
    (PlayerClass.MAGE, "fire"): 63,
    (PlayerClass.MAGE, "frost"): 64,
    (PlayerClass.PALADIN, "holy"): 65,
    (PlayerClass.PALADIN, "protection"): 66,
    (PlayerClass.PALADIN, "retribution"): 70,
    (PlayerClass.WARRIOR, "arms"): 71,
    (PlayerClass.WARRIOR, "fury"): 72,
    (PlayerClass.WARRIOR, "protection"): 73,
    (PlayerClass.DRUID, "balance"): 102,
    (PlayerClass.DRUID, "feral"): 103,
    (PlayerClass.DRUID, "guardian"): 104,
    (PlayerClass.DRUID, "restoration"): 105,
    (PlayerClass.DEATH_KNIGHT, "blood"): 250,
    (PlayerClass.DEATH_KNIGHT, "frost"): 251,
    (PlayerClass.DEATH_KNIGHT, "unholy"): 252,
    (PlayerClass.HUNTER, "beast_mastery"): 253,
    (PlayerClass.HUNTER, "marksmanship"): 254,
    (PlayerClass.HUNTER, "survival"): 255,
    (PlayerClass.PRIEST, "discipline"): 256,
    (PlayerClass.PRIEST, "holy"): 257,
    (PlayerClass.PRIEST, "shadow"): 258,
    (PlayerClass.ROGUE, "assassination"): 259,
    (PlayerClass.ROGUE, "outlaw"): 260,
    (PlayerClass.ROGUE, "subtlety"): 261,
    (PlayerClass.SHAMAN, "elemental"): 262,
    (PlayerClass.SHAMAN, "enhancement"): 263,
    (PlayerClass.SHAMAN, "restoration"): 264,
    (PlayerClass.WARLOCK, "affliction"): 265,
    (PlayerClass.WARLOCK, "demonology"): 266,
    (PlayerClass.WARLOCK, "destruction"): 267,
    (PlayerClass.MONK, "brewmaster"): 268,
    (PlayerClass.MONK, "windwalker"): 269,
    (PlayerClass.MONK, "mistweaver"): 270,
    (PlayerClass.DEMON_HUNTER, "havoc"): 577,
    (PlayerClass.DEMON_HUNTER, "vengeance"): 581,
    (PlayerClass.EVOKER, "devastation"): 1467,
    (PlayerClass.EVOKER, "preservation"): 1468,
}

RACE_IDS: Dict[str, int] = {
    "human": 1,
    "orc": 2,
    "dwarf": 3,
    "night_elf": 4,
    "undead": 5,
    "tauren": 6,
    "gnome": 7,
    "troll": 8,
    "goblin": 9,
    "blood_elf": 10,
    "draenei": 11,
    "worgen": 22,
    "pandaren": 24,
    "pandaren_alliance": 25,
    "pandaren_horde": 26,
    "nightborne": 27,
    "highmountain_tauren": 28,
    "void_elf": 29,
    "lightforged_draenei": 30,
    "zandalari_troll": 31,
    "kul_tiran": 32,
    "dark_iron_dwarf": 34,
    "vulpera": 35,
    "maghar_orc": 36,
    "mechagnome": 37,
}


def spec_id_for(player_class: Optional[PlayerClass], spec: str) -> int:
    """Resolve a spec name for a class, 0 when unknown."""
    if player_class is None or not spec:
        return 0
    return SPEC_IDS.get((player_class, spec.strip().lower()), 0)


def enum_or_value(enum_type, value: int):
    """Convert a raw integer to `enum_type`, falling back to the int itself."""
    try:
        return enum_type(value)
    except ValueError:
        return value
