"""
Behavior Normalizer - Free Text → Canonical Behavior Id

Responsibilities:
- Hold the closed set of engine-recognized AI goal names
- Map the synonyms the content-expansion service emits onto that set
- Resolve anything else deterministically, or report "no match"

Unknown names never raise. The assemblers drop them.
"""
import logging
import re
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)


VALID_BEHAVIORS: Tuple[str, ...] = (
    "float",
    "panic",
    "mount_pathing",
    "breed",
    "tempt",
    "follow_parent",
    "random_stroll",
    "random_look_around",
    "look_at_player",
    "hurt_by_target",
    "nearest_attackable_target",
    "melee_attack",
    "ranged_attack",
    "leap_at_target",
    "ocelot_sit_on_block",
    "stay_while_sitting",
    "follow_owner",
    "owner_hurt_by_target",
    "owner_hurt_target",
    "random_swim",
    "move_to_water",
    "avoid_mob_type",
    "flee_sun",
    "restrict_sun",
    "restrict_open_door",
    "door_interact",
    "break_door",
    "move_towards_target",
    "move_towards_restriction",
    "random_fly",
    "circle_around_anchor",
    "swoop_attack",
    "charge_attack",
    "stomp_attack",
    "knockback_roar",
    "stalk_and_pounce",
    "delayed_attack",
    "snacking",
    "slime_attack",
    "swim_idle",
    "swim_wander",
    "player_ride_tamed",
    "skeleton_horse_trap",
    "move_to_land",
    "lay_egg",
    "lay_down",
    "inspect_bookshelf",
    "explore_outskirts",
    "defend_trusted_target",
    "find_cover",
    "enderman_leave_block",
    "enderman_take_block",
    "drop_item_for",
    "send_event",
    "charge_held_item",
    "eat_carried_item",
    "pickup_items",
    "share_items",
    "barter",
    "admire_item",
    "celebrate",
    "celebrate_survive",
    "equip_item",
    "go_home",
    "stay_near_noteblock",
    "summon_entity",
    "timer_flag_1",
    "timer_flag_2",
    "timer_flag_3",
    "random_sitting",
    "follow_mob",
    "move_to_village",
    "move_to_poi",
    "work",
    "work_composter",
    "mingle",
    "sleep",
    "nap",
    "rise_to_liquid_level",
    "squid_idle",
    "squid_move_away_from_ground",
    "squid_flee",
    "squid_out_of_water",
    "guardian_attack",
    "silverfish_merge_with_stone",
    "silverfish_wake_up_friends",
    "wither_random_attack_pos_goal",
    "wither_target_highest_damage",
    "dragonchargeplayer",
    "dragondeath",
    "dragonflaming",
    "dragonholdingpattern",
    "dragonlanding",
    "dragonscanning",
    "dragonstrafeplayer",
    "dragontakeoff",
    "vex_copy_owner_target",
    "vex_random_move",
    "find_mount",
    "find_underwater_treasure",
    "move_to_block",
    "raid_garden",
    "ram_attack",
    "play",
    "follow_caravan",
    "roll",
    "stroll_towards_village",
    "move_indoors",
    "scared",
    "trade_interest",
    "trade_with_player",
)

_VALID_SET = frozenset(VALID_BEHAVIORS)

# Synonyms seen in generated content, already in normalized form
BEHAVIOR_ALIASES: Dict[str, str] = {
    "hover": "float",
    "fly": "random_fly",
    "fly_node_path": "random_fly",
    "flying": "random_fly",
    "attack": "melee_attack",
    "melee": "melee_attack",
    "ranged": "ranged_attack",
    "shoot": "ranged_attack",
    "fireball": "ranged_attack",
    "fireball_attack": "ranged_attack",
    "dragon_fireball_attack": "ranged_attack",
    "breath_attack": "ranged_attack",
    "fire_breath": "ranged_attack",
    "target": "nearest_attackable_target",
    "target_player": "nearest_attackable_target",
    "attack_player": "nearest_attackable_target",
    "chase_player": "nearest_attackable_target",
    "retaliate": "hurt_by_target",
    "wander": "random_stroll",
    "stroll": "random_stroll",
    "walk": "random_stroll",
    "look": "random_look_around",
    "look_around": "random_look_around",
    "swim": "random_swim",
    "run_away": "panic",
    "flee": "panic",
    "follow_player": "follow_mob",
    "dragon_strafe_player": "dragonstrafeplayer",
    "dragon_charge_player": "dragonchargeplayer",
    "dragon_holding_pattern": "dragonholdingpattern",
    "dragon_takeoff": "dragontakeoff",
    "dragon_landing": "dragonlanding",
    "dragon_flaming": "dragonflaming",
    "dragon_scanning": "dragonscanning",
    "dragon_death": "dragondeath",
}

_SEPARATORS = re.compile(r"[\s\-]+")
_PREFIXES = ("minecraft:", "behavior.")
_MIN_FALLBACK_LENGTH = 3


def canonicalize(raw_name: str) -> str:
    """Lowercase, collapse hyphen/whitespace runs to '_', strip known prefixes."""
    name = _SEPARATORS.sub("_", raw_name.strip().lower())
    for prefix in _PREFIXES:
        if name.startswith(prefix):
            name = name[len(prefix):]
    return name


def _fallback(name: str) -> Optional[str]:
    """
    Substring match against the valid set.

    Valid names contained in the input win first (longest first); then
    valid names containing the input (shortest first). Ties keep
    declaration order.
    """
    if len(name) < _MIN_FALLBACK_LENGTH:
        return None

    contained = [valid for valid in VALID_BEHAVIORS if valid in name]
    if contained:
        return max(contained, key=len)

    containing = [valid for valid in VALID_BEHAVIORS if name in valid]
    if containing:
        return min(containing, key=len)

    return None


def normalize_behavior(raw_name: Optional[str]) -> Optional[str]:
    """
    Resolve a free-form behavior name to a canonical behavior id.

    Args:
        raw_name: Name as emitted by the caller ("Hover", "wander", ...)

    Returns:
        Canonical id, or None when nothing plausible matches
    """
    if not isinstance(raw_name, str) or not raw_name.strip():
        return None

    name = canonicalize(raw_name)

    if name in BEHAVIOR_ALIASES:
        return BEHAVIOR_ALIASES[name]

    if name in _VALID_SET:
        return name

    match = _fallback(name)
    if match:
        logger.debug(f"[Normalizer] Fuzzy match: '{raw_name}' -> '{match}'")
    else:
        logger.debug(f"[Normalizer] No match for behavior '{raw_name}'")
    return match


__all__ = [
    "VALID_BEHAVIORS",
    "BEHAVIOR_ALIASES",
    "canonicalize",
    "normalize_behavior",
]
