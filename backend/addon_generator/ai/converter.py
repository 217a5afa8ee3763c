"""
Concept Converter - ExpandedConcept → builder definitions

Responsibilities:
- Map entity stats/physics/behaviors onto an entity definition
- Turn the loot list into a loot table and the spawn block into spawn rules
- Map item stats and crafting onto an item definition and a recipe
- Map block properties and states onto a block definition

Anything the concept leaves out is left out here too; the assemblers
apply defaults.
"""
import logging
import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from addon_generator.schemas import (
    ExpandedBlockConcept,
    ExpandedConcept,
    ExpandedEntityConcept,
    ExpandedItemConcept,
)
from addon_generator.schemas.concept_schema import CraftingSpec, LootDrop, SpawnSettings
from addon_generator.core.identifiers import base_name, qualify_identifier

logger = logging.getLogger(__name__)


RECIPE_FORMAT_VERSION = "1.20.10"
SPAWN_RULES_FORMAT_VERSION = "1.8.0"
DEFAULT_ENTITY_ID = "custom_entity"
DEFAULT_ITEM_ID = "custom_item"
DEFAULT_BLOCK_ID = "custom_block"


class ConvertedDefinitions(BaseModel):
    """Builder-ready definitions derived from one concept"""
    entities: List[Dict[str, Any]] = Field(default_factory=list)
    items: List[Dict[str, Any]] = Field(default_factory=list)
    blocks: List[Dict[str, Any]] = Field(default_factory=list)
    recipes: List[Dict[str, Any]] = Field(default_factory=list)


def _slug(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    slug = re.sub(r"[^a-z0-9_]+", "_", text.lower()).strip("_")
    return slug or None


def _identifier(raw: Optional[str], display_name: Optional[str], fallback: str, namespace: Optional[str]) -> str:
    if raw and ":" in raw:
        prefix, local = raw.split(":", 1)
        identifier = f"{prefix}:{_slug(local) or fallback}"
    else:
        identifier = _slug(raw) or _slug(display_name) or fallback
    return qualify_identifier(identifier, namespace) if namespace else identifier


def _drop_none(values: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


# === Entity ===

def loot_table_from_drops(drops: List[LootDrop]) -> Optional[Dict[str, Any]]:
    """One pool per drop so each drop chance is independent"""
    pools = []
    for drop in drops:
        if not drop.item:
            continue
        entry: Dict[str, Any] = {"type": "item", "name": drop.item, "weight": 1}
        min_count = drop.min_count if drop.min_count is not None else 1
        max_count = drop.max_count if drop.max_count is not None else min_count
        if (min_count, max_count) != (1, 1):
            entry["functions"] = [
                {"function": "set_count", "count": {"min": min_count, "max": max(min_count, max_count)}}
            ]
        pool: Dict[str, Any] = {"rolls": 1, "entries": [entry]}
        if drop.chance is not None and drop.chance < 1:
            pool["conditions"] = [{"condition": "random_chance", "chance": max(drop.chance, 0)}]
        pools.append(pool)
    return {"pools": pools} if pools else None


def spawn_rules_from_settings(identifier: str, spawn: SpawnSettings) -> Dict[str, Any]:
    condition: Dict[str, Any] = {
        "minecraft:spawns_on_surface": {},
        "minecraft:brightness_filter": {
            "min": spawn.min_light if spawn.min_light is not None else 0,
            "max": spawn.max_light if spawn.max_light is not None else 15,
            "adjust_for_weather": True,
        },
        "minecraft:weight": {"default": spawn.weight if spawn.weight is not None else 50},
        "minecraft:herd": {
            "min_size": spawn.min_group if spawn.min_group is not None else 1,
            "max_size": spawn.max_group if spawn.max_group is not None else 1,
        },
    }
    if spawn.biomes:
        condition["minecraft:biome_filter"] = {
            "any_of": [
                {"test": "has_biome_tag", "operator": "==", "value": biome}
                for biome in spawn.biomes
            ]
        }
    population = "monster" if spawn.time == "night" else "animal"
    return {
        "format_version": SPAWN_RULES_FORMAT_VERSION,
        "minecraft:spawn_rules": {
            "description": {"identifier": identifier, "population_control": population},
            "conditions": [condition],
        },
    }


def convert_entity(concept: ExpandedEntityConcept, namespace: Optional[str] = None) -> Dict[str, Any]:
    identifier = _identifier(concept.identifier, concept.display_name, DEFAULT_ENTITY_ID, namespace)
    stats = concept.stats
    physics = concept.physics
    definition: Dict[str, Any] = {"identifier": identifier}

    if stats and stats.health:
        definition["health"] = _drop_none({"value": stats.health.value, "max": stats.health.max})

    can_fly = bool(physics and physics.can_fly)
    movement = _drop_none({
        "value": stats.movement_speed if stats else None,
        "type": "fly" if can_fly else "basic",
    })
    definition["movement"] = movement

    if stats and stats.damage and stats.damage.base is not None:
        definition["attack"] = {"damage": stats.damage.base}

    if physics:
        box = _drop_none({"width": physics.width, "height": physics.height})
        if box:
            definition["collision_box"] = box
        if physics.has_gravity is not None:
            definition["physics"] = physics.has_gravity

    if concept.family_types:
        definition["family_types"] = list(concept.family_types)

    definition["behaviors"] = [
        _drop_none({"name": b.name, "priority": b.priority, "params": b.params})
        for b in concept.behaviors
        if b.name
    ]

    loot_table = loot_table_from_drops(concept.loot)
    if loot_table:
        definition["loot_table"] = loot_table
        definition["additional_components"] = {
            "minecraft:loot": {"table": f"loot_tables/entities/{base_name(identifier)}.json"}
        }

    if concept.spawn and ":" in identifier:
        definition["spawn_rules"] = spawn_rules_from_settings(identifier, concept.spawn)

    return definition


# === Crafting ===

def recipe_from_crafting(result_identifier: str, crafting: CraftingSpec) -> Optional[Dict[str, Any]]:
    """Shaped when a pattern is given, shapeless otherwise; smithing/none yield nothing"""
    recipe_type = (crafting.type or "").lower()
    ingredients = crafting.ingredients or []
    if recipe_type not in ("shaped", "shapeless", "") or not ingredients:
        return None

    count = (crafting.result or {}).get("count", 1)
    result = {"item": result_identifier, "count": count if isinstance(count, int) and count > 0 else 1}
    description = {"identifier": f"{result_identifier}_recipe"}

    if crafting.pattern and recipe_type != "shapeless":
        symbols: List[str] = []
        for row in crafting.pattern:
            for symbol in row:
                if symbol != " " and symbol not in symbols:
                    symbols.append(symbol)
        if len(symbols) > len(ingredients):
            logger.warning(f"[Converter] Recipe for {result_identifier}: pattern uses more symbols than ingredients")
            return None
        return {
            "format_version": RECIPE_FORMAT_VERSION,
            "minecraft:recipe_shaped": {
                "description": description,
                "tags": ["crafting_table"],
                "pattern": list(crafting.pattern),
                "key": {symbol: {"item": ingredients[i]} for i, symbol in enumerate(symbols)},
                "result": result,
            },
        }

    return {
        "format_version": RECIPE_FORMAT_VERSION,
        "minecraft:recipe_shapeless": {
            "description": description,
            "tags": ["crafting_table"],
            "ingredients": [{"item": ingredient} for ingredient in ingredients],
            "result": result,
        },
    }


# === Item / Block ===

def convert_item(concept: ExpandedItemConcept, namespace: Optional[str] = None) -> Dict[str, Any]:
    identifier = _identifier(concept.identifier, concept.display_name, DEFAULT_ITEM_ID, namespace)
    stats = concept.stats
    definition: Dict[str, Any] = _drop_none({
        "identifier": identifier,
        "display_name": concept.display_name,
        "item_type": concept.item_type,
        "category": concept.category,
        "group": concept.creative_group,
    })

    if stats:
        if stats.max_stack_size is not None:
            definition["max_stack_size"] = stats.max_stack_size
        if stats.durability:
            definition["durability"] = {"max": stats.durability}
        if stats.damage:
            definition["damage"] = stats.damage

    if concept.food:
        definition["food"] = _drop_none({
            "nutrition": concept.food.nutrition,
            "saturation": concept.food.saturation,
            "can_always_eat": concept.food.can_always_eat,
        })

    return definition


def convert_block(concept: ExpandedBlockConcept, namespace: Optional[str] = None) -> Dict[str, Any]:
    identifier = _identifier(concept.identifier, concept.display_name, DEFAULT_BLOCK_ID, namespace)
    properties = concept.properties
    definition: Dict[str, Any] = _drop_none({
        "identifier": identifier,
        "sound": concept.sound,
        "category": concept.category,
    })

    if properties:
        definition.update(_drop_none({
            "destructible_by_mining": properties.hardness,
            "destructible_by_explosion": properties.blast_resistance,
            "friction": properties.friction,
            "light_emission": properties.light_emission,
            "map_color": properties.map_color,
        }))

    states = {
        state.name: list(state.values)
        for state in concept.states
        if state.name and state.values
    }
    if states:
        definition["states"] = states

    return definition


def to_definitions(expanded: ExpandedConcept, namespace: Optional[str] = None) -> ConvertedDefinitions:
    """
    Convert an expanded concept into builder definitions

    Args:
        expanded: Concept from ConceptExpander.expand()
        namespace: Used to qualify bare identifiers (recipes and spawn
            rules need qualified ones)

    Returns:
        ConvertedDefinitions
    """
    converted = ConvertedDefinitions()

    if expanded.entity:
        converted.entities.append(convert_entity(expanded.entity, namespace))

    if expanded.item:
        item = convert_item(expanded.item, namespace)
        converted.items.append(item)
        if expanded.item.crafting and ":" in item["identifier"]:
            recipe = recipe_from_crafting(item["identifier"], expanded.item.crafting)
            if recipe:
                converted.recipes.append(recipe)

    if expanded.block:
        block = convert_block(expanded.block, namespace)
        converted.blocks.append(block)
        if expanded.block.crafting and ":" in block["identifier"]:
            recipe = recipe_from_crafting(block["identifier"], expanded.block.crafting)
            if recipe:
                converted.recipes.append(recipe)

    logger.info(
        f"[Converter] {len(converted.entities)} entities, {len(converted.items)} items, "
        f"{len(converted.blocks)} blocks, {len(converted.recipes)} recipes"
    )
    return converted


__all__ = [
    "ConvertedDefinitions",
    "to_definitions",
    "convert_entity",
    "convert_item",
    "convert_block",
    "loot_table_from_drops",
    "spawn_rules_from_settings",
    "recipe_from_crafting",
]
