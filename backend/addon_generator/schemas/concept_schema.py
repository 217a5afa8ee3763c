"""
Concept Schema - content-expansion service output

The expansion service is asked for JSON in this shape, but nothing it
returns is trusted: every field is optional and leniently coerced, exactly
like the builder definitions.
"""
from typing import Annotated, Any, List, Optional

from pydantic import AliasChoices, BeforeValidator, Field

from addon_generator.schemas.definition_schema import (
    DefinitionModel,
    FoodSpec,
    HealthSpec,
    LenientBool,
    LenientInt,
    LenientMapping,
    LenientMappingList,
    LenientNumber,
    LenientText,
    LenientTextList,
    as_mapping,
    as_mapping_list,
)


class DamageStat(DefinitionModel):
    base: LenientNumber = Field(None, validation_alias=AliasChoices("base", "value"))
    type: LenientText = Field(None)


class EntityStats(DefinitionModel):
    health: Annotated[Optional[HealthSpec], BeforeValidator(as_mapping)] = Field(None)
    damage: Annotated[Optional[DamageStat], BeforeValidator(as_mapping)] = Field(None)
    armor: LenientNumber = Field(None)
    knockback_resistance: LenientNumber = Field(None)
    movement_speed: LenientNumber = Field(None)
    follow_range: LenientNumber = Field(None)
    attack_speed: LenientNumber = Field(None)


class EntityPhysics(DefinitionModel):
    width: LenientNumber = Field(None)
    height: LenientNumber = Field(None)
    scale: LenientNumber = Field(None)
    has_gravity: LenientBool = Field(None)
    can_fly: LenientBool = Field(None)
    can_swim: LenientBool = Field(None)


class ConceptBehavior(DefinitionModel):
    name: LenientText = Field(None, validation_alias=AliasChoices("name", "type"))
    priority: LenientInt = Field(None)
    description: LenientText = Field(None)
    params: LenientMapping = Field(None)


class LootDrop(DefinitionModel):
    item: LenientText = Field(None)
    chance: LenientNumber = Field(None)
    min_count: LenientInt = Field(None)
    max_count: LenientInt = Field(None)


class SpawnSettings(DefinitionModel):
    biomes: LenientTextList = Field(None)
    time: LenientText = Field(None, description="day | night | always")
    min_light: LenientInt = Field(None)
    max_light: LenientInt = Field(None)
    weight: LenientInt = Field(None)
    min_group: LenientInt = Field(None)
    max_group: LenientInt = Field(None)


def as_pattern(value: Any) -> Optional[List[str]]:
    """Crafting grid rows; spaces are significant, so rows are not stripped."""
    if not isinstance(value, (list, tuple)):
        return None
    rows = [row for row in value if isinstance(row, str) and row.strip()]
    return rows or None


class CraftingSpec(DefinitionModel):
    type: LenientText = Field(None, description="shaped | shapeless | smithing | none")
    ingredients: LenientTextList = Field(None)
    pattern: Annotated[Optional[List[str]], BeforeValidator(as_pattern)] = Field(None)
    result: LenientMapping = Field(None)


class ExpandedEntityConcept(DefinitionModel):
    identifier: LenientText = Field(None)
    display_name: LenientText = Field(None)
    description: LenientText = Field(None)
    entity_type: LenientText = Field(None, description="passive | neutral | hostile | boss | npc")
    stats: Annotated[Optional[EntityStats], BeforeValidator(as_mapping)] = Field(None)
    physics: Annotated[Optional[EntityPhysics], BeforeValidator(as_mapping)] = Field(None)
    behaviors: Annotated[List[ConceptBehavior], BeforeValidator(as_mapping_list)] = Field(default_factory=list)
    abilities: LenientMappingList = Field(default_factory=list)
    phases: LenientMappingList = Field(default_factory=list)
    loot: Annotated[List[LootDrop], BeforeValidator(as_mapping_list)] = Field(default_factory=list)
    spawn: Annotated[Optional[SpawnSettings], BeforeValidator(as_mapping)] = Field(None)
    sounds: LenientMapping = Field(None)
    visual: LenientMapping = Field(None)
    animations: LenientTextList = Field(None)
    family_types: LenientTextList = Field(None)


class ItemStats(DefinitionModel):
    damage: LenientNumber = Field(None)
    durability: LenientInt = Field(None)
    attack_speed: LenientNumber = Field(None)
    max_stack_size: LenientInt = Field(None)
    enchantability: LenientInt = Field(None)


class ExpandedItemConcept(DefinitionModel):
    identifier: LenientText = Field(None)
    display_name: LenientText = Field(None)
    description: LenientText = Field(None)
    item_type: LenientText = Field(None, description="weapon | tool | armor | food | throwable | material | special")
    stats: Annotated[Optional[ItemStats], BeforeValidator(as_mapping)] = Field(None)
    food: Annotated[Optional[FoodSpec], BeforeValidator(as_mapping)] = Field(None)
    abilities: LenientMappingList = Field(default_factory=list)
    crafting: Annotated[Optional[CraftingSpec], BeforeValidator(as_mapping)] = Field(None)
    visual: LenientMapping = Field(None)
    category: LenientText = Field(None)
    creative_group: LenientText = Field(None)


class BlockProperties(DefinitionModel):
    hardness: LenientNumber = Field(None)
    blast_resistance: LenientNumber = Field(None)
    friction: LenientNumber = Field(None)
    light_emission: LenientInt = Field(None, validation_alias=AliasChoices("light_emission", "lightEmission", "lightLevel"))
    flammable: LenientBool = Field(None)
    map_color: LenientText = Field(None)


class BlockStateSpec(DefinitionModel):
    name: LenientText = Field(None)
    values: Optional[List[Any]] = Field(None)
    default: Optional[Any] = Field(None)


class ExpandedBlockConcept(DefinitionModel):
    identifier: LenientText = Field(None)
    display_name: LenientText = Field(None)
    description: LenientText = Field(None)
    block_type: LenientText = Field(None)
    properties: Annotated[Optional[BlockProperties], BeforeValidator(as_mapping)] = Field(None)
    states: Annotated[List[BlockStateSpec], BeforeValidator(as_mapping_list)] = Field(default_factory=list)
    loot: LenientMapping = Field(None)
    crafting: Annotated[Optional[CraftingSpec], BeforeValidator(as_mapping)] = Field(None)
    visual: LenientMapping = Field(None)
    sound: LenientText = Field(None)
    category: LenientText = Field(None)


class ExpandedConcept(DefinitionModel):
    """Top-level expansion result"""
    original_concept: LenientText = Field(None)
    expanded_description: LenientText = Field(None)
    concept_type: LenientText = Field(None, description="entity | item | block")
    quality_score: LenientNumber = Field(None)
    entity: Annotated[Optional[ExpandedEntityConcept], BeforeValidator(as_mapping)] = Field(None)
    item: Annotated[Optional[ExpandedItemConcept], BeforeValidator(as_mapping)] = Field(None)
    block: Annotated[Optional[ExpandedBlockConcept], BeforeValidator(as_mapping)] = Field(None)
    design_notes: LenientTextList = Field(None)
    balance_considerations: LenientTextList = Field(None)


__all__ = [
    "ExpandedConcept",
    "ExpandedEntityConcept",
    "ExpandedItemConcept",
    "ExpandedBlockConcept",
    "EntityStats",
    "EntityPhysics",
    "ConceptBehavior",
    "LootDrop",
    "SpawnSettings",
    "CraftingSpec",
    "ItemStats",
    "BlockProperties",
    "BlockStateSpec",
]
