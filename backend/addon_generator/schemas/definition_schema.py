"""
Definition Schema - Caller / AI Intent Format

These are the loosely-structured definitions the builder accepts. They are
usually produced by the content-expansion service, so any field except the
identifier may be missing, mistyped, or use non-canonical vocabulary.

Key principle: parsing a definition never fails because of a bad optional
field. A value of the wrong primitive type is coerced when that is
unambiguous and dropped otherwise. The Assemblers fill in defaults.

Definitions may also arrive in the concept shape the AI emits (stats under
`properties`, `physics` as an object, `aiGoals`). Those values are lifted
onto the flat fields unless the flat field is already present.
"""
import base64
import binascii
import math
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    model_validator,
)
from pydantic.alias_generators import to_camel

from config import DEFAULT_ADDON_VERSION, DEFAULT_MIN_ENGINE_VERSION


# === Lenient coercion helpers ===

def as_number(value: Any) -> Optional[float]:
    """Coerce to a finite number, or None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
        return parsed if math.isfinite(parsed) else None
    return None


def as_int(value: Any) -> Optional[int]:
    number = as_number(value)
    return int(number) if number is not None else None


def as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "yes"):
            return True
        if lowered in ("false", "no"):
            return False
    return None


def as_text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def as_mapping(value: Any) -> Any:
    """Keep mappings (and already-built models), drop everything else."""
    if isinstance(value, (dict, BaseModel)):
        return value
    return None


def as_text_list(value: Any) -> Optional[List[str]]:
    if value is None:
        return None
    if not isinstance(value, (list, tuple)):
        value = [value]
    texts = [as_text(v) for v in value]
    return [t for t in texts if t is not None]


def as_mapping_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        value = [value]
    return [v for v in value if isinstance(v, (dict, BaseModel))]


def as_behavior_list(value: Any) -> List[Any]:
    """Behaviors may arrive as bare names, mappings, or a single entry."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        value = [value]
    entries = []
    for entry in value:
        if isinstance(entry, str):
            entries.append({"name": entry})
        elif isinstance(entry, (dict, BaseModel)):
            entries.append(entry)
    return entries


def as_resistance(value: Any) -> Optional[Union[bool, float]]:
    """Boolean passthrough or numeric threshold."""
    flag = as_bool(value)
    if flag is not None:
        return flag
    number = as_number(value)
    return float(number) if number is not None else None


def as_durability(value: Any) -> Any:
    number = as_number(value)
    if number is not None:
        return {"max": number}
    return as_mapping(value)


def as_saturation(value: Any) -> Optional[Union[float, str]]:
    number = as_number(value)
    if number is not None:
        return number
    return as_text(value)


def as_binary(value: Any) -> Optional[bytes]:
    """Raw bytes or a base64 string."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str) and value.strip():
        try:
            return base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError):
            return None
    return None


LenientNumber = Annotated[Optional[float], BeforeValidator(as_number)]
LenientInt = Annotated[Optional[int], BeforeValidator(as_int)]
LenientBool = Annotated[Optional[bool], BeforeValidator(as_bool)]
LenientText = Annotated[Optional[str], BeforeValidator(as_text)]
LenientTextList = Annotated[Optional[List[str]], BeforeValidator(as_text_list)]
LenientMapping = Annotated[Optional[Dict[str, Any]], BeforeValidator(as_mapping)]
LenientMappingList = Annotated[List[Dict[str, Any]], BeforeValidator(as_mapping_list)]
Resistance = Annotated[Optional[Union[bool, float]], BeforeValidator(as_resistance)]
Identifier = Annotated[str, BeforeValidator(as_text), Field(min_length=1)]


# === Concept shape ===

def _present(data: Dict[str, Any], field_name: str) -> bool:
    return field_name in data or to_camel(field_name) in data


def lift_nested(data: Dict[str, Any], container: str, fields: Dict[str, str]) -> None:
    """Copy data[container][source] to data[target] for each target not already set."""
    nested = data.get(container)
    if not isinstance(nested, dict):
        return
    for source, target in fields.items():
        if source in nested and not _present(data, target):
            data[target] = nested[source]


def lift_entity_concept(data: Dict[str, Any]) -> Dict[str, Any]:
    data = dict(data)
    lift_nested(data, "properties", {"health": "health", "movement": "movement", "attack": "attack"})

    physics = data.get("physics")
    if isinstance(physics, dict):
        if not _present(data, "collision_box"):
            box = physics.get("collisionBox", physics.get("collision_box"))
            if box is not None:
                data["collision_box"] = box
        gravity = physics.get("hasGravity", physics.get("has_gravity"))
        data["physics"] = gravity is not False

    if not data.get("behaviors") and data.get("aiGoals"):
        data["behaviors"] = data["aiGoals"]

    if str(data.get("entityType", data.get("entity_type")) or "").lower() == "boss":
        movement = data.get("movement")
        data["movement"] = {**(movement if isinstance(movement, dict) else {}), "type": "fly"}
    return data


def lift_item_concept(data: Dict[str, Any]) -> Dict[str, Any]:
    data = dict(data)
    lift_nested(data, "properties", {
        "maxStackSize": "max_stack_size",
        "maxDurability": "durability",
        "damage": "damage",
    })
    return data


def lift_block_concept(data: Dict[str, Any]) -> Dict[str, Any]:
    data = dict(data)
    lift_nested(data, "properties", {
        "hardness": "destructible_by_mining",
        "blastResistance": "destructible_by_explosion",
        "friction": "friction",
        "lightLevel": "light_emission",
        "lightEmission": "light_emission",
        "mapColor": "map_color",
    })
    return data


class DefinitionModel(BaseModel):
    """Accepts snake_case and the camelCase spelling used by the AI output."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# === Addon ===

class AddonConfig(DefinitionModel):
    """Identity and versioning for the whole bundle"""
    name: str = Field(..., min_length=1, description="Display name, also used for the _BP/_RP folders")
    namespace: str = Field(..., min_length=1, description="Identifier namespace (validated at the HTTP boundary)")
    description: Optional[str] = Field(None)
    version: str = Field(DEFAULT_ADDON_VERSION)
    min_engine_version: str = Field(DEFAULT_MIN_ENGINE_VERSION)
    authors: Optional[List[str]] = Field(None)
    pack_icon: Annotated[Optional[bytes], BeforeValidator(as_binary)] = Field(
        None, description="PNG bytes (or base64) written as pack_icon.png in both packs"
    )


# === Entity ===

class HealthSpec(DefinitionModel):
    value: LenientNumber = Field(None, validation_alias=AliasChoices("value", "base"))
    max: LenientNumber = Field(None)


class MovementSpec(DefinitionModel):
    value: LenientNumber = Field(None, validation_alias=AliasChoices("value", "speed"))
    type: LenientText = Field(None, validation_alias=AliasChoices("type", "mode"))


class AttackSpec(DefinitionModel):
    damage: LenientNumber = Field(None)


class CollisionBoxSpec(DefinitionModel):
    width: LenientNumber = Field(None)
    height: LenientNumber = Field(None)


class BehaviorEntry(DefinitionModel):
    """One AI goal as emitted by the caller; the name is free text."""
    name: LenientText = Field(None, validation_alias=AliasChoices("type", "name"))
    priority: LenientInt = Field(None)
    params: LenientMapping = Field(None, validation_alias=AliasChoices("params", "parameters"))


class EntityDefinition(DefinitionModel):
    """Specification for a creature/mob"""
    identifier: Identifier = Field(..., description="Bare ('golem') or qualified ('ns:golem')")
    is_spawnable: LenientBool = Field(None)
    is_summonable: LenientBool = Field(None)
    is_experimental: LenientBool = Field(None)

    # Simulation
    health: Annotated[Optional[HealthSpec], BeforeValidator(as_mapping)] = Field(None)
    movement: Annotated[Optional[MovementSpec], BeforeValidator(as_mapping)] = Field(None)
    physics: LenientBool = Field(None, description="has_gravity flag")
    collision_box: Annotated[Optional[CollisionBoxSpec], BeforeValidator(as_mapping)] = Field(None)
    family_types: LenientTextList = Field(
        None, validation_alias=AliasChoices("family_types", "familyTypes", "family")
    )
    attack: Annotated[Optional[AttackSpec], BeforeValidator(as_mapping)] = Field(None)
    behaviors: Annotated[List[BehaviorEntry], BeforeValidator(as_behavior_list)] = Field(default_factory=list)
    component_groups: LenientMapping = Field(None)
    events: LenientMapping = Field(None)
    additional_components: LenientMapping = Field(None, description="Merged verbatim, wins over derived defaults")

    # Visuals
    materials: LenientMapping = Field(None)
    textures: LenientMapping = Field(None)
    geometry: LenientMapping = Field(None, description="Full geometry file, added to the resource pack")
    geometry_references: LenientMapping = Field(None)
    animations: LenientMappingList = Field(default_factory=list)
    animation_controllers: LenientMappingList = Field(default_factory=list)
    render_controller: LenientMapping = Field(None)
    render_controller_references: LenientTextList = Field(None)
    spawn_egg: LenientMapping = Field(None)

    # Attached data files
    loot_table: LenientMapping = Field(None)
    spawn_rules: LenientMapping = Field(None)

    @model_validator(mode="before")
    @classmethod
    def lift_concept_shape(cls, data: Any) -> Any:
        return lift_entity_concept(data) if isinstance(data, dict) else data


# === Item ===

class DurabilitySpec(DefinitionModel):
    max: LenientInt = Field(None)
    damage_chance: LenientMapping = Field(None)


class FoodSpec(DefinitionModel):
    nutrition: LenientInt = Field(None)
    saturation: Annotated[Optional[Union[float, str]], BeforeValidator(as_saturation)] = Field(
        None, validation_alias=AliasChoices("saturation", "saturation_modifier", "saturationModifier")
    )
    can_always_eat: LenientBool = Field(None)


class ItemDefinition(DefinitionModel):
    """Specification for a custom item"""
    identifier: Identifier = Field(...)
    display_name: LenientText = Field(None)
    icon: LenientText = Field(None)
    category: LenientText = Field(None, description="Menu category; derived from item_type when absent")
    group: LenientText = Field(None)
    item_type: LenientText = Field(None, validation_alias=AliasChoices("item_type", "itemType"))
    max_stack_size: LenientInt = Field(None)
    durability: Annotated[Optional[DurabilitySpec], BeforeValidator(as_durability)] = Field(None)
    damage: LenientNumber = Field(None)
    food: Annotated[Optional[FoodSpec], BeforeValidator(as_mapping)] = Field(None)
    additional_components: LenientMapping = Field(None)

    @model_validator(mode="before")
    @classmethod
    def lift_concept_shape(cls, data: Any) -> Any:
        return lift_item_concept(data) if isinstance(data, dict) else data


# === Block ===

class BlockDefinition(DefinitionModel):
    """Specification for a custom block"""
    identifier: Identifier = Field(...)
    category: LenientText = Field(None)
    group: LenientText = Field(None)
    destructible_by_mining: Resistance = Field(None, description="False = indestructible, number = seconds to destroy")
    destructible_by_explosion: Resistance = Field(None, description="False = blast proof, number = resistance")
    friction: LenientNumber = Field(None)
    light_emission: LenientInt = Field(None)
    map_color: LenientText = Field(None)
    geometry: LenientText = Field(None)
    material_instances: LenientMapping = Field(None)
    states: LenientMapping = Field(None)
    permutations: LenientMappingList = Field(default_factory=list)
    sound: LenientText = Field(None)
    additional_components: LenientMapping = Field(None)

    @model_validator(mode="before")
    @classmethod
    def lift_concept_shape(cls, data: Any) -> Any:
        return lift_block_concept(data) if isinstance(data, dict) else data


__all__ = [
    "AddonConfig",
    "EntityDefinition",
    "HealthSpec",
    "MovementSpec",
    "AttackSpec",
    "CollisionBoxSpec",
    "BehaviorEntry",
    "ItemDefinition",
    "DurabilitySpec",
    "FoodSpec",
    "BlockDefinition",
    "as_binary",
]
