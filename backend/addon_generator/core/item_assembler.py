"""
Item Assembler - ItemDefinition → item behavior record

Components are emitted only for fields the definition actually carries;
the icon and menu category are the only invented values.
"""
import copy
import logging
from typing import Any, Dict, Mapping, Tuple, Union

from config import BEHAVIOR_FORMAT_VERSION
from addon_generator.schemas import IRItem, ItemDefinition
from addon_generator.core.identifiers import base_name, is_safe_name, qualify_identifier

logger = logging.getLogger(__name__)


DEFAULT_MAX_STACK_SIZE = 64
EQUIPMENT_ITEM_TYPES = ("weapon", "tool")


class ItemAssemblyError(Exception):
    """Raised when an item definition cannot be resolved"""
    pass


def coerce_item(definition: Union[ItemDefinition, Mapping[str, Any]]) -> ItemDefinition:
    if isinstance(definition, ItemDefinition):
        return definition.model_copy(deep=True)
    return ItemDefinition.model_validate(copy.deepcopy(dict(definition)))


def derive_category(definition: ItemDefinition) -> str:
    """Explicit category wins; weapons and tools go to 'equipment', the rest to 'items'."""
    if definition.category:
        return definition.category
    if definition.item_type and definition.item_type.lower() in EQUIPMENT_ITEM_TYPES:
        return "equipment"
    return "items"


def resolve_item(definition: ItemDefinition, namespace: str) -> IRItem:
    identifier = qualify_identifier(definition.identifier, namespace)
    base = base_name(identifier)
    if not base:
        raise ItemAssemblyError(f"Item identifier '{definition.identifier}' has an empty name")
    if not is_safe_name(base):
        raise ItemAssemblyError(
            f"Item identifier '{definition.identifier}' is not a valid file name (letters, digits, _ . -)"
        )

    icon = definition.icon or base
    components: Dict[str, Any] = {"minecraft:icon": {"texture": icon}}

    if definition.display_name:
        components["minecraft:display_name"] = {"value": definition.display_name}

    if definition.max_stack_size and definition.max_stack_size != DEFAULT_MAX_STACK_SIZE:
        components["minecraft:max_stack_size"] = definition.max_stack_size

    if definition.durability and definition.durability.max is not None:
        durability: Dict[str, Any] = {"max_durability": definition.durability.max}
        if definition.durability.damage_chance:
            durability["damage_chance"] = definition.durability.damage_chance
        components["minecraft:durability"] = durability

    if definition.damage:
        damage = definition.damage
        components["minecraft:damage"] = {"value": int(damage) if float(damage).is_integer() else damage}

    if definition.food:
        food = definition.food
        food_component: Dict[str, Any] = {}
        if food.nutrition is not None:
            food_component["nutrition"] = food.nutrition
        if food.saturation is not None:
            food_component["saturation_modifier"] = food.saturation
        food_component["can_always_eat"] = bool(food.can_always_eat)
        components["minecraft:food"] = food_component

    if definition.additional_components:
        components.update(definition.additional_components)

    logger.debug(f"[ItemAssembler] Resolved {identifier} ({len(components)} components)")
    return IRItem(
        identifier=identifier,
        base_name=base,
        icon=icon,
        category=derive_category(definition),
        group=definition.group,
        components=components,
    )


def emit_item_record(ir: IRItem) -> Dict[str, Any]:
    """Behavior-pack item file (items/<name>.json)"""
    menu_category: Dict[str, Any] = {"category": ir.category}
    if ir.group:
        menu_category["group"] = ir.group

    return {
        "format_version": BEHAVIOR_FORMAT_VERSION,
        "minecraft:item": {
            "description": {
                "identifier": ir.identifier,
                "menu_category": menu_category,
            },
            "components": copy.deepcopy(ir.components),
        },
    }


def item_texture_entry(ir: IRItem) -> Tuple[str, Dict[str, str]]:
    """(key, entry) for textures/item_texture.json"""
    return ir.base_name, {"textures": f"textures/items/{ir.base_name}"}


def assemble_item(definition: Union[ItemDefinition, Mapping[str, Any]], namespace: str) -> Dict[str, Any]:
    """
    Assemble one item

    Raises:
        pydantic.ValidationError: If the identifier is missing
    """
    return emit_item_record(resolve_item(coerce_item(definition), namespace))


__all__ = [
    "ItemAssemblyError",
    "coerce_item",
    "derive_category",
    "resolve_item",
    "emit_item_record",
    "item_texture_entry",
    "assemble_item",
]
