"""
Block Assembler - BlockDefinition → block behavior record

Mining and explosion resistance are polymorphic in the target format:
a boolean passes through, a number becomes an object.
"""
import copy
import logging
from typing import Any, Dict, Mapping, Tuple, Union

from config import BEHAVIOR_FORMAT_VERSION
from addon_generator.schemas import BlockDefinition, IRBlock
from addon_generator.core.identifiers import base_name, is_safe_name, qualify_identifier

logger = logging.getLogger(__name__)


DEFAULT_BLOCK_CATEGORY = "construction"
DEFAULT_BLOCK_SOUND = "stone"


class BlockAssemblyError(Exception):
    """Raised when a block definition cannot be resolved"""
    pass


def coerce_block(definition: Union[BlockDefinition, Mapping[str, Any]]) -> BlockDefinition:
    if isinstance(definition, BlockDefinition):
        return definition.model_copy(deep=True)
    return BlockDefinition.model_validate(copy.deepcopy(dict(definition)))


def resolve_block(definition: BlockDefinition, namespace: str) -> IRBlock:
    identifier = qualify_identifier(definition.identifier, namespace)
    base = base_name(identifier)
    if not base:
        raise BlockAssemblyError(f"Block identifier '{definition.identifier}' has an empty name")
    if not is_safe_name(base):
        raise BlockAssemblyError(
            f"Block identifier '{definition.identifier}' is not a valid file name (letters, digits, _ . -)"
        )

    components: Dict[str, Any] = {}

    if definition.destructible_by_mining is not None:
        components["minecraft:destructible_by_mining"] = IRBlock.resistance_shape(
            definition.destructible_by_mining, "seconds_to_destroy"
        )
    if definition.destructible_by_explosion is not None:
        components["minecraft:destructible_by_explosion"] = IRBlock.resistance_shape(
            definition.destructible_by_explosion, "explosion_resistance"
        )
    if definition.friction is not None:
        components["minecraft:friction"] = definition.friction
    if definition.light_emission:
        components["minecraft:light_emission"] = definition.light_emission
    if definition.map_color:
        components["minecraft:map_color"] = definition.map_color
    if definition.geometry:
        components["minecraft:geometry"] = definition.geometry
    if definition.material_instances:
        components["minecraft:material_instances"] = definition.material_instances

    if definition.additional_components:
        components.update(definition.additional_components)

    logger.debug(f"[BlockAssembler] Resolved {identifier} ({len(components)} components)")
    return IRBlock(
        identifier=identifier,
        base_name=base,
        category=definition.category or DEFAULT_BLOCK_CATEGORY,
        group=definition.group,
        sound=definition.sound or DEFAULT_BLOCK_SOUND,
        states=definition.states or None,
        permutations=definition.permutations or None,
        components=components,
    )


def emit_block_record(ir: IRBlock) -> Dict[str, Any]:
    """Behavior-pack block file (blocks/<name>.json)"""
    menu_category: Dict[str, Any] = {"category": ir.category}
    if ir.group:
        menu_category["group"] = ir.group

    description: Dict[str, Any] = {
        "identifier": ir.identifier,
        "menu_category": menu_category,
    }
    if ir.states:
        description["states"] = copy.deepcopy(ir.states)

    body: Dict[str, Any] = {
        "description": description,
        "components": copy.deepcopy(ir.components),
    }
    if ir.permutations:
        body["permutations"] = copy.deepcopy(ir.permutations)

    return {"format_version": BEHAVIOR_FORMAT_VERSION, "minecraft:block": body}


def terrain_texture_entry(ir: IRBlock) -> Tuple[str, Dict[str, str]]:
    """(key, entry) for textures/terrain_texture.json"""
    return ir.base_name, {"textures": f"textures/blocks/{ir.base_name}"}


def block_sound_entry(ir: IRBlock) -> Tuple[str, Dict[str, str]]:
    """(key, entry) for the resource pack's blocks.json"""
    return ir.base_name, {"sound": ir.sound}


def assemble_block(definition: Union[BlockDefinition, Mapping[str, Any]], namespace: str) -> Dict[str, Any]:
    """
    Assemble one block

    Raises:
        pydantic.ValidationError: If the identifier is missing
    """
    return emit_block_record(resolve_block(coerce_block(definition), namespace))


__all__ = [
    "BlockAssemblyError",
    "coerce_block",
    "resolve_block",
    "emit_block_record",
    "terrain_texture_entry",
    "block_sound_entry",
    "assemble_block",
]
