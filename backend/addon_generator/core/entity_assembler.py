"""
Entity Assembler - EntityDefinition → (behavior record, client record)

Responsibilities:
- Qualify the identifier with the addon namespace
- Fill every simulation component with a complete default
- Pick the walk or fly movement/navigation pair
- Normalize behavior names, drop unknowns, collapse duplicates
- Backfill float, locomotion and look-around behaviors
- Infer the combat behaviors from a positive attack damage
- Build the client entity record with visual defaults

Resolution happens in two steps: definition → IREntity (all defaults
applied), then IREntity → JSON records. The emit step never guesses.
"""
import copy
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from config import BEHAVIOR_FORMAT_VERSION, CLIENT_ENTITY_FORMAT_VERSION
from addon_generator.schemas import EntityDefinition, IRBehavior, IREntity
from addon_generator.core.identifiers import base_name, is_safe_name, qualify_identifier
from addon_generator.core.normalizer import normalize_behavior

logger = logging.getLogger(__name__)


DEFAULT_HEALTH = 20
DEFAULT_MOVEMENT_SPEED = 0.3
DEFAULT_COLLISION_WIDTH = 0.6
DEFAULT_COLLISION_HEIGHT = 1.8
DEFAULT_ATTACK_DAMAGE = 5
DEFAULT_FAMILY = ["mob"]
DEFAULT_MATERIAL = "entity_alphatest"
DEFAULT_RENDER_CONTROLLER = "controller.render.default"
DEFAULT_SPAWN_EGG = {"base_color": "#4A90D9", "overlay_color": "#87CEEB"}

WALK_LOCOMOTION = "random_stroll"
FLY_LOCOMOTION = "random_fly"

# Backfilled goals, added only when the name is missing
FLOAT_BEHAVIOR = IRBehavior(name="float", priority=0)
WALK_BEHAVIOR = IRBehavior(name=WALK_LOCOMOTION, priority=6, params={"speed_multiplier": 1.0})
FLY_BEHAVIOR = IRBehavior(name=FLY_LOCOMOTION, priority=6, params={"xz_dist": 10, "y_dist": 7, "y_offset": 0})
LOOK_AROUND_BEHAVIOR = IRBehavior(name="random_look_around", priority=7)
LOOK_AT_PLAYER_BEHAVIOR = IRBehavior(name="look_at_player", priority=8, params={"look_distance": 8.0})

COMBAT_BEHAVIORS = (
    IRBehavior(name="melee_attack", priority=2, params={"speed_multiplier": 1.2, "track_target": True}),
    IRBehavior(
        name="nearest_attackable_target",
        priority=3,
        params={
            "must_see": True,
            "reselect_targets": True,
            "within_radius": 25.0,
            "entity_types": [
                {
                    "filters": {"test": "is_family", "subject": "other", "value": "player"},
                    "max_dist": 35,
                }
            ],
        },
    ),
    IRBehavior(name="hurt_by_target", priority=1),
)


class EntityAssemblyError(Exception):
    """Raised when an entity definition cannot be resolved"""
    pass


def coerce_entity(definition: Union[EntityDefinition, Mapping[str, Any]]) -> EntityDefinition:
    """Deep-copy and validate; the caller keeps no reference into the result."""
    if isinstance(definition, EntityDefinition):
        return definition.model_copy(deep=True)
    return EntityDefinition.model_validate(copy.deepcopy(dict(definition)))


def _resolve_behaviors(definition: EntityDefinition, flies: bool, hostile: bool) -> List[IRBehavior]:
    """
    Normalize caller behaviors, then backfill the mandatory ones.

    A caller locomotion goal of the wrong kind (stroll on a flyer, fly on a
    walker) is dropped; its priority is handed to the backfilled one.
    """
    locomotion = FLY_LOCOMOTION if flies else WALK_LOCOMOTION
    wrong_locomotion = WALK_LOCOMOTION if flies else FLY_LOCOMOTION

    resolved: List[IRBehavior] = []
    added = set()
    locomotion_priority: Optional[int] = None

    for entry in definition.behaviors:
        name = normalize_behavior(entry.name)
        if name is None:
            logger.info(f"[EntityAssembler] Dropping unknown behavior '{entry.name}'")
            continue
        if name in added:
            continue
        added.add(name)

        priority = entry.priority if entry.priority is not None else len(added)
        if name == wrong_locomotion:
            if locomotion_priority is None:
                locomotion_priority = priority
            continue

        params = dict(entry.params or {})
        resolved.append(IRBehavior(name=name, priority=priority, params=params))

    present = {behavior.name for behavior in resolved}

    def backfill(default: IRBehavior, priority: Optional[int] = None) -> None:
        if default.name in present:
            return
        behavior = default.model_copy(deep=True)
        if priority is not None:
            behavior.priority = priority
        resolved.append(behavior)
        present.add(behavior.name)

    backfill(FLOAT_BEHAVIOR)
    backfill(FLY_BEHAVIOR if flies else WALK_BEHAVIOR, locomotion_priority)
    backfill(LOOK_AROUND_BEHAVIOR)
    if not definition.behaviors:
        backfill(LOOK_AT_PLAYER_BEHAVIOR)

    if hostile:
        for combat in COMBAT_BEHAVIORS:
            backfill(combat)

    return resolved


def resolve_entity(definition: EntityDefinition, namespace: str) -> IREntity:
    """
    Resolve an entity definition into a complete IREntity

    Args:
        definition: Validated (lenient) entity definition
        namespace: Addon namespace used for bare identifiers

    Returns:
        IREntity with every default applied
    """
    identifier = qualify_identifier(definition.identifier, namespace)
    base = base_name(identifier)
    if not base:
        raise EntityAssemblyError(f"Entity identifier '{definition.identifier}' has an empty name")
    if not is_safe_name(base):
        raise EntityAssemblyError(
            f"Entity identifier '{definition.identifier}' is not a valid file name (letters, digits, _ . -)"
        )

    health = definition.health
    health_value = health.value if health and health.value is not None else DEFAULT_HEALTH
    health_max = health.max if health and health.max is not None else DEFAULT_HEALTH

    movement = definition.movement
    speed = movement.value if movement and movement.value is not None else DEFAULT_MOVEMENT_SPEED
    flies = bool(movement and movement.type and movement.type.lower() == "fly")

    box = definition.collision_box
    width = box.width if box and box.width is not None else DEFAULT_COLLISION_WIDTH
    height = box.height if box and box.height is not None else DEFAULT_COLLISION_HEIGHT

    attack_damage = None
    if definition.attack is not None:
        damage = definition.attack.damage
        attack_damage = damage if damage is not None else DEFAULT_ATTACK_DAMAGE

    supplied_controllers = (definition.render_controller or {}).get("render_controllers")
    render_controllers: List[Any]
    if definition.render_controller_references:
        render_controllers = list(definition.render_controller_references)
    elif isinstance(supplied_controllers, dict) and supplied_controllers:
        render_controllers = [next(iter(supplied_controllers))]
    else:
        render_controllers = [DEFAULT_RENDER_CONTROLLER]

    ir = IREntity(
        identifier=identifier,
        base_name=base,
        is_spawnable=definition.is_spawnable if definition.is_spawnable is not None else True,
        is_summonable=definition.is_summonable if definition.is_summonable is not None else True,
        is_experimental=bool(definition.is_experimental),
        health_value=health_value,
        health_max=health_max,
        movement_speed=speed,
        flies=flies,
        has_gravity=definition.physics if definition.physics is not None else True,
        collision_width=width,
        collision_height=height,
        family=list(definition.family_types) if definition.family_types else list(DEFAULT_FAMILY),
        attack_damage=attack_damage,
        component_groups=definition.component_groups or {},
        events=definition.events or {},
        additional_components=definition.additional_components or {},
        materials=definition.materials or {"default": DEFAULT_MATERIAL},
        textures=definition.textures or {"default": f"textures/entity/{base}"},
        geometry=definition.geometry_references or {"default": f"geometry.{base}"},
        render_controllers=render_controllers,
        spawn_egg=definition.spawn_egg or dict(DEFAULT_SPAWN_EGG),
    )
    ir.behaviors = _resolve_behaviors(definition, ir.flies, ir.is_hostile)
    return ir


def _number(value: float) -> Union[int, float]:
    """Keep whole numbers as ints in the emitted JSON."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def emit_behavior_record(ir: IREntity) -> Dict[str, Any]:
    """Server-side entity file (entities/<name>.json)"""
    components: Dict[str, Any] = {
        "minecraft:health": {"value": _number(ir.health_value), "max": _number(ir.health_max)},
        "minecraft:movement": {"value": ir.movement_speed},
    }

    if ir.flies:
        components["minecraft:movement.fly"] = {}
        components["minecraft:navigation.fly"] = {
            "can_path_over_water": True,
            "can_pass_doors": True,
            "can_path_from_air": True,
        }
    else:
        components["minecraft:movement.basic"] = {}
        components["minecraft:navigation.walk"] = {
            "can_path_over_water": False,
            "avoid_water": True,
            "can_pass_doors": True,
        }

    components["minecraft:physics"] = {"has_gravity": ir.has_gravity, "has_collision": True}
    components["minecraft:collision_box"] = {"width": ir.collision_width, "height": ir.collision_height}
    components["minecraft:type_family"] = {"family": list(ir.family)}

    if ir.attack_damage is not None:
        components["minecraft:attack"] = {"damage": _number(ir.attack_damage)}

    for behavior in ir.behaviors:
        components[behavior.component_key] = {"priority": behavior.priority, **behavior.params}

    components.update(copy.deepcopy(ir.additional_components))

    return {
        "format_version": BEHAVIOR_FORMAT_VERSION,
        "minecraft:entity": {
            "description": {
                "identifier": ir.identifier,
                "is_spawnable": ir.is_spawnable,
                "is_summonable": ir.is_summonable,
                "is_experimental": ir.is_experimental,
            },
            "component_groups": copy.deepcopy(ir.component_groups),
            "components": components,
            "events": copy.deepcopy(ir.events),
        },
    }


def emit_client_record(ir: IREntity) -> Dict[str, Any]:
    """Client-side entity file (entity/<name>.entity.json)"""
    return {
        "format_version": CLIENT_ENTITY_FORMAT_VERSION,
        "minecraft:client_entity": {
            "description": {
                "identifier": ir.identifier,
                "materials": copy.deepcopy(ir.materials),
                "textures": copy.deepcopy(ir.textures),
                "geometry": copy.deepcopy(ir.geometry),
                "render_controllers": copy.deepcopy(ir.render_controllers),
                "spawn_egg": copy.deepcopy(ir.spawn_egg),
            }
        },
    }


def assemble_entity(
    definition: Union[EntityDefinition, Mapping[str, Any]],
    namespace: str,
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Assemble one entity

    Args:
        definition: Entity definition (model or raw mapping)
        namespace: Addon namespace

    Returns:
        (behavior record, client entity record)

    Raises:
        pydantic.ValidationError: If the identifier is missing
        EntityAssemblyError: If the identifier has no usable local name
    """
    ir = resolve_entity(coerce_entity(definition), namespace)
    return emit_behavior_record(ir), emit_client_record(ir)


__all__ = [
    "EntityAssemblyError",
    "coerce_entity",
    "resolve_entity",
    "emit_behavior_record",
    "emit_client_record",
    "assemble_entity",
]
