"""
IR Schema - Intermediate Representation

Resolved definitions produced by the Assemblers.

Key principles:
- Every value the emitters read is present (defaults already applied)
- Behavior names are canonical engine identifiers
- Identifiers are namespace-qualified

If an emitter needs to "figure something out," the IR is incomplete.
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class IRBehavior(BaseModel):
    """A resolved AI goal component"""
    name: str = Field(..., description="Canonical behavior id (e.g. 'random_stroll')")
    priority: int = Field(...)
    params: Dict[str, Any] = Field(default_factory=dict)

    @property
    def component_key(self) -> str:
        return f"minecraft:behavior.{self.name}"


class IREntity(BaseModel):
    """Fully resolved entity"""
    identifier: str = Field(..., description="namespace:name")
    base_name: str = Field(...)
    is_spawnable: bool = Field(...)
    is_summonable: bool = Field(...)
    is_experimental: bool = Field(...)

    health_value: float = Field(...)
    health_max: float = Field(...)
    movement_speed: float = Field(...)
    flies: bool = Field(...)
    has_gravity: bool = Field(...)
    collision_width: float = Field(...)
    collision_height: float = Field(...)
    family: List[str] = Field(...)
    attack_damage: Optional[float] = Field(None, description="None when the entity has no attack")

    behaviors: List[IRBehavior] = Field(default_factory=list)
    component_groups: Dict[str, Any] = Field(default_factory=dict)
    events: Dict[str, Any] = Field(default_factory=dict)
    additional_components: Dict[str, Any] = Field(default_factory=dict)

    # Client side
    materials: Dict[str, Any] = Field(...)
    textures: Dict[str, Any] = Field(...)
    geometry: Dict[str, Any] = Field(...)
    render_controllers: List[Any] = Field(...)
    spawn_egg: Dict[str, Any] = Field(...)

    @property
    def is_hostile(self) -> bool:
        return self.attack_damage is not None and self.attack_damage > 0


class IRItem(BaseModel):
    """Fully resolved item"""
    identifier: str = Field(...)
    base_name: str = Field(...)
    icon: str = Field(...)
    category: str = Field(...)
    group: Optional[str] = Field(None, description="Omitted from menu_category when None")
    components: Dict[str, Any] = Field(default_factory=dict)


class IRBlock(BaseModel):
    """Fully resolved block"""
    identifier: str = Field(...)
    base_name: str = Field(...)
    category: str = Field(...)
    group: Optional[str] = Field(None)
    sound: str = Field(...)
    states: Optional[Dict[str, Any]] = Field(None)
    permutations: Optional[List[Dict[str, Any]]] = Field(None)
    components: Dict[str, Any] = Field(default_factory=dict)

    @staticmethod
    def resistance_shape(value: Union[bool, float], key: str) -> Union[bool, Dict[str, float]]:
        """Booleans pass through; numbers become a {key: value} object."""
        if isinstance(value, bool):
            return value
        return {key: value}


__all__ = ["IRBehavior", "IREntity", "IRItem", "IRBlock"]
