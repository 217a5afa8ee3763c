"""
Tests for the Item and Block Assemblers
"""
import pytest
from pydantic import ValidationError

from addon_generator.core.block_assembler import (
    assemble_block,
    block_sound_entry,
    resolve_block,
    terrain_texture_entry,
)
from addon_generator.core.item_assembler import (
    assemble_item,
    derive_category,
    item_texture_entry,
    resolve_item,
)
from addon_generator.schemas import BlockDefinition, ItemDefinition


class TestItemAssembler:
    """Test suite for assemble_item"""

    def test_minimal_item(self):
        record = assemble_item({"identifier": "ruby"}, "gems")
        assert record["format_version"] == "1.21.50"
        assert record["minecraft:item"] == {
            "description": {"identifier": "gems:ruby", "menu_category": {"category": "items"}},
            "components": {"minecraft:icon": {"texture": "ruby"}},
        }

    def test_default_stack_size_is_omitted(self):
        components = assemble_item({"identifier": "ruby", "maxStackSize": 64}, "gems")["minecraft:item"]["components"]
        assert "minecraft:max_stack_size" not in components

        components = assemble_item({"identifier": "ruby", "max_stack_size": 16}, "gems")["minecraft:item"]["components"]
        assert components["minecraft:max_stack_size"] == 16

    def test_numeric_durability(self):
        components = assemble_item({"identifier": "sword", "durability": 250}, "gems")["minecraft:item"]["components"]
        assert components["minecraft:durability"] == {"max_durability": 250}

    def test_structured_durability(self):
        record = assemble_item({
            "identifier": "sword",
            "durability": {"max": 100, "damage_chance": {"min": 10, "max": 50}},
        }, "gems")
        assert record["minecraft:item"]["components"]["minecraft:durability"] == {
            "max_durability": 100,
            "damage_chance": {"min": 10, "max": 50},
        }

    def test_damage_and_display_name(self):
        components = assemble_item({
            "identifier": "sword",
            "displayName": "Ruby Sword",
            "damage": "7",
        }, "gems")["minecraft:item"]["components"]
        assert components["minecraft:display_name"] == {"value": "Ruby Sword"}
        assert components["minecraft:damage"] == {"value": 7}

    def test_food(self):
        components = assemble_item({
            "identifier": "berry",
            "food": {"nutrition": 4, "saturationModifier": "good"},
        }, "gems")["minecraft:item"]["components"]
        assert components["minecraft:food"] == {
            "nutrition": 4,
            "saturation_modifier": "good",
            "can_always_eat": False,
        }

    @pytest.mark.parametrize("fields,expected", [
        ({"item_type": "weapon"}, "equipment"),
        ({"itemType": "Tool"}, "equipment"),
        ({"item_type": "food"}, "items"),
        ({"item_type": "weapon", "category": "nature"}, "nature"),
        ({}, "items"),
    ])
    def test_derive_category(self, fields, expected):
        assert derive_category(ItemDefinition.model_validate({"identifier": "x", **fields})) == expected

    def test_group_is_included_only_when_set(self):
        record = assemble_item({"identifier": "sword", "item_type": "weapon", "group": "itemGroup.name.sword"}, "gems")
        assert record["minecraft:item"]["description"]["menu_category"] == {
            "category": "equipment",
            "group": "itemGroup.name.sword",
        }

    def test_custom_icon_and_additional_components(self):
        ir = resolve_item(ItemDefinition(
            identifier="gems:wand",
            icon="magic_wand",
            additional_components={"minecraft:glint": True},
        ), "other")
        assert ir.identifier == "gems:wand"
        assert ir.components["minecraft:icon"] == {"texture": "magic_wand"}
        assert ir.components["minecraft:glint"] is True

    def test_item_texture_entry(self):
        ir = resolve_item(ItemDefinition(identifier="Ruby"), "gems")
        assert item_texture_entry(ir) == ("ruby", {"textures": "textures/items/ruby"})

    def test_missing_identifier_fails_fast(self):
        with pytest.raises(ValidationError):
            assemble_item({"displayName": "Nameless"}, "gems")


class TestBlockAssembler:
    """Test suite for assemble_block"""

    def test_minimal_block(self):
        record = assemble_block({"identifier": "ruby_ore"}, "gems")
        assert record == {
            "format_version": "1.21.50",
            "minecraft:block": {
                "description": {
                    "identifier": "gems:ruby_ore",
                    "menu_category": {"category": "construction"},
                },
                "components": {},
            },
        }

    def test_boolean_resistance_passes_through(self):
        components = assemble_block({
            "identifier": "bedrock_like",
            "destructible_by_mining": False,
            "destructibleByExplosion": False,
        }, "gems")["minecraft:block"]["components"]
        assert components["minecraft:destructible_by_mining"] is False
        assert components["minecraft:destructible_by_explosion"] is False

    def test_numeric_resistance_becomes_object(self):
        components = assemble_block({
            "identifier": "ruby_ore",
            "destructible_by_mining": 3,
            "destructible_by_explosion": "6",
        }, "gems")["minecraft:block"]["components"]
        assert components["minecraft:destructible_by_mining"] == {"seconds_to_destroy": 3.0}
        assert components["minecraft:destructible_by_explosion"] == {"explosion_resistance": 6.0}

    def test_optional_components(self):
        components = assemble_block({
            "identifier": "lamp",
            "friction": 0,
            "light_emission": 15,
            "map_color": "#ff0000",
            "geometry": "geometry.lamp",
            "material_instances": {"*": {"texture": "lamp"}},
        }, "gems")["minecraft:block"]["components"]
        assert components == {
            "minecraft:friction": 0,
            "minecraft:light_emission": 15,
            "minecraft:map_color": "#ff0000",
            "minecraft:geometry": "geometry.lamp",
            "minecraft:material_instances": {"*": {"texture": "lamp"}},
        }

    def test_zero_light_emission_is_omitted(self):
        components = assemble_block({"identifier": "dark", "light_emission": 0}, "gems")["minecraft:block"]["components"]
        assert "minecraft:light_emission" not in components

    def test_states_and_permutations(self):
        body = assemble_block({
            "identifier": "lamp",
            "states": {"gems:lit": [False, True]},
            "permutations": [{"condition": "q.block_state('gems:lit')", "components": {"minecraft:light_emission": 15}}],
        }, "gems")["minecraft:block"]
        assert body["description"]["states"] == {"gems:lit": [False, True]}
        assert body["permutations"][0]["components"] == {"minecraft:light_emission": 15}
        assert "permutations" not in body["description"]

    def test_texture_and_sound_entries(self):
        ir = resolve_block(BlockDefinition(identifier="ruby_ore", category="nature", sound="metal"), "gems")
        assert ir.category == "nature"
        assert terrain_texture_entry(ir) == ("ruby_ore", {"textures": "textures/blocks/ruby_ore"})
        assert block_sound_entry(ir) == ("ruby_ore", {"sound": "metal"})

    def test_default_sound(self):
        ir = resolve_block(BlockDefinition(identifier="ruby_ore"), "gems")
        assert block_sound_entry(ir) == ("ruby_ore", {"sound": "stone"})

    def test_missing_identifier_fails_fast(self):
        with pytest.raises(ValidationError):
            assemble_block({"friction": 0.4}, "gems")
