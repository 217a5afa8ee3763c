"""
Tests for the Pack Assembler

Covers manifest creation, the scripting state machine, atomic adds and
the file layout of both packs.
"""
import base64
import io

import pytest
from PIL import Image

from addon_generator.core.pack_assembler import (
    DuplicateArtifactError,
    InvalidArtifactError,
    PackAssembler,
    ScriptingAlreadyEnabledError,
    ScriptingNotEnabledError,
    build_manifests,
    load_png,
    safe_relative_path,
)
from addon_generator.schemas import AddonConfig


def make_png(color=(255, 0, 0, 255), size=(4, 4), mode="RGBA"):
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def paths_of(files):
    return [path for path, _ in files]


class TestManifests:
    """Test suite for build_manifests"""

    @pytest.fixture
    def manifests(self):
        config = AddonConfig(name="Test Addon", namespace="testns", version="2.3")
        return build_manifests(config)

    def test_behavior_depends_on_resource_header(self, manifests):
        behavior, resource = manifests
        assert behavior.dependencies[0].uuid == resource.header.uuid
        assert resource.dependencies is None

    def test_all_uuids_are_distinct(self, manifests):
        behavior, resource = manifests
        uuids = {
            behavior.header.uuid,
            resource.header.uuid,
            behavior.modules[0].uuid,
            resource.modules[0].uuid,
        }
        assert len(uuids) == 4

    def test_headers(self, manifests):
        behavior, resource = manifests
        assert behavior.format_version == 2
        assert behavior.header.name == "Test Addon"
        assert behavior.header.description == "Test Addon Behavior Pack"
        assert resource.header.name == "Test Addon Resources"
        assert resource.header.description == "Test Addon Resource Pack"
        assert behavior.header.version == [2, 3, 0]
        assert behavior.header.min_engine_version == [1, 21, 50]
        assert behavior.modules[0].type == "data"
        assert resource.modules[0].type == "resources"

    def test_metadata(self, manifests):
        behavior, _ = manifests
        data = behavior.to_json_dict()
        assert data["metadata"]["authors"] == ["Addon Generator"]
        assert "addon_generator" in data["metadata"]["generated_with"]

    def test_json_dict_omits_absent_fields(self, manifests):
        _, resource = manifests
        data = resource.to_json_dict()
        assert "dependencies" not in data
        assert "language" not in data["modules"][0]

    def test_unparseable_version_falls_back(self):
        behavior, _ = build_manifests(AddonConfig(name="A", namespace="a", version="abc"))
        assert behavior.header.version == [1, 0, 0]


class TestPackAssembler:
    """Test suite for PackAssembler"""

    @pytest.fixture
    def pack(self):
        return PackAssembler({"name": "Test Addon", "namespace": "testns"})

    def test_fresh_pack_files(self, pack):
        assert paths_of(pack.behavior_files()) == ["manifest.json"]
        assert paths_of(pack.resource_files()) == ["manifest.json"]
        assert pack.behavior_uuid != pack.resource_uuid

    def test_config_is_copied(self):
        config = AddonConfig(name="Test Addon", namespace="testns", authors=["me"])
        pack = PackAssembler(config)
        config.authors.append("someone else")
        assert pack.config.authors == ["me"]

    # === Scripting ===

    def test_add_script_before_enable_fails_without_changes(self, pack):
        with pytest.raises(ScriptingNotEnabledError):
            pack.add_script("main", "console.log('hi');")
        assert not pack.scripting_enabled
        assert len(pack.behavior.manifest.modules) == 1
        assert paths_of(pack.behavior_files()) == ["manifest.json"]

    def test_enable_scripting_updates_manifest(self, pack):
        pack.enable_scripting()
        manifest = pack.behavior.manifest.to_json_dict()
        script_module = manifest["modules"][1]
        assert script_module["type"] == "script"
        assert script_module["language"] == "javascript"
        assert script_module["entry"] == "scripts/main.js"
        assert manifest["dependencies"][1] == {"module_name": "@minecraft/server", "version": "1.17.0"}

    def test_enable_scripting_twice_raises(self, pack):
        pack.enable_scripting()
        with pytest.raises(ScriptingAlreadyEnabledError):
            pack.enable_scripting()
        assert len(pack.behavior.manifest.modules) == 2
        assert len(pack.behavior.manifest.dependencies) == 2

    def test_scripts_layout(self, pack):
        pack.enable_scripting().add_script("main", "import './utils';").add_script("utils.js", "export {};")
        files = dict(pack.behavior_files())
        assert files["scripts/main.js"] == "import './utils';"
        assert files["scripts/utils.js"] == "export {};"

    def test_main_script_only_once(self, pack):
        pack.enable_scripting().add_script("main", "a")
        with pytest.raises(DuplicateArtifactError):
            pack.add_script("main.js", "b")
        assert dict(pack.behavior_files())["scripts/main.js"] == "a"

    def test_duplicate_script_module(self, pack):
        pack.enable_scripting().add_script("utils", "a")
        with pytest.raises(DuplicateArtifactError):
            pack.add_script("utils", "b")

    def test_unsafe_script_name(self, pack):
        pack.enable_scripting()
        with pytest.raises(InvalidArtifactError):
            pack.add_script("../../evil", "a")

    # === Entities / Items / Blocks ===

    def test_add_entity_writes_both_records(self, pack):
        pack.add_entity({"identifier": "golem", "health": {"value": 50}, "attack": {"damage": 8}})
        behavior = dict(pack.behavior_files())
        resource = dict(pack.resource_files())
        assert behavior["entities/golem.json"]["minecraft:entity"]["description"]["identifier"] == "testns:golem"
        assert resource["entity/golem.entity.json"]["minecraft:client_entity"]["description"]["identifier"] == "testns:golem"
        assert pack.entity_count == 1

    def test_duplicate_entity_is_rejected(self, pack):
        pack.add_entity({"identifier": "golem"})
        with pytest.raises(DuplicateArtifactError) as exc_info:
            pack.add_entity({"identifier": "testns:golem"})
        assert exc_info.value.identifier == "testns:golem"
        assert pack.entity_count == 1

    def test_invalid_attached_artifact_leaves_pack_unchanged(self, pack):
        with pytest.raises(InvalidArtifactError) as exc_info:
            pack.add_entity({
                "identifier": "golem",
                "animations": [{"format_version": "1.8.0", "animations": {"animation.golem.walk": {}}}],
                "geometry": {"format_version": "1.12.0"},
            })
        assert exc_info.value.kind == "entity"
        assert pack.entity_count == 0
        assert pack.resource.animations == []
        assert paths_of(pack.resource_files()) == ["manifest.json"]

    def test_entity_attachments(self, pack):
        pack.add_entity({
            "identifier": "golem",
            "geometry": {
                "format_version": "1.12.0",
                "minecraft:geometry": [{"description": {"identifier": "geometry.golem"}, "bones": []}],
            },
            "animations": [{"format_version": "1.8.0", "animations": {"animation.golem.walk": {"loop": True}}}],
            "animationControllers": [{
                "format_version": "1.10.0",
                "animation_controllers": {"controller.animation.golem.move": {"states": {}}},
            }],
            "renderController": {
                "format_version": "1.8.0",
                "render_controllers": {"controller.render.golem": {"geometry": "Geometry.default"}},
            },
            "lootTable": {"pools": [{"rolls": 1, "entries": []}]},
            "spawnRules": {
                "format_version": "1.8.0",
                "minecraft:spawn_rules": {"description": {"identifier": "testns:golem"}, "conditions": []},
            },
        })
        behavior = paths_of(pack.behavior_files())
        resource = paths_of(pack.resource_files())
        assert "loot_tables/entities/golem.json" in behavior
        assert "spawn_rules/golem.json" in behavior
        assert "models/entity/golem.geo.json" in resource
        assert "animations/golem.walk.animation.json" in resource
        assert "animation_controllers/golem.move.json" in resource
        assert "render_controllers/golem.json" in resource

    def test_add_item_and_block(self, pack):
        pack.add_item({"identifier": "ruby"}).add_block({"identifier": "ruby_ore", "sound": "metal"})
        behavior = paths_of(pack.behavior_files())
        resource = dict(pack.resource_files())
        assert behavior == ["manifest.json", "items/ruby.json", "blocks/ruby_ore.json"]
        assert resource["textures/item_texture.json"]["texture_data"] == {
            "ruby": {"textures": "textures/items/ruby"}
        }
        assert resource["textures/terrain_texture.json"]["texture_data"] == {
            "ruby_ore": {"textures": "textures/blocks/ruby_ore"}
        }
        assert resource["blocks.json"] == {"ruby_ore": {"sound": "metal"}}

    def test_duplicate_item_and_block(self, pack):
        pack.add_item({"identifier": "ruby"}).add_block({"identifier": "ruby"})
        with pytest.raises(DuplicateArtifactError):
            pack.add_item({"identifier": "ruby"})
        with pytest.raises(DuplicateArtifactError):
            pack.add_block({"identifier": "testns:ruby"})
        assert pack.item_count == 1
        assert pack.block_count == 1

    def test_input_mutation_after_add_has_no_effect(self, pack):
        definition = {"identifier": "golem", "familyTypes": ["golem"]}
        pack.add_entity(definition)
        definition["familyTypes"].append("monster")
        record = dict(pack.behavior_files())["entities/golem.json"]
        assert record["minecraft:entity"]["components"]["minecraft:type_family"] == {"family": ["golem"]}

    # === Data files ===

    def test_add_recipe(self, pack):
        pack.add_recipe({
            "format_version": "1.20.10",
            "minecraft:recipe_shapeless": {
                "description": {"identifier": "testns:ruby_block"},
                "ingredients": [{"item": "testns:ruby", "count": 9}],
                "result": {"item": "testns:ruby_block"},
            },
        })
        assert "recipes/ruby_block.json" in paths_of(pack.behavior_files())

    @pytest.mark.parametrize("recipe", [
        {"format_version": "1.20.10"},
        {"minecraft:recipe_shaped": {"pattern": ["#"]}},
        {"minecraft:recipe_shaped": {"description": {"identifier": ""}}},
        "not a recipe",
    ])
    def test_invalid_recipe(self, pack, recipe):
        with pytest.raises(InvalidArtifactError):
            pack.add_recipe(recipe)
        assert pack.behavior.recipes == []

    def test_add_loot_table(self, pack):
        pack.add_loot_table("loot_tables\\chests\\treasure.json", {"pools": []})
        assert "loot_tables/chests/treasure.json" in paths_of(pack.behavior_files())

    @pytest.mark.parametrize("path", ["../evil.json", "/etc/passwd", "C:/evil.json", "", "a/../../b.json"])
    def test_unsafe_loot_table_path(self, pack, path):
        with pytest.raises(InvalidArtifactError):
            pack.add_loot_table(path, {"pools": []})

    def test_add_spawn_rules_requires_identifier(self, pack):
        with pytest.raises(InvalidArtifactError):
            pack.add_spawn_rules({"minecraft:spawn_rules": {"conditions": []}})

    # === Resource files ===

    def test_add_animation_requires_collection(self, pack):
        with pytest.raises(InvalidArtifactError):
            pack.add_animation({"animations": {}})
        pack.add_animation({"animations": {"animation.bat.fly": {}}})
        assert "animations/bat.fly.animation.json" in paths_of(pack.resource_files())

    def test_add_geometry_requires_list(self, pack):
        with pytest.raises(InvalidArtifactError):
            pack.add_geometry({"minecraft:geometry": {}})

    @pytest.mark.parametrize("add,definition", [
        ("add_entity", {"identifier": "../../../evil"}),
        ("add_item", {"identifier": "x/../../../pwn"}),
        ("add_block", {"identifier": "testns:..\\ore"}),
    ])
    def test_identifier_outside_pack_is_rejected(self, pack, add, definition):
        with pytest.raises(InvalidArtifactError):
            getattr(pack, add)(definition)
        assert paths_of(pack.behavior_files()) == ["manifest.json"]
        assert paths_of(pack.resource_files()) == ["manifest.json"]

    def test_unsafe_recipe_and_spawn_rule_identifiers(self, pack):
        with pytest.raises(InvalidArtifactError):
            pack.add_recipe({
                "minecraft:recipe_shapeless": {
                    "description": {"identifier": "testns:../../evil"},
                    "ingredients": [],
                    "result": {"item": "testns:ruby"},
                }
            })
        with pytest.raises(InvalidArtifactError):
            pack.add_spawn_rules({"minecraft:spawn_rules": {"description": {"identifier": "testns:a/b"}}})
        assert paths_of(pack.behavior_files()) == ["manifest.json"]

    def test_unsafe_resource_names(self, pack):
        with pytest.raises(InvalidArtifactError):
            pack.add_animation({"animations": {"animation.../../evil": {}}})
        with pytest.raises(InvalidArtifactError):
            pack.add_render_controller({"render_controllers": {"controller.render.a/b": {}}})
        with pytest.raises(InvalidArtifactError):
            pack.add_geometry({"minecraft:geometry": [{"description": {"identifier": "geometry.../evil"}}]})
        with pytest.raises(InvalidArtifactError):
            pack.add_entity({"identifier": "golem", "geometry": {
                "minecraft:geometry": [{"description": {"identifier": "geometry./tmp/evil"}}],
            }})
        assert paths_of(pack.resource_files()) == ["manifest.json"]

    def test_inherited_geometry_file_name(self, pack):
        pack.add_geometry({"minecraft:geometry": [{"description": {"identifier": "geometry.golem:geometry.base"}}]})
        assert "models/entity/golem.geo.json" in paths_of(pack.resource_files())

    def test_sound_definitions_first_wins(self, pack):
        pack.add_sound_definitions({"mob.golem.hurt": {"sounds": ["a"]}})
        pack.add_sound_definitions({
            "format_version": "1.14.0",
            "sound_definitions": {"mob.golem.hurt": {"sounds": ["b"]}, "mob.golem.step": {"sounds": ["c"]}},
        })
        document = dict(pack.resource_files())["sounds/sound_definitions.json"]
        assert document["format_version"] == "1.14.0"
        assert document["sound_definitions"] == {
            "mob.golem.hurt": {"sounds": ["a"]},
            "mob.golem.step": {"sounds": ["c"]},
        }

    def test_add_texture_file(self, pack):
        pack.add_texture_file("textures/items/ruby.png", make_png())
        pack.add_texture_file("textures/blocks/ruby_ore.png", base64.b64encode(make_png(mode="RGB", color=(0, 0, 255))).decode())
        files = dict(pack.resource_files())
        with Image.open(io.BytesIO(files["textures/blocks/ruby_ore.png"])) as image:
            assert image.format == "PNG"
            assert image.mode == "RGBA"

    def test_corrupt_texture_is_rejected(self, pack):
        with pytest.raises(InvalidArtifactError):
            pack.add_texture_file("textures/items/bad.png", b"not an image")
        with pytest.raises(InvalidArtifactError):
            pack.add_texture_file("textures/items/bad.png", "%%% not base64 %%%")
        assert pack.resource.texture_files == []

    def test_duplicate_texture_path(self, pack):
        pack.add_texture_file("textures/items/ruby.png", make_png())
        with pytest.raises(DuplicateArtifactError):
            pack.add_texture_file("textures/items/./ruby.png", make_png())

    def test_pack_icon_in_both_packs(self):
        pack = PackAssembler({"name": "Icons", "namespace": "icons", "packIcon": make_png()})
        assert paths_of(pack.behavior_files())[:2] == ["manifest.json", "pack_icon.png"]
        assert paths_of(pack.resource_files())[:2] == ["manifest.json", "pack_icon.png"]

    def test_corrupt_pack_icon(self):
        with pytest.raises(InvalidArtifactError):
            PackAssembler({"name": "Icons", "namespace": "icons", "pack_icon": b"garbage"})


class TestHelpers:
    """Path and image helpers"""

    @pytest.mark.parametrize("raw,expected", [
        ("textures/items/a.png", "textures/items/a.png"),
        ("./textures//items/a.png", "textures/items/a.png"),
        ("textures\\items\\a.png", "textures/items/a.png"),
        ("../a.png", None),
        ("/a.png", None),
        ("", None),
        (None, None),
    ])
    def test_safe_relative_path(self, raw, expected):
        assert safe_relative_path(raw) == expected

    def test_load_png_converts_to_rgba(self):
        png = load_png(make_png(mode="L", color=128))
        with Image.open(io.BytesIO(png)) as image:
            assert image.mode == "RGBA"

    def test_load_png_rejects_empty(self):
        with pytest.raises(ValueError):
            load_png(b"")
