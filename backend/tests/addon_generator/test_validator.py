"""
Tests for the pre-build Validator
"""
import pytest

from addon_generator.core.pack_assembler import PackAssembler
from addon_generator.core.validator import ValidationError, Validator


def run_validator(pack):
    return Validator().validate(pack, pack.behavior_files(), pack.resource_files())


class TestValidator:
    """Test suite for Validator"""

    @pytest.fixture
    def pack(self):
        return PackAssembler({"name": "Test Addon", "namespace": "testns"})

    def test_fresh_pack_passes(self, pack):
        report = run_validator(pack)
        assert report["status"] == "passed"
        assert report["errors"] == 0

    def test_path_collision(self, pack):
        recipe = {
            "minecraft:recipe_shapeless": {
                "description": {"identifier": "testns:ruby"},
                "ingredients": [],
                "result": {"item": "testns:ruby"},
            }
        }
        pack.add_recipe(recipe).add_recipe(recipe)
        with pytest.raises(ValidationError) as exc_info:
            run_validator(pack)
        issue = exc_info.value.issues[0]
        assert issue.category == "path"
        assert issue.file_path == "recipes/ruby.json"

    def test_loot_table_collides_with_entity_loot(self, pack):
        pack.add_entity({"identifier": "golem", "lootTable": {"pools": []}})
        pack.add_loot_table("loot_tables/entities/golem.json", {"pools": []})
        with pytest.raises(ValidationError):
            run_validator(pack)

    def test_unserializable_json(self, pack):
        pack.add_loot_table("loot_tables/odd.json", {"pools": []})
        pack.behavior.loot_tables[0][1]["pools"] = {1, 2}
        with pytest.raises(ValidationError) as exc_info:
            run_validator(pack)
        assert exc_info.value.issues[0].category == "json"

    def test_missing_resource_dependency(self, pack):
        pack.behavior.manifest.dependencies = []
        with pytest.raises(ValidationError) as exc_info:
            run_validator(pack)
        assert exc_info.value.issues[0].category == "manifest"

    def test_script_without_server_dependency(self, pack):
        pack.enable_scripting().add_script("main", "console.log('hi');")
        pack.behavior.manifest.dependencies = pack.behavior.manifest.dependencies[:1]
        with pytest.raises(ValidationError) as exc_info:
            run_validator(pack)
        assert exc_info.value.issues[0].category == "script"

    def test_empty_script_entry_is_a_warning(self, pack):
        pack.enable_scripting()
        report = run_validator(pack)
        assert report["status"] == "passed"
        assert report["warnings"] == 1

    def test_issue_dict(self, pack):
        pack.behavior.manifest.dependencies = []
        with pytest.raises(ValidationError) as exc_info:
            run_validator(pack)
        assert exc_info.value.issues[0].to_dict() == {
            "severity": "ERROR",
            "category": "manifest",
            "message": "Behavior pack does not depend on the resource pack UUID",
            "file_path": "manifest.json",
        }

    def test_path_escaping_the_pack(self, pack):
        pack.add_entity({"identifier": "golem"})
        record = pack.behavior.entities[0]
        record["minecraft:entity"]["description"]["identifier"] = "testns:../../../evil"
        with pytest.raises(ValidationError) as exc_info:
            run_validator(pack)
        issue = exc_info.value.issues[0]
        assert issue.category == "path"
        assert issue.file_path == "entities/../../../evil.json"

    @pytest.mark.parametrize("path", ["/etc/passwd", "textures/./a.png", "a//b.json", "C:/evil.json"])
    def test_non_normalized_paths(self, pack, path):
        with pytest.raises(ValidationError) as exc_info:
            Validator().validate(pack, pack.behavior_files() + [(path, {})], pack.resource_files())
        assert exc_info.value.issues[0].file_path == path
