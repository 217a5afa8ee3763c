"""
Tests for the generation endpoints

Runs the FastAPI app in-process with TestClient; the concept expander is
swapped for one backed by a fake chat model.
"""
import base64
import io
import json
import zipfile

import pytest
from fastapi.testclient import TestClient
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from config import AIConfig
from addon_generator.ai import ConceptExpander
from main import app
from routers.concepts import get_concept_expander


def unzip_names(encoded):
    with zipfile.ZipFile(io.BytesIO(base64.b64decode(encoded))) as archive:
        return set(archive.namelist())


class TestHealth:
    """Service endpoints"""

    @pytest.fixture
    def client(self):
        return TestClient(app)

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root_lists_endpoints(self, client):
        body = client.get("/").json()
        assert body["endpoints"]["addon"] == "/api/generate/addon"


class TestGenerateAddon:
    """Test suite for POST /api/generate/addon"""

    @pytest.fixture
    def client(self):
        return TestClient(app)

    def test_generate_addon(self, client):
        response = client.post("/api/generate/addon", json={
            "name": "Test Addon",
            "namespace": "testns",
            "entities": [{"identifier": "golem", "health": {"value": 50, "max": 50}, "attack": {"damage": 8}}],
            "items": [{"identifier": "ruby"}],
            "lootTables": [{"path": "loot_tables/chests/treasure.json", "content": {"pools": []}}],
        })
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["metadata"]["entityCount"] == 1
        assert body["metadata"]["itemCount"] == 1
        assert body["downloads"]["mcaddon"]["filename"] == "Test Addon.mcaddon"
        assert body["downloads"]["behaviorPack"]["filename"] == "Test Addon_BP.mcpack"
        assert body["downloads"]["resourcePack"]["filename"] == "Test Addon_RP.mcpack"

        names = unzip_names(body["downloads"]["mcaddon"]["data"])
        assert "Test Addon_BP/entities/golem.json" in names
        assert "Test Addon_BP/loot_tables/chests/treasure.json" in names
        assert "Test Addon_RP/textures/item_texture.json" in names

    def test_scripting(self, client):
        response = client.post("/api/generate/addon", json={
            "name": "Scripted",
            "namespace": "scripted",
            "enableScripting": True,
            "scripts": {"main": "import './util';", "modules": [{"name": "util", "content": "export {};"}]},
        })
        assert response.status_code == 200
        names = unzip_names(response.json()["downloads"]["behaviorPack"]["data"])
        assert {"scripts/main.js", "scripts/util.js"} <= names

    def test_scripts_without_enable_are_ignored(self, client):
        response = client.post("/api/generate/addon", json={
            "name": "Plain",
            "namespace": "plain",
            "scripts": {"main": "console.log('hi');"},
        })
        assert response.status_code == 200
        names = unzip_names(response.json()["downloads"]["behaviorPack"]["data"])
        assert not any(name.startswith("scripts/") for name in names)

    @pytest.mark.parametrize("namespace", ["Bad-Namespace", "1abc", ""])
    def test_bad_namespace(self, client, namespace):
        response = client.post("/api/generate/addon", json={"name": "Test Addon", "namespace": namespace})
        assert response.status_code == 422
        body = response.json()
        assert body["errorType"] == "RequestValidationError"
        assert body["requestId"]
        assert body["error"]

    def test_artifact_failures(self, client):
        response = client.post("/api/generate/addon", json={
            "name": "Test Addon",
            "namespace": "testns",
            "entities": [{"identifier": "golem"}, {"identifier": "golem"}],
            "recipes": [{"format_version": "1.20.10"}],
        })
        assert response.status_code == 422
        body = response.json()
        assert body["errorType"] == "ArtifactError"
        assert [(f["kind"], f["index"]) for f in body["failures"]] == [("entity", 1), ("recipe", 0)]
        assert body["failures"][0]["identifier"] == "testns:golem"

    def test_concept_shaped_payload(self, client):
        response = client.post("/api/generate/addon", json={
            "name": "Test Addon",
            "namespace": "testns",
            "entities": [{
                "identifier": "golem",
                "entityType": "boss",
                "properties": {"health": {"value": 50, "max": 50}, "attack": {"damage": 8}},
                "aiGoals": [{"name": "leap_at_target"}],
            }],
            "items": [{"identifier": "ruby_sword", "itemType": "weapon", "properties": {"maxDurability": 250}}],
            "blocks": [{"identifier": "ruby_ore", "properties": {"hardness": 3, "lightLevel": 5}}],
        })
        assert response.status_code == 200
        encoded = response.json()["downloads"]["behaviorPack"]["data"]
        with zipfile.ZipFile(io.BytesIO(base64.b64decode(encoded))) as archive:
            golem = json.loads(archive.read("entities/golem.json"))["minecraft:entity"]["components"]
            sword = json.loads(archive.read("items/ruby_sword.json"))["minecraft:item"]["components"]
            ore = json.loads(archive.read("blocks/ruby_ore.json"))["minecraft:block"]["components"]
        assert golem["minecraft:health"] == {"value": 50, "max": 50}
        assert golem["minecraft:attack"] == {"damage": 8}
        assert "minecraft:behavior.leap_at_target" in golem
        assert "minecraft:movement.fly" in golem
        assert sword["minecraft:durability"]["max_durability"] == 250
        assert ore["minecraft:light_emission"] == 5

    def test_identifier_outside_pack_folder(self, client):
        response = client.post("/api/generate/addon", json={
            "name": "Test Addon",
            "namespace": "testns",
            "entities": [{"identifier": "../../../evil"}],
        })
        assert response.status_code == 422
        body = response.json()
        assert body["errorType"] == "ArtifactError"
        assert body["failures"][0]["kind"] == "entity"

    def test_corrupt_pack_icon(self, client):
        response = client.post("/api/generate/addon", json={
            "name": "Test Addon",
            "namespace": "testns",
            "packIcon": base64.b64encode(b"not a png").decode("ascii"),
        })
        assert response.status_code == 422
        assert response.json()["errorType"] == "InvalidArtifactError"


class TestAIConcept:
    """Test suite for POST /api/generate/ai-concept"""

    REPLY = {
        "expandedDescription": "A slow, sturdy guardian.",
        "conceptType": "entity",
        "entity": {
            "identifier": "stone_golem",
            "displayName": "Stone Golem",
            "stats": {"health": {"base": 100, "max": 100}, "damage": {"base": 9}},
        },
    }

    @pytest.fixture
    def client(self):
        def fake_expander():
            llm = FakeListChatModel(responses=[json.dumps(self.REPLY)])
            return ConceptExpander(AIConfig(api_key="test-key"), llm=llm)

        app.dependency_overrides[get_concept_expander] = fake_expander
        yield TestClient(app)
        app.dependency_overrides.clear()

    def test_expand_concept(self, client):
        response = client.post("/api/generate/ai-concept", json={
            "concept": "a stone golem that guards villages",
            "namespace": "village",
        })
        assert response.status_code == 200
        body = response.json()
        assert body["concept"]["entity"]["displayName"] == "Stone Golem"
        assert body["concept"]["originalConcept"] == "a stone golem that guards villages"
        assert body["definitions"]["entities"][0]["identifier"] == "village:stone_golem"
        assert body["metadata"]["model"] == "gemini-2.0-flash"

    def test_definitions_can_be_built(self, client):
        concept = client.post("/api/generate/ai-concept", json={
            "concept": "a stone golem that guards villages",
            "namespace": "village",
        }).json()
        response = client.post("/api/generate/addon", json={
            "name": "Village Guards",
            "namespace": "village",
            **concept["definitions"],
        })
        assert response.status_code == 200
        assert response.json()["metadata"]["entityCount"] == 1

    def test_short_concept(self, client):
        response = client.post("/api/generate/ai-concept", json={"concept": "hey"})
        assert response.status_code == 400
        assert response.json()["errorType"] == "ConceptError"

    def test_bad_concept_type(self, client):
        response = client.post("/api/generate/ai-concept", json={
            "concept": "a stone golem that guards villages",
            "conceptType": "biome",
        })
        assert response.status_code == 422

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        app.dependency_overrides.clear()
        response = TestClient(app).post("/api/generate/ai-concept", json={
            "concept": "a stone golem that guards villages",
        })
        assert response.status_code == 503
        assert response.json()["errorType"] == "ConfigError"
