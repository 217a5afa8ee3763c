"""
Pack Assembler - Accumulates the behavior pack and resource pack

Responsibilities:
- Create both manifests once, with fresh UUIDs, from the AddonConfig
- Expose one add operation per artifact kind
- Keep every add atomic: check everything, then mutate
- Reject duplicate identifiers and malformed artifacts with typed errors
- Lay out both packs as ordered (path, content) file trees

Ownership: definitions are deep-copied on the way in, so callers may reuse
or mutate their objects afterwards. A PackAssembler has a single writer;
concurrent add calls on one instance are not supported.
"""
import base64
import binascii
import copy
import io
import logging
import posixpath
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from PIL import Image, UnidentifiedImageError

from config import (
    DEFAULT_AUTHORS,
    MANIFEST_FORMAT_VERSION,
    SCRIPT_SERVER_VERSION,
)
from addon_generator import __version__
from addon_generator.schemas import (
    AddonConfig,
    BlockDefinition,
    EntityDefinition,
    ItemDefinition,
    ManifestDependency,
    ManifestHeader,
    ManifestMetadata,
    ManifestModule,
    ManifestRecord,
)
from addon_generator.core.identifiers import base_name, is_safe_name, parse_version
from addon_generator.core.entity_assembler import (
    EntityAssemblyError,
    coerce_entity,
    emit_behavior_record,
    emit_client_record,
    resolve_entity,
)
from addon_generator.core.item_assembler import (
    ItemAssemblyError,
    coerce_item,
    emit_item_record,
    item_texture_entry,
    resolve_item,
)
from addon_generator.core.block_assembler import (
    BlockAssemblyError,
    block_sound_entry,
    coerce_block,
    emit_block_record,
    resolve_block,
    terrain_texture_entry,
)

logger = logging.getLogger(__name__)


SCRIPT_ENTRY = "scripts/main.js"
SCRIPT_MODULE_NAME = "@minecraft/server"
SOUND_DEFINITIONS_FORMAT_VERSION = "1.14.0"

FileTree = List[Tuple[str, Any]]


# =============================================================================
# Errors
# =============================================================================

class PackStateError(Exception):
    """Raised when an operation is called in the wrong builder state"""
    pass


class ScriptingNotEnabledError(PackStateError):
    def __init__(self):
        super().__init__("Scripting is not enabled; call enable_scripting() before add_script()")


class ScriptingAlreadyEnabledError(PackStateError):
    def __init__(self):
        super().__init__("Scripting is already enabled for this addon")


class ArtifactError(Exception):
    """A single artifact could not be added. Pack state is unchanged."""

    def __init__(self, kind: str, identifier: Optional[str], message: str, index: Optional[int] = None):
        self.kind = kind
        self.identifier = identifier
        self.message = message
        self.index = index
        super().__init__(f"{kind} '{identifier or '?'}': {message}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "index": self.index,
            "identifier": self.identifier,
            "message": self.message,
        }


class InvalidArtifactError(ArtifactError):
    pass


class DuplicateArtifactError(ArtifactError):
    pass


# =============================================================================
# Pack State
# =============================================================================

@dataclass
class ScriptSet:
    main: str = ""
    main_set: bool = False
    modules: List[Tuple[str, str]] = field(default_factory=list)


@dataclass
class BehaviorPackState:
    manifest: ManifestRecord
    entities: List[Dict[str, Any]] = field(default_factory=list)
    items: List[Dict[str, Any]] = field(default_factory=list)
    blocks: List[Dict[str, Any]] = field(default_factory=list)
    recipes: List[Dict[str, Any]] = field(default_factory=list)
    loot_tables: List[Tuple[str, Dict[str, Any]]] = field(default_factory=list)
    spawn_rules: List[Dict[str, Any]] = field(default_factory=list)
    scripts: Optional[ScriptSet] = None


@dataclass
class ResourcePackState:
    manifest: ManifestRecord
    entities: List[Dict[str, Any]] = field(default_factory=list)
    item_textures: Dict[str, Dict[str, str]] = field(default_factory=dict)
    terrain_textures: Dict[str, Dict[str, str]] = field(default_factory=dict)
    texture_files: List[Tuple[str, bytes]] = field(default_factory=list)
    geometries: List[Dict[str, Any]] = field(default_factory=list)
    animations: List[Dict[str, Any]] = field(default_factory=list)
    animation_controllers: List[Dict[str, Any]] = field(default_factory=list)
    render_controllers: List[Dict[str, Any]] = field(default_factory=list)
    sound_definitions: Dict[str, Any] = field(default_factory=dict)
    block_sounds: Dict[str, Dict[str, str]] = field(default_factory=dict)


# =============================================================================
# Helpers
# =============================================================================

def _new_uuid() -> str:
    return str(uuid.uuid4())


def safe_relative_path(path: Any) -> Optional[str]:
    """Normalized relative POSIX path, or None if it escapes the pack root."""
    if not isinstance(path, str) or not path.strip():
        return None
    candidate = path.strip().replace("\\", "/")
    if candidate.startswith("/") or (len(candidate) > 1 and candidate[1] == ":"):
        return None
    normalized = posixpath.normpath(candidate)
    if normalized in (".", "") or normalized.startswith("../") or normalized == "..":
        return None
    return normalized


def load_png(data: Union[bytes, str]) -> bytes:
    """
    Decode raw bytes or base64 and re-encode as an RGBA PNG.

    Raises:
        ValueError: If the data is not a readable image
    """
    if isinstance(data, str):
        try:
            data = base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"invalid base64 image data: {e}") from e
    if not isinstance(data, (bytes, bytearray)) or not data:
        raise ValueError("image data must be non-empty bytes or base64")

    try:
        with Image.open(io.BytesIO(bytes(data))) as image:
            image.load()
            rgba = image.convert("RGBA")
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"unreadable image: {e}") from e

    buffer = io.BytesIO()
    rgba.save(buffer, format="PNG")
    return buffer.getvalue()


# Key prefix stripped from the first name of each collection to get its file stem
COLLECTION_PREFIXES = {
    "animations": "animation.",
    "animation_controllers": "controller.animation.",
    "render_controllers": "controller.render.",
}


def _first_key_name(content: Mapping[str, Any], key: str, fallback: str = "default") -> str:
    first = next(iter(content.get(key) or {}), None)
    if not isinstance(first, str) or not first:
        return fallback
    return first.replace(COLLECTION_PREFIXES[key], "", 1) or fallback


def _geometry_name(content: Mapping[str, Any]) -> str:
    first = content["minecraft:geometry"][0]
    identifier = (first.get("description") or {}).get("identifier") if isinstance(first, Mapping) else None
    if not isinstance(identifier, str) or not identifier:
        return "custom"
    # "geometry.golem:geometry.base" inherits from geometry.base
    return identifier.split(":", 1)[0].replace("geometry.", "", 1) or "custom"


def _named_collection(kind: str, content: Any, key: str) -> Dict[str, Any]:
    """Animation-style files must carry a non-empty mapping under `key`."""
    if not isinstance(content, Mapping):
        raise InvalidArtifactError(kind, None, "must be a JSON object")
    collection = content.get(key)
    if not isinstance(collection, Mapping) or not collection:
        raise InvalidArtifactError(kind, None, f"must contain a non-empty '{key}' object")
    name = _first_key_name(content, key)
    if not is_safe_name(name):
        raise InvalidArtifactError(kind, name, "name is not a valid file name")
    return copy.deepcopy(dict(content))


def _geometry_file(content: Any) -> Dict[str, Any]:
    geometries = content.get("minecraft:geometry") if isinstance(content, Mapping) else None
    if not isinstance(geometries, list) or not geometries:
        raise InvalidArtifactError("geometry", None, "must contain a non-empty 'minecraft:geometry' list")
    name = _geometry_name(content)
    if not is_safe_name(name):
        raise InvalidArtifactError("geometry", name, "identifier is not a valid file name")
    return copy.deepcopy(dict(content))


def _described_identifier(kind: str, content: Any, root_key: str) -> str:
    """Return description.identifier under `root_key`, or raise."""
    body = content.get(root_key) if isinstance(content, Mapping) else None
    description = body.get("description") if isinstance(body, Mapping) else None
    identifier = description.get("identifier") if isinstance(description, Mapping) else None
    if not isinstance(identifier, str) or not identifier.strip():
        raise InvalidArtifactError(kind, None, f"missing '{root_key}.description.identifier'")
    if not is_safe_name(base_name(identifier)):
        raise InvalidArtifactError(kind, identifier, "identifier is not a valid file name")
    return identifier


def recipe_root_key(recipe: Mapping[str, Any]) -> Optional[str]:
    for key in recipe:
        if isinstance(key, str) and key.startswith("minecraft:recipe_"):
            return key
    return None


def build_manifests(config: AddonConfig) -> Tuple[ManifestRecord, ManifestRecord]:
    """
    Create the behavior and resource manifests.

    The behavior manifest depends on the resource pack's header UUID so the
    engine loads both packs as a pair.
    """
    version = parse_version(config.version)
    min_engine_version = parse_version(config.min_engine_version)
    behavior_uuid = _new_uuid()
    resource_uuid = _new_uuid()
    metadata = ManifestMetadata(
        authors=list(config.authors) if config.authors else list(DEFAULT_AUTHORS),
        generated_with={"addon_generator": [__version__]},
    )

    behavior = ManifestRecord(
        format_version=MANIFEST_FORMAT_VERSION,
        header=ManifestHeader(
            name=config.name,
            description=config.description or f"{config.name} Behavior Pack",
            uuid=behavior_uuid,
            version=version,
            min_engine_version=min_engine_version,
        ),
        modules=[ManifestModule(type="data", uuid=_new_uuid(), version=version)],
        dependencies=[ManifestDependency(uuid=resource_uuid, version=version)],
        metadata=metadata,
    )
    resource = ManifestRecord(
        format_version=MANIFEST_FORMAT_VERSION,
        header=ManifestHeader(
            name=f"{config.name} Resources",
            description=config.description or f"{config.name} Resource Pack",
            uuid=resource_uuid,
            version=version,
            min_engine_version=min_engine_version,
        ),
        modules=[ManifestModule(type="resources", uuid=_new_uuid(), version=version)],
        metadata=metadata.model_copy(deep=True),
    )
    return behavior, resource


# =============================================================================
# Pack Assembler
# =============================================================================

class PackAssembler:
    """
    Owns the in-memory state of both packs between construction and build.

    Every add method returns self so calls can be chained.
    """

    def __init__(self, config: Union[AddonConfig, Mapping[str, Any]]):
        if isinstance(config, AddonConfig):
            self.config = config.model_copy(deep=True)
        else:
            self.config = AddonConfig.model_validate(copy.deepcopy(dict(config)))

        self.pack_icon: Optional[bytes] = None
        if self.config.pack_icon:
            try:
                self.pack_icon = load_png(self.config.pack_icon)
            except ValueError as e:
                raise InvalidArtifactError("pack_icon", None, str(e)) from e

        behavior_manifest, resource_manifest = build_manifests(self.config)
        self.behavior = BehaviorPackState(manifest=behavior_manifest)
        self.resource = ResourcePackState(manifest=resource_manifest)
        self._identifiers: Dict[str, set] = {"entity": set(), "item": set(), "block": set()}

        logger.info(
            f"[PackAssembler] New addon '{self.config.name}' "
            f"(BP {self.behavior_uuid}, RP {self.resource_uuid})"
        )

    # === Identity ===

    @property
    def namespace(self) -> str:
        return self.config.namespace

    @property
    def behavior_uuid(self) -> str:
        return self.behavior.manifest.header.uuid

    @property
    def resource_uuid(self) -> str:
        return self.resource.manifest.header.uuid

    @property
    def entity_count(self) -> int:
        return len(self.behavior.entities)

    @property
    def item_count(self) -> int:
        return len(self.behavior.items)

    @property
    def block_count(self) -> int:
        return len(self.behavior.blocks)

    @property
    def scripting_enabled(self) -> bool:
        return self.behavior.scripts is not None

    def _check_unique(self, kind: str, identifier: str) -> None:
        if identifier in self._identifiers[kind]:
            raise DuplicateArtifactError(kind, identifier, "identifier already added")

    # === Scripting ===

    def enable_scripting(self, server_version: str = SCRIPT_SERVER_VERSION) -> "PackAssembler":
        """
        Add the script module and the @minecraft/server dependency.

        Raises:
            ScriptingAlreadyEnabledError: On a second call; nothing is appended
        """
        if self.scripting_enabled:
            raise ScriptingAlreadyEnabledError()

        manifest = self.behavior.manifest
        manifest.modules.append(ManifestModule(
            type="script",
            language="javascript",
            uuid=_new_uuid(),
            version=parse_version(self.config.version),
            entry=SCRIPT_ENTRY,
        ))
        if manifest.dependencies is None:
            manifest.dependencies = []
        manifest.dependencies.append(ManifestDependency(module_name=SCRIPT_MODULE_NAME, version=server_version))
        self.behavior.scripts = ScriptSet()

        logger.info(f"[PackAssembler] Scripting enabled ({SCRIPT_MODULE_NAME} {server_version})")
        return self

    def add_script(self, name: str, content: str) -> "PackAssembler":
        """
        Add a script; "main" is the entry script, anything else a module.

        Raises:
            ScriptingNotEnabledError: If enable_scripting() was not called
            InvalidArtifactError: Unsafe name or non-text content
            DuplicateArtifactError: Entry or module already set
        """
        if not self.scripting_enabled:
            raise ScriptingNotEnabledError()
        if not isinstance(content, str):
            raise InvalidArtifactError("script", name, "content must be text")

        module_name = safe_relative_path(name)
        if module_name is None:
            raise InvalidArtifactError("script", name, "unsafe script name")
        if module_name.endswith(".js"):
            module_name = module_name[:-3]

        scripts = self.behavior.scripts
        if module_name == "main":
            if scripts.main_set:
                raise DuplicateArtifactError("script", "main", "entry script already set")
            scripts.main = content
            scripts.main_set = True
            return self

        if any(existing == module_name for existing, _ in scripts.modules):
            raise DuplicateArtifactError("script", module_name, "script module already added")
        scripts.modules.append((module_name, content))
        return self

    # === Entities / Items / Blocks ===

    def add_entity(self, definition: Union[EntityDefinition, Mapping[str, Any]]) -> "PackAssembler":
        """
        Assemble and add an entity with its attached resources.

        Geometry, animations, controllers, spawn rules and loot table carried
        by the definition are checked before anything is stored.

        Raises:
            pydantic.ValidationError: Missing identifier
            InvalidArtifactError: Malformed definition or attached artifact
            DuplicateArtifactError: Identifier already added
        """
        source = coerce_entity(definition)
        try:
            ir = resolve_entity(source, self.namespace)
        except EntityAssemblyError as e:
            raise InvalidArtifactError("entity", source.identifier, str(e)) from e
        self._check_unique("entity", ir.identifier)

        try:
            geometry = _geometry_file(source.geometry) if source.geometry else None
            animations = [_named_collection("animation", a, "animations") for a in source.animations]
            controllers = [
                _named_collection("animation_controller", c, "animation_controllers")
                for c in source.animation_controllers
            ]
            render_controller = None
            if source.render_controller:
                render_controller = _named_collection("render_controller", source.render_controller, "render_controllers")
            spawn_rules = None
            if source.spawn_rules:
                _described_identifier("spawn_rules", source.spawn_rules, "minecraft:spawn_rules")
                spawn_rules = copy.deepcopy(source.spawn_rules)
        except InvalidArtifactError as e:
            raise InvalidArtifactError("entity", ir.identifier, f"{e.kind}: {e.message}") from e

        behavior_record = emit_behavior_record(ir)
        client_record = emit_client_record(ir)

        self.behavior.entities.append(behavior_record)
        self.resource.entities.append(client_record)
        if geometry is not None:
            self.resource.geometries.append(geometry)
        self.resource.animations.extend(animations)
        self.resource.animation_controllers.extend(controllers)
        if render_controller is not None:
            self.resource.render_controllers.append(render_controller)
        if spawn_rules is not None:
            self.behavior.spawn_rules.append(spawn_rules)
        if source.loot_table:
            self.behavior.loot_tables.append(
                (f"loot_tables/entities/{ir.base_name}.json", copy.deepcopy(source.loot_table))
            )
        self._identifiers["entity"].add(ir.identifier)

        logger.info(f"[PackAssembler] Added entity {ir.identifier} ({len(ir.behaviors)} behaviors)")
        return self

    def add_item(self, definition: Union[ItemDefinition, Mapping[str, Any]]) -> "PackAssembler":
        source = coerce_item(definition)
        try:
            ir = resolve_item(source, self.namespace)
        except ItemAssemblyError as e:
            raise InvalidArtifactError("item", source.identifier, str(e)) from e
        self._check_unique("item", ir.identifier)

        record = emit_item_record(ir)
        key, entry = item_texture_entry(ir)

        self.behavior.items.append(record)
        self.resource.item_textures[key] = entry
        self._identifiers["item"].add(ir.identifier)

        logger.info(f"[PackAssembler] Added item {ir.identifier}")
        return self

    def add_block(self, definition: Union[BlockDefinition, Mapping[str, Any]]) -> "PackAssembler":
        source = coerce_block(definition)
        try:
            ir = resolve_block(source, self.namespace)
        except BlockAssemblyError as e:
            raise InvalidArtifactError("block", source.identifier, str(e)) from e
        self._check_unique("block", ir.identifier)

        record = emit_block_record(ir)
        texture_key, texture_entry = terrain_texture_entry(ir)
        sound_key, sound_entry = block_sound_entry(ir)

        self.behavior.blocks.append(record)
        self.resource.terrain_textures[texture_key] = texture_entry
        self.resource.block_sounds[sound_key] = sound_entry
        self._identifiers["block"].add(ir.identifier)

        logger.info(f"[PackAssembler] Added block {ir.identifier}")
        return self

    # === Data files ===

    def add_recipe(self, recipe: Mapping[str, Any]) -> "PackAssembler":
        """Recipe with a minecraft:recipe_* root carrying description.identifier"""
        if not isinstance(recipe, Mapping):
            raise InvalidArtifactError("recipe", None, "must be a JSON object")
        root_key = recipe_root_key(recipe)
        if root_key is None:
            raise InvalidArtifactError("recipe", None, "missing a 'minecraft:recipe_*' root")
        _described_identifier("recipe", recipe, root_key)
        self.behavior.recipes.append(copy.deepcopy(dict(recipe)))
        return self

    def add_loot_table(self, path: str, content: Mapping[str, Any]) -> "PackAssembler":
        """Loot table stored at `path` (relative to the behavior pack root)"""
        safe_path = safe_relative_path(path)
        if safe_path is None:
            raise InvalidArtifactError("loot_table", str(path), "unsafe or empty path")
        if not isinstance(content, Mapping):
            raise InvalidArtifactError("loot_table", safe_path, "must be a JSON object")
        self.behavior.loot_tables.append((safe_path, copy.deepcopy(dict(content))))
        return self

    def add_spawn_rules(self, rules: Mapping[str, Any]) -> "PackAssembler":
        _described_identifier("spawn_rules", rules, "minecraft:spawn_rules")
        self.behavior.spawn_rules.append(copy.deepcopy(dict(rules)))
        return self

    # === Resource files ===

    def add_animation(self, animation: Mapping[str, Any]) -> "PackAssembler":
        self.resource.animations.append(_named_collection("animation", animation, "animations"))
        return self

    def add_animation_controller(self, controller: Mapping[str, Any]) -> "PackAssembler":
        self.resource.animation_controllers.append(
            _named_collection("animation_controller", controller, "animation_controllers")
        )
        return self

    def add_render_controller(self, controller: Mapping[str, Any]) -> "PackAssembler":
        self.resource.render_controllers.append(
            _named_collection("render_controller", controller, "render_controllers")
        )
        return self

    def add_geometry(self, geometry: Mapping[str, Any]) -> "PackAssembler":
        self.resource.geometries.append(_geometry_file(geometry))
        return self

    def add_sound_definitions(self, definitions: Mapping[str, Any]) -> "PackAssembler":
        """
        Merge named sound definitions.

        Accepts either a full sound_definitions.json document or a bare
        name → definition mapping. Names already defined are kept.
        """
        if not isinstance(definitions, Mapping):
            raise InvalidArtifactError("sound_definitions", None, "must be a JSON object")
        named = definitions.get("sound_definitions", definitions)
        if not isinstance(named, Mapping):
            raise InvalidArtifactError("sound_definitions", None, "'sound_definitions' must be a JSON object")

        for name, body in named.items():
            if name == "format_version":
                continue
            if name in self.resource.sound_definitions:
                logger.warning(f"[PackAssembler] Sound '{name}' already defined, keeping the first")
                continue
            self.resource.sound_definitions[name] = copy.deepcopy(body)
        return self

    def add_texture_file(self, path: str, data: Union[bytes, str]) -> "PackAssembler":
        """
        Add a texture image (raw bytes or base64) to the resource pack.

        The image is re-encoded as an RGBA PNG; corrupt data is rejected here.
        """
        safe_path = safe_relative_path(path)
        if safe_path is None:
            raise InvalidArtifactError("texture", str(path), "unsafe or empty path")
        if any(existing == safe_path for existing, _ in self.resource.texture_files):
            raise DuplicateArtifactError("texture", safe_path, "texture path already added")
        try:
            png = load_png(data)
        except ValueError as e:
            raise InvalidArtifactError("texture", safe_path, str(e)) from e
        self.resource.texture_files.append((safe_path, png))
        return self

    # === File trees ===

    def behavior_files(self) -> FileTree:
        """Ordered (path, content) pairs of the behavior pack"""
        files: FileTree = [("manifest.json", self.behavior.manifest.to_json_dict())]
        if self.pack_icon:
            files.append(("pack_icon.png", self.pack_icon))

        for record in self.behavior.entities:
            files.append((f"entities/{base_name(record['minecraft:entity']['description']['identifier'])}.json", record))
        for record in self.behavior.items:
            files.append((f"items/{base_name(record['minecraft:item']['description']['identifier'])}.json", record))
        for record in self.behavior.blocks:
            files.append((f"blocks/{base_name(record['minecraft:block']['description']['identifier'])}.json", record))
        for recipe in self.behavior.recipes:
            identifier = recipe[recipe_root_key(recipe)]["description"]["identifier"]
            files.append((f"recipes/{base_name(identifier)}.json", recipe))
        for path, content in self.behavior.loot_tables:
            files.append((path, content))
        for rules in self.behavior.spawn_rules:
            identifier = rules["minecraft:spawn_rules"]["description"]["identifier"]
            files.append((f"spawn_rules/{base_name(identifier)}.json", rules))

        scripts = self.behavior.scripts
        if scripts is not None:
            files.append((SCRIPT_ENTRY, scripts.main))
            for name, content in scripts.modules:
                files.append((f"scripts/{name}.js", content))

        return files

    def resource_files(self) -> FileTree:
        """Ordered (path, content) pairs of the resource pack"""
        files: FileTree = [("manifest.json", self.resource.manifest.to_json_dict())]
        if self.pack_icon:
            files.append(("pack_icon.png", self.pack_icon))

        for record in self.resource.entities:
            identifier = record["minecraft:client_entity"]["description"]["identifier"]
            files.append((f"entity/{base_name(identifier)}.entity.json", record))

        if self.resource.terrain_textures:
            files.append(("textures/terrain_texture.json", {
                "resource_pack_name": "vanilla",
                "texture_name": "atlas.terrain",
                "texture_data": self.resource.terrain_textures,
            }))
        if self.resource.item_textures:
            files.append(("textures/item_texture.json", {
                "resource_pack_name": "vanilla",
                "texture_name": "atlas.items",
                "texture_data": self.resource.item_textures,
            }))
        for path, data in self.resource.texture_files:
            files.append((path, data))

        for geometry in self.resource.geometries:
            files.append((f"models/entity/{_geometry_name(geometry)}.geo.json", geometry))
        for animation in self.resource.animations:
            name = _first_key_name(animation, "animations")
            files.append((f"animations/{name}.animation.json", animation))
        for controller in self.resource.animation_controllers:
            name = _first_key_name(controller, "animation_controllers")
            files.append((f"animation_controllers/{name}.json", controller))
        for controller in self.resource.render_controllers:
            name = _first_key_name(controller, "render_controllers")
            files.append((f"render_controllers/{name}.json", controller))

        if self.resource.sound_definitions:
            files.append(("sounds/sound_definitions.json", {
                "format_version": SOUND_DEFINITIONS_FORMAT_VERSION,
                "sound_definitions": self.resource.sound_definitions,
            }))
        if self.resource.block_sounds:
            files.append(("blocks.json", self.resource.block_sounds))

        return files


__all__ = [
    "PackAssembler",
    "BehaviorPackState",
    "ResourcePackState",
    "ScriptSet",
    "FileTree",
    "build_manifests",
    "safe_relative_path",
    "load_png",
    "recipe_root_key",
    "PackStateError",
    "ScriptingNotEnabledError",
    "ScriptingAlreadyEnabledError",
    "ArtifactError",
    "InvalidArtifactError",
    "DuplicateArtifactError",
]
