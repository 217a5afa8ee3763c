"""
Validator - Pre-Build Validation

Responsibilities:
- Check that every archive path stays inside its pack folder
- Check that no two artifacts map to the same archive path
- Check that every JSON document is serializable
- Verify the behavior pack depends on the resource pack's UUID
- Verify the script module, entry file and server dependency agree

Runs before any archive is written, so a failing build never returns a
partial archive.
"""
import json
import logging
from collections import Counter
from typing import Any, Dict, List, Optional

from addon_generator.core.pack_assembler import (
    SCRIPT_ENTRY,
    SCRIPT_MODULE_NAME,
    FileTree,
    PackAssembler,
    safe_relative_path,
)

logger = logging.getLogger(__name__)


class ValidationIssue:
    """A single validation issue"""
    def __init__(self, severity: str, category: str, message: str, file_path: Optional[str] = None):
        self.severity = severity  # ERROR, WARNING
        self.category = category  # path, json, manifest, script
        self.message = message
        self.file_path = file_path

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self.severity,
            "category": self.category,
            "message": self.message,
            "file_path": self.file_path,
        }

    def __repr__(self):
        return f"[{self.severity}] {self.category}: {self.message}" + (f" ({self.file_path})" if self.file_path else "")


class ValidationError(Exception):
    """Raised when validation fails"""
    def __init__(self, message: str, issues: List[ValidationIssue]):
        super().__init__(message)
        self.issues = issues


class Validator:
    """
    Validator - Pre-build validation

    Catches inconsistent pack state before archives are serialized.
    """

    def __init__(self):
        self.issues: List[ValidationIssue] = []

    def validate(self, pack: PackAssembler, behavior_files: FileTree, resource_files: FileTree) -> Dict[str, Any]:
        """
        Validate both pack file trees

        Args:
            pack: Pack state (manifests)
            behavior_files: Behavior pack (path, content) pairs
            resource_files: Resource pack (path, content) pairs

        Returns:
            Validation report

        Raises:
            ValidationError: If any ERROR issue is found
        """
        self.issues = []

        logger.info(f"[Validator] Validating addon: {pack.config.name}")

        self._validate_paths("behavior", behavior_files)
        self._validate_paths("resource", resource_files)
        self._validate_json_files(behavior_files)
        self._validate_json_files(resource_files)
        self._validate_manifests(pack)
        self._validate_scripts(pack, behavior_files)

        errors = [i for i in self.issues if i.severity == "ERROR"]
        warnings = [i for i in self.issues if i.severity == "WARNING"]

        report = {
            "status": "failed" if errors else "passed",
            "total_issues": len(self.issues),
            "errors": len(errors),
            "warnings": len(warnings),
            "issues": [str(i) for i in self.issues],
        }

        if errors:
            logger.error(f"[Validator] Validation failed: {len(errors)} errors")
            for error in errors[:5]:
                logger.error(f"[Validator]   - {error}")
            raise ValidationError(f"Validation failed with {len(errors)} errors", errors)

        logger.info(f"[Validator] Validation passed ({len(warnings)} warnings)")
        return report

    def _validate_paths(self, pack_kind: str, files: FileTree):
        """Every path stays inside the pack folder, and no two artifacts share one"""
        for path, _ in files:
            if safe_relative_path(path) != path:
                self.issues.append(ValidationIssue(
                    "ERROR", "path",
                    f"{pack_kind.capitalize()} pack path is not a normalized path inside the pack",
                    path
                ))

        counts = Counter(path for path, _ in files)
        for path, count in counts.items():
            if count > 1:
                self.issues.append(ValidationIssue(
                    "ERROR", "path",
                    f"{count} {pack_kind} pack artifacts map to the same file",
                    path
                ))

    def _validate_json_files(self, files: FileTree):
        for path, content in files:
            if isinstance(content, (bytes, bytearray, str)):
                continue
            try:
                json.dumps(content)
            except (TypeError, ValueError) as e:
                self.issues.append(ValidationIssue(
                    "ERROR", "json",
                    f"Not JSON-serializable: {e}",
                    path
                ))

    def _validate_manifests(self, pack: PackAssembler):
        behavior = pack.behavior.manifest
        resource = pack.resource.manifest

        pack_dependencies = [d.uuid for d in (behavior.dependencies or []) if d.uuid]
        if resource.header.uuid not in pack_dependencies:
            self.issues.append(ValidationIssue(
                "ERROR", "manifest",
                "Behavior pack does not depend on the resource pack UUID",
                "manifest.json"
            ))
        if behavior.header.uuid == resource.header.uuid:
            self.issues.append(ValidationIssue(
                "ERROR", "manifest",
                "Behavior and resource packs share a UUID",
                "manifest.json"
            ))

    def _validate_scripts(self, pack: PackAssembler, behavior_files: FileTree):
        behavior = pack.behavior.manifest
        script_modules = [m for m in behavior.modules if m.type == "script"]
        server_dependencies = [
            d for d in (behavior.dependencies or []) if d.module_name == SCRIPT_MODULE_NAME
        ]

        if len(script_modules) > 1:
            self.issues.append(ValidationIssue(
                "ERROR", "script",
                f"{len(script_modules)} script modules declared",
                "manifest.json"
            ))
        if script_modules and not server_dependencies:
            self.issues.append(ValidationIssue(
                "ERROR", "script",
                f"Script module without a {SCRIPT_MODULE_NAME} dependency",
                "manifest.json"
            ))

        if script_modules:
            entry = dict(behavior_files).get(SCRIPT_ENTRY)
            if entry is None:
                self.issues.append(ValidationIssue(
                    "ERROR", "script",
                    "Script entry file is missing",
                    SCRIPT_ENTRY
                ))
            elif not entry.strip():
                self.issues.append(ValidationIssue(
                    "WARNING", "script",
                    "Script entry file is empty",
                    SCRIPT_ENTRY
                ))


__all__ = ["Validator", "ValidationError", "ValidationIssue"]
