"""
Builder - Pack State → Archives

Responsibilities:
- Fluent AddonBuilder API over the pack assembler
- Batch adds that isolate per-artifact failures
- Validate, then serialize both packs and the combined archive

The two pack archives have no data dependency and are serialized in
parallel; the combined archive is built only after both are done.
"""
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel, Field
from pydantic import ValidationError as SchemaValidationError

from addon_generator.schemas import (
    BlockDefinition,
    BuildMetadata,
    BuildResult,
    EntityDefinition,
    ItemDefinition,
)
from addon_generator.core.archive import combine_archives, serialize_files
from addon_generator.core.pack_assembler import ArtifactError, PackAssembler
from addon_generator.core.validator import Validator

logger = logging.getLogger(__name__)


class BatchFailure(BaseModel):
    """One artifact of a batch that could not be added"""
    kind: str
    index: int
    identifier: Optional[str] = None
    message: str


class BatchReport(BaseModel):
    added: int = Field(0, ge=0)
    failures: List[BatchFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def _raw_identifier(definition: Any) -> Optional[str]:
    if isinstance(definition, Mapping):
        value = definition.get("identifier")
    else:
        value = getattr(definition, "identifier", None)
    return value if isinstance(value, str) else None


def _schema_message(error: SchemaValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in e['loc']) or 'definition'}: {e['msg']}"
        for e in error.errors()
    )


class AddonBuilder(PackAssembler):
    """
    AddonBuilder - builds an installable addon

    Usage:
        builder = AddonBuilder({"name": "My Addon", "namespace": "myns"})
        result = builder.add_entity({"identifier": "golem"}).build()
    """

    def _add_batch(
        self,
        kind: str,
        definitions: Iterable[Any],
        add: Callable[[Any], Any],
    ) -> BatchReport:
        report = BatchReport()
        for index, definition in enumerate(definitions):
            try:
                add(definition)
                report.added += 1
            except ArtifactError as e:
                report.failures.append(BatchFailure(
                    kind=kind,
                    index=index,
                    identifier=e.identifier or _raw_identifier(definition),
                    message=e.message,
                ))
            except SchemaValidationError as e:
                report.failures.append(BatchFailure(
                    kind=kind,
                    index=index,
                    identifier=_raw_identifier(definition),
                    message=_schema_message(e),
                ))

        if report.failures:
            total = report.added + len(report.failures)
            logger.warning(f"[Builder] {len(report.failures)} of {total} {kind} definitions failed")
        return report

    def add_entities(self, definitions: Iterable[Union[EntityDefinition, Mapping[str, Any]]]) -> BatchReport:
        """Add each entity independently; failures are reported, not raised"""
        return self._add_batch("entity", definitions, self.add_entity)

    def add_items(self, definitions: Iterable[Union[ItemDefinition, Mapping[str, Any]]]) -> BatchReport:
        return self._add_batch("item", definitions, self.add_item)

    def add_blocks(self, definitions: Iterable[Union[BlockDefinition, Mapping[str, Any]]]) -> BatchReport:
        return self._add_batch("block", definitions, self.add_block)

    def build(self) -> BuildResult:
        """
        Build all three archives

        Returns:
            BuildResult with the behavior, resource and combined archives

        Raises:
            ValidationError: If the pack state is inconsistent
            ArchiveError: If serialization fails
        """
        start_time = time.time()
        behavior_files = self.behavior_files()
        resource_files = self.resource_files()

        Validator().validate(self, behavior_files, resource_files)

        with ThreadPoolExecutor(max_workers=2) as executor:
            behavior_future = executor.submit(serialize_files, behavior_files)
            resource_future = executor.submit(serialize_files, resource_files)
            behavior_archive = behavior_future.result()
            resource_archive = resource_future.result()

        mcaddon = combine_archives(self.config.name, behavior_archive, resource_archive)

        metadata = BuildMetadata(
            name=self.config.name,
            namespace=self.config.namespace,
            version=self.config.version,
            behavior_uuid=self.behavior_uuid,
            resource_uuid=self.resource_uuid,
            entity_count=self.entity_count,
            item_count=self.item_count,
            block_count=self.block_count,
        )

        logger.info(
            f"[Builder] Built '{self.config.name}' in {time.time() - start_time:.2f}s "
            f"({len(behavior_files)} BP files, {len(resource_files)} RP files, {len(mcaddon)} bytes)"
        )
        return BuildResult(
            behavior_pack=behavior_archive,
            resource_pack=resource_archive,
            mcaddon=mcaddon,
            metadata=metadata,
        )


__all__ = ["AddonBuilder", "BatchReport", "BatchFailure"]
