##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module defines `ArtifactGenerator`, which regenerates the server-side
artifacts derived from a project's entity definitions.

Two independent pipelines share one raw read of the definition files:

- search options: generated on the staging server, written to
  `entity-config/entity-options.xml` and installed on the final server;
- database indexes: generated on the final server and written, byte for byte,
  to both `final-database.json` and `staging-database.json`.

Neither pipeline raises. Each returns a
[`GenerationResult`][generation.artifact_generator.GenerationResult] so callers can
tell "ran", "had nothing to do" and "failed" apart. Artifacts are written to
a staging directory under `.tmp/` and only moved into place once the whole
pipeline succeeded, so on failure the published artifacts are left untouched.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

import httpx

from entityhub.common.enums import GenerationStatus
from entityhub.config.config_filepaths import FINAL_DATABASE_FILE, STAGING_DATABASE_FILE
from entityhub.config.environment import EnvironmentConfig
from entityhub.exceptions import GenerationError, MalformedDefinitionError
from entityhub.generation.generators import DbIndexGenerator, SearchOptionsGenerator
from entityhub.generation.modules_loader import (
    DEFAULT_AWAIT_TERMINATION_SECONDS,
    DEFAULT_POOL_SIZE,
    ModulesLoader,
    ModuleTimestamps,
)
from entityhub.stores.entity_definition_store import EntityDefinitionStore
from entityhub.utils import ensure_directory_exists, write_text_file


LOG = logging.getLogger("entityhub")

GENERATION_ERRORS = (GenerationError, MalformedDefinitionError, httpx.HTTPError, OSError)


@dataclass
class GenerationResult:
    """
    The outcome of one generation pipeline.

    Attributes:
        artifact: Which artifact was being generated ("search-options" or "db-indexes").
        status: Whether it was generated, skipped or failed.
        files: The files that were written.
        error: What went wrong, when the status is FAILED.
    """

    artifact: str
    status: GenerationStatus
    files: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True unless the pipeline failed."""
        return self.status != GenerationStatus.FAILED


class ArtifactGenerator:
    """
    Regenerates search options and database index configuration for a project.

    Attributes:
        env: The environment to generate for.
        store: Used to read the raw entity definitions.
        pool_size: Maximum number of concurrent module uploads.
        await_termination_seconds: How long to wait for module uploads to finish.

    Methods:
        list_raw_entity_documents: Read every entity definition as plain JSON.
        save_search_options: Regenerate, write and install the search options.
        save_db_indexes: Regenerate and write the database index configuration.
        regenerate: Run both pipelines.
    """

    def __init__(
        self,
        env: EnvironmentConfig,
        store: EntityDefinitionStore = None,
        pool_size: int = DEFAULT_POOL_SIZE,
        await_termination_seconds: float = DEFAULT_AWAIT_TERMINATION_SECONDS,
    ):
        """
        Initialize the generator.

        Args:
            env: The environment to generate for.
            store: The definition store to read from. One is created for `env` if not given.
            pool_size: Maximum number of concurrent module uploads.
            await_termination_seconds: How long to wait for module uploads to finish.
        """
        self.env = env
        self.store = store or EntityDefinitionStore(env)
        self.pool_size = pool_size
        self.await_termination_seconds = await_termination_seconds

    def list_raw_entity_documents(self) -> List[Any]:
        """
        Read every entity definition as plain JSON, without flows or UI metadata.

        Returns:
            The raw definition documents.

        Raises:
            MalformedDefinitionError: If a definition file isn't valid JSON.
        """
        return self.store.list_raw_documents()

    def _new_modules_loader(self) -> ModulesLoader:
        timestamps = ModuleTimestamps(self.env.modules_deploy_timestamps_file)
        # Forget previous uploads so every module gets deployed again
        timestamps.delete_properties_file()
        return ModulesLoader(
            self.env.final_client,
            timestamps,
            pool_size=self.pool_size,
            await_termination_seconds=self.await_termination_seconds,
        )

    def _stage(self, target_file: str, content: str) -> str:
        staged_file = os.path.join(self.env.staged_artifacts_dir, os.path.basename(target_file))
        write_text_file(staged_file, content)
        return staged_file

    @staticmethod
    def _publish(staged_files: List[str], target_files: List[str]):
        """
        Move staged artifacts over the published ones.

        Every staged file is complete before the first one is moved, and each
        move is an atomic rename within the project.

        Args:
            staged_files: The staged artifacts.
            target_files: Where each staged artifact is published, in the same order.
        """
        for staged_file, target_file in zip(staged_files, target_files):
            ensure_directory_exists(os.path.dirname(target_file))
            os.replace(staged_file, target_file)

    @staticmethod
    def _discard(staged_files: List[str]):
        # Published files have already been moved away
        for staged_file in staged_files:
            if os.path.exists(staged_file):
                os.remove(staged_file)

    def save_search_options(self) -> GenerationResult:
        """
        Regenerate the search options, install them and publish them to disk.

        The options are installed from a staged copy, which only replaces the
        published file once the install succeeded. Nothing is generated or
        written when the project has no entity definitions.

        Returns:
            The outcome. Never raises for generation, network or filesystem errors.
        """
        artifact = "search-options"
        options_file = self.env.search_options_file
        staged_files = []
        try:
            with self._new_modules_loader() as modules_loader:
                entities = self.list_raw_entity_documents()
                if not entities:
                    LOG.info("No entity definitions found. Skipping search options generation.")
                    return GenerationResult(artifact, GenerationStatus.SKIPPED)

                options = SearchOptionsGenerator(self.env.staging_client).generate(entities)
                staged_files.append(self._stage(options_file, options))

                modules_loader.install_query_options(staged_files[0])
                modules_loader.wait_for_completion()

            self._publish(staged_files, [options_file])
            LOG.info(f"Wrote search options to {options_file}.")
        except GENERATION_ERRORS as exc:
            LOG.error(f"Failed to generate search options: {exc}")
            return GenerationResult(artifact, GenerationStatus.FAILED, error=str(exc))
        finally:
            self._discard(staged_files)

        return GenerationResult(artifact, GenerationStatus.GENERATED, files=[options_file])

    def save_db_indexes(self) -> GenerationResult:
        """
        Regenerate the database index configuration and write it to disk.

        The same document is written to both the final and the staging database
        configuration files.

        Returns:
            The outcome. Never raises for generation, network or filesystem errors.
        """
        artifact = "db-indexes"
        files = [
            os.path.join(self.env.entity_database_dir, FINAL_DATABASE_FILE),
            os.path.join(self.env.entity_database_dir, STAGING_DATABASE_FILE),
        ]
        staged_files = []
        try:
            entities = self.list_raw_entity_documents()
            indexes = DbIndexGenerator(self.env.final_client).generate(entities)

            for db_file in files:
                staged_files.append(self._stage(db_file, indexes))
            self._publish(staged_files, files)
            LOG.info(f"Wrote database index configuration to {', '.join(files)}.")
        except GENERATION_ERRORS as exc:
            LOG.error(f"Failed to generate database indexes: {exc}")
            return GenerationResult(artifact, GenerationStatus.FAILED, error=str(exc))
        finally:
            self._discard(staged_files)

        return GenerationResult(artifact, GenerationStatus.GENERATED, files=files)

    def regenerate(self) -> Tuple[GenerationResult, GenerationResult]:
        """
        Regenerate every artifact.

        Returns:
            The search options result and the database indexes result.
        """
        return self.save_search_options(), self.save_db_indexes()
