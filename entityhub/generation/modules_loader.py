##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module handles uploading generated modules (query options) to the server.

Uploads run on a bounded thread pool. The wait for them is bounded too: once
it runs out, uploads still queued are cancelled, while one already running is
only bounded by the client's request timeout. The pool is shut down after
every running upload has finished. A properties file records when each module
was last uploaded so unchanged modules are skipped; deleting that file forces a
full redeploy.
"""

import logging
import os
import time
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Any, List

from filelock import FileLock

from entityhub.exceptions import GenerationError
from entityhub.utils import read_properties, write_properties


LOG = logging.getLogger("entityhub")

DEFAULT_POOL_SIZE = 16
# 10 minutes should be plenty of time to wait for modules to be loaded
DEFAULT_AWAIT_TERMINATION_SECONDS = 60 * 10


class ModuleTimestamps:
    """
    Records when each module file was last uploaded.

    Attributes:
        properties_file: The properties file holding `<module path>=<epoch millis>` entries.
        lock_timeout: Seconds to wait for the properties file lock.

    Methods:
        delete_properties_file: Forget every recorded upload.
        has_file_been_modified_since_last_loaded: Check whether a module needs uploading.
        save_last_loaded_timestamp: Record that a module was uploaded.
    """

    def __init__(self, properties_file: str, lock_timeout: int = 10):
        self.properties_file = properties_file
        self.lock_timeout = lock_timeout

    def _lock(self) -> FileLock:
        # Pylint complains that we're instantiating an abstract class but this is correct usage
        return FileLock(f"{self.properties_file}.lock")  # pylint: disable=abstract-class-instantiated

    def delete_properties_file(self):
        """Forget every recorded upload so all modules are uploaded again."""
        if os.path.exists(self.properties_file):
            os.remove(self.properties_file)
            LOG.info(f"Deleted module timestamps file {self.properties_file}.")

    def has_file_been_modified_since_last_loaded(self, filepath: str) -> bool:
        """
        Check whether a module file changed after its last recorded upload.

        Args:
            filepath: The module file.

        Returns:
            True if the file was never uploaded or has been modified since.
        """
        recorded = read_properties(self.properties_file).get(os.path.abspath(filepath))
        if recorded is None:
            return True
        return int(os.path.getmtime(filepath) * 1000) > int(recorded)

    def save_last_loaded_timestamp(self, filepath: str, timestamp: int = None):
        """
        Record that a module file was uploaded.

        Args:
            filepath: The module file.
            timestamp: Upload time in epoch milliseconds. Defaults to now.
        """
        timestamp = timestamp if timestamp is not None else int(time.time() * 1000)
        with self._lock().acquire(timeout=self.lock_timeout):
            properties = read_properties(self.properties_file)
            properties[os.path.abspath(filepath)] = timestamp
            write_properties(self.properties_file, properties)


class ModulesLoader:
    """
    Uploads module files to the server on a bounded thread pool.

    Use it as a context manager; leaving the block waits for every submitted
    upload before the pool is shut down.

    Attributes:
        client (client.database_client.DatabaseClient): The connection modules are uploaded to.
        timestamps: Records when each module was last uploaded.
        await_termination_seconds: How long to wait for outstanding uploads.

    Methods:
        install_query_options: Queue an upload of a query options file.
        wait_for_completion: Block until every queued upload finished.
        shutdown: Wait for outstanding uploads and shut the pool down.
    """

    def __init__(
        self,
        client: Any,
        timestamps: ModuleTimestamps,
        pool_size: int = DEFAULT_POOL_SIZE,
        await_termination_seconds: float = DEFAULT_AWAIT_TERMINATION_SECONDS,
    ):
        """
        Initialize the loader.

        Args:
            client (client.database_client.DatabaseClient): The connection modules are uploaded to.
            timestamps: Records when each module was last uploaded.
            pool_size: Maximum number of concurrent uploads.
            await_termination_seconds: How long to wait for outstanding uploads.
        """
        self.client = client
        self.timestamps = timestamps
        self.await_termination_seconds = await_termination_seconds
        self.executor = ThreadPoolExecutor(max_workers=pool_size, thread_name_prefix="entityhub-modules")
        self._futures: List[Future] = []

    def __enter__(self) -> "ModulesLoader":
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.shutdown()

    def install_query_options(self, filepath: str) -> Future:
        """
        Queue an upload of a query options file.

        The options are installed under the file's name without its extensions.

        Args:
            filepath: The query options file.

        Returns:
            A future resolving to True if the file was uploaded, False if it was unchanged.
        """
        future = self.executor.submit(self._install_query_options, filepath)
        self._futures.append(future)
        return future

    def _install_query_options(self, filepath: str) -> bool:
        if not self.timestamps.has_file_been_modified_since_last_loaded(filepath):
            LOG.info(f"Query options {filepath} are unchanged since the last upload. Skipping.")
            return False

        basename = os.path.basename(filepath)
        options_name = basename.split(".", 1)[0]
        fmt = "json" if basename.endswith(".json") else "xml"
        with open(filepath, "r", encoding="utf-8") as options_file:
            content = options_file.read()

        self.client.put_query_options(options_name, content, fmt=fmt)
        self.timestamps.save_last_loaded_timestamp(filepath)
        LOG.info(f"Installed query options '{options_name}' from {filepath}.")
        return True

    def wait_for_completion(self) -> List[Any]:
        """
        Block until every queued upload finished.

        Returns:
            The result of every upload, in submission order.

        Raises:
            GenerationError: If the uploads didn't finish within `await_termination_seconds`.
            Exception: The first error raised by an upload.
        """
        futures, self._futures = self._futures, []
        if not futures:
            return []

        _, not_done = wait(futures, timeout=self.await_termination_seconds, return_when=FIRST_EXCEPTION)
        failed = [future for future in futures if future.done() and future.exception() is not None]
        if failed:
            wait(not_done, timeout=self.await_termination_seconds)
            raise failed[0].exception()
        if not_done:
            for future in not_done:
                future.cancel()
            raise GenerationError(
                f"{len(not_done)} module upload(s) did not finish within {self.await_termination_seconds} seconds."
            )
        return [future.result() for future in futures]

    def shutdown(self):
        """
        Wait for outstanding uploads, then shut the thread pool down.

        Uploads still queued when `await_termination_seconds` runs out are
        cancelled. An upload that is already running can't be interrupted, so
        shutting down can take until it finishes or hits the client's own
        request timeout.

        Raises:
            GenerationError: If the uploads didn't finish within `await_termination_seconds`.
            Exception: The first error raised by an upload.
        """
        try:
            self.wait_for_completion()
        finally:
            self.executor.shutdown(wait=True, cancel_futures=True)
