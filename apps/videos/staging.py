"""
Temporary on-disk artifacts created while one upload is processed
"""

import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass

from core.exceptions import ProcessingError

logger = logging.getLogger(__name__)

COPY_CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class StagedArtifact:
    """Handle to a temporary file; the file itself is closed once staged"""

    path: str


class StagingManager:
    """
    Owns the lifecycle of temporary files for a request.

    ``stage`` writes a new uniquely named file under the staging directory,
    ``adopt`` takes ownership of a file some other stage produced, and
    ``release`` removes a file. ``staged``/``adopted`` pair both with a
    guaranteed release.
    """

    def __init__(self, staging_dir, prefix='tubely-upload-', suffix='.mp4'):
        self.staging_dir = staging_dir
        self.prefix = prefix
        self.suffix = suffix

    def stage(self, reader):
        """Copy ``reader`` byte-for-byte into a new temporary file"""
        fd, path = tempfile.mkstemp(prefix=self.prefix, suffix=self.suffix, dir=self.staging_dir)
        artifact = StagedArtifact(path)
        try:
            with os.fdopen(fd, 'wb') as handle:
                if hasattr(reader, 'chunks'):
                    for chunk in reader.chunks(COPY_CHUNK_SIZE):
                        handle.write(chunk)
                else:
                    shutil.copyfileobj(reader, handle, COPY_CHUNK_SIZE)
        except OSError as exc:
            self.release(artifact)
            raise ProcessingError(f"Could not write staged file: {exc}") from exc

        logger.debug("Staged %s (%d bytes)", path, os.path.getsize(path))
        return artifact

    def adopt(self, path):
        return StagedArtifact(path)

    def release(self, artifact):
        """Remove the backing file; a missing file is not an error"""
        try:
            os.remove(artifact.path)
        except FileNotFoundError:
            return
        except OSError as exc:
            logger.warning("Could not remove staged file %s: %s", artifact.path, exc)
            return
        logger.debug("Released %s", artifact.path)

    @contextmanager
    def staged(self, reader):
        artifact = self.stage(reader)
        try:
            yield artifact
        finally:
            self.release(artifact)

    @contextmanager
    def adopted(self, path):
        artifact = self.adopt(path)
        try:
            yield artifact
        finally:
            self.release(artifact)
