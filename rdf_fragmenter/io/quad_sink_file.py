"""
File quad sink.

Writes quads as N-Quads, or as N-Triples without graphs, into local files
using an IRI prefix to local path mapping. Files are opened in append
mode, so a document that was evicted from the open-file cache can be
reopened later in the same run.
"""

import logging
import re
from collections import OrderedDict
from pathlib import Path
from typing import Dict, IO, Optional

from tqdm import tqdm

from ..exceptions import ConfigurationError, QuadSinkError
from ..shared.models import Quad, quad_to_nquads
from .quad_sink import QuadSink

logger = logging.getLogger(__name__)

_ILLEGAL_PATH_CHARS = re.compile(r'[*|"<>?:]')

# Line-based serializations only, so evicted files can be appended to later
OUTPUT_FORMATS = {
    "application/n-quads": "nquads",
    "nquads": "nquads",
    "nq": "nquads",
    "application/n-triples": "nt",
    "nt": "nt",
    "ntriples": "nt",
}


class FileQuadSink(QuadSink):
    """
    A quad sink that writes to files using an IRI to path mapping.

    The first entry of ``iri_to_path`` whose IRI prefix matches the document
    IRI determines the file: the prefix is replaced by the mapped base path.
    Hash fragments are removed from document IRIs before mapping.

    At most ``max_open_files`` files are kept open at once; the least
    recently used one is closed when another file is needed.

    Example:
        sink = FileQuadSink({"http://example.org/": "out/"}, file_extension=".nq")
        sink.push("http://example.org/people/alice", quad)
        sink.close()
    """

    def __init__(
        self,
        iri_to_path: Dict[str, str],
        file_extension: Optional[str] = None,
        max_open_files: int = 128,
        log_progress: bool = False,
        output_format: str = "application/n-quads",
    ):
        if not iri_to_path:
            raise ConfigurationError("iri_to_path must contain at least one mapping", component="FileQuadSink")
        if max_open_files <= 0:
            raise ConfigurationError("max_open_files must be positive", component="FileQuadSink")
        if output_format.lower() not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Unsupported output format '{output_format}'. Supported formats: {sorted(OUTPUT_FORMATS)}",
                component="FileQuadSink",
            )

        self.iri_to_path = dict(iri_to_path)
        self.file_extension = file_extension
        self.max_open_files = max_open_files
        self.output_format = OUTPUT_FORMATS[output_format.lower()]
        self.counter = 0

        self._open_files: "OrderedDict[str, IO[str]]" = OrderedDict()
        self._closed = False
        self._progress = tqdm(desc="Handled quads", unit=" quads", disable=not log_progress)

    def get_file_path(self, iri: str) -> str:
        """
        Map a document IRI to a local file path.

        Raises:
            QuadSinkError: If no IRI prefix matches.
        """
        path = None
        for base_iri, base_path in self.iri_to_path.items():
            if iri.startswith(base_iri):
                path = base_path + _ILLEGAL_PATH_CHARS.sub('_', iri[len(base_iri):])
                break

        if path is None:
            raise QuadSinkError(f"No IRI mapping found for {iri}", component="FileQuadSink")

        if self.file_extension and not path.endswith(self.file_extension):
            path = f"{path}{self.file_extension}"

        return path

    def push(self, iri: str, quad: Quad) -> None:
        if self._closed:
            raise QuadSinkError("Cannot push into a closed sink", component="FileQuadSink")

        self.counter += 1
        self._progress.update(1)

        iri = iri.split('#', 1)[0]
        path = self.get_file_path(iri)
        if self.output_format == "nt":
            quad = quad._replace(graph=None)
        self._get_file(path).write(quad_to_nquads(quad))

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True

        while self._open_files:
            _, handle = self._open_files.popitem(last=False)
            handle.close()
        self._progress.close()
        logger.info(f"Wrote {self.counter} quads")

    def _get_file(self, path: str) -> IO[str]:
        handle = self._open_files.get(path)
        if handle is not None:
            self._open_files.move_to_end(path)
            return handle

        if len(self._open_files) >= self.max_open_files:
            evicted_path, evicted = self._open_files.popitem(last=False)
            evicted.close()
            logger.debug(f"Closed {evicted_path} to stay under {self.max_open_files} open files")

        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        handle = open(target, 'a', encoding='utf-8')
        self._open_files[path] = handle
        logger.debug(f"Opened {path}")
        return handle
