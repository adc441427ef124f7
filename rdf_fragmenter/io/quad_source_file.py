"""
File quad source.

Loads quads from a local RDF file with rdflib. The serialization is taken
from an explicit format name or alias, or guessed from the file extension.

N-Triples and N-Quads are read line by line, so quads are produced in file
order and without holding the file in memory. Every other serialization is
parsed completely into a Dataset first; those quads come out grouped per
graph rather than in file order, and each ``get_quads()`` call runs a memory
pre-flight check before parsing.
"""

import logging
from pathlib import Path
from typing import Iterator, Optional, Union

from rdflib import Dataset, Graph
from rdflib.exceptions import ParserError
from rdflib.graph import DATASET_DEFAULT_GRAPH_ID
from rdflib.plugins.parsers.ntriples import W3CNTriplesParser, r_tail, r_wspace
from rdflib.util import guess_format

from ..core.services.memory import MemoryManager
from ..exceptions import ConfigurationError, QuadSourceError
from ..shared.models import Quad
from .quad_source import QuadSource

logger = logging.getLogger(__name__)


class QuadLineParser(W3CNTriplesParser):
    """
    Parses single N-Triples or N-Quads statements into quads.

    Blank node labels map to the same BNode for the lifetime of the parser.
    """

    def __init__(self, with_graph: bool = True):
        super().__init__()
        self.with_graph = with_graph

    def parse_quad(self, line: str) -> Optional[Quad]:
        """
        Parse one line.

        Returns:
            The quad on the line, or None for blank and comment lines.

        Raises:
            ParserError: If the line is not a valid statement.
        """
        self.line = line
        self.eat(r_wspace)
        if not self.line or self.line.startswith("#"):
            return None

        subject = self.subject()
        self.eat(r_wspace)
        predicate = self.predicate()
        self.eat(r_wspace)
        object_ = self.object()
        self.eat(r_wspace)

        graph = None
        if self.with_graph:
            graph = self.uriref() or self.nodeid() or None
        self.eat(r_tail)

        if self.line:
            raise ParserError(f"Trailing garbage: {self.line}")
        return Quad(subject, predicate, object_, graph)


class FileQuadSource(QuadSource):
    """
    A quad source that loads quads from a file.

    Quads of triple-only formats (Turtle, N-Triples, RDF/XML, ...) land in
    the default graph, i.e. ``graph=None``.

    Example:
        source = FileQuadSource("dataset.nq", base_iri="http://example.org/")
        for quad in source.get_quads():
            print(quad.subject)
    """

    SUPPORTED_FORMATS = {
        "turtle",
        "xml",
        "nt",
        "n3",
        "trig",
        "nquads",
        "trix",
        "json-ld",
        "hext",
    }

    # Formats read statement by statement, in file order
    LINE_FORMATS = {"nt", "nquads"}

    FORMAT_ALIASES = {
        "ttl": "turtle",
        "rdf": "xml",
        "rdfxml": "xml",
        "rdf-xml": "xml",
        "owl": "xml",
        "ntriples": "nt",
        "n-triples": "nt",
        "nq": "nquads",
        "n-quads": "nquads",
        "jsonld": "json-ld",
        "json_ld": "json-ld",
        "hextuples": "hext",
    }

    def __init__(
        self,
        file_path: Union[str, Path],
        base_iri: Optional[str] = None,
        rdf_format: Optional[str] = None,
        force: bool = False,
    ):
        """
        Args:
            file_path: Path to a local RDF file. Should carry an extension
                       unless ``rdf_format`` is given.
            base_iri: Optional base IRI to resolve relative IRIs against.
                      N-Triples and N-Quads only hold absolute IRIs and ignore it.
            rdf_format: Optional serialization name or alias.
            force: Parse even when the memory pre-flight check fails.
                   Only used by formats parsed into a Dataset.

        Raises:
            ConfigurationError: If the format cannot be determined or is unsupported.
        """
        self.file_path = Path(file_path)
        self.base_iri = base_iri
        self.force = force
        self.rdf_format = self.resolve_format(rdf_format, self.file_path)

    def __repr__(self) -> str:
        return f"FileQuadSource({str(self.file_path)!r}, format={self.rdf_format!r})"

    @classmethod
    def normalize_format(cls, rdf_format: Optional[str]) -> Optional[str]:
        """Normalize a user-provided format or alias to an rdflib format name."""
        if not rdf_format:
            return None
        fmt = rdf_format.strip().lower()
        return cls.FORMAT_ALIASES.get(fmt, fmt)

    @classmethod
    def resolve_format(cls, rdf_format: Optional[str], file_path: Path) -> str:
        """Resolve the effective format from explicit input or the file extension."""
        normalized = cls.normalize_format(rdf_format) or cls.normalize_format(
            guess_format(str(file_path))
        )
        if not normalized:
            raise ConfigurationError(
                f"Could not determine the RDF format of '{file_path}'; "
                f"set a format explicitly",
                component="FileQuadSource",
            )
        if normalized not in cls.SUPPORTED_FORMATS:
            raise ConfigurationError(
                f"Unsupported RDF serialization format '{rdf_format or normalized}'. "
                f"Supported formats: {sorted(cls.SUPPORTED_FORMATS)}",
                component="FileQuadSource",
            )
        return normalized

    def get_quads(self) -> Iterator[Quad]:
        if not self.file_path.is_file():
            raise QuadSourceError(f"File not found: {self.file_path}", component="FileQuadSource")

        if self.rdf_format in self.LINE_FORMATS:
            quads = self._read_lines()
        else:
            quads = self._read_dataset()

        count = 0
        for quad in quads:
            count += 1
            yield quad
        logger.info(f"Read {count} quads from {self.file_path}")

    def _read_lines(self) -> Iterator[Quad]:
        logger.info(f"Streaming {self.file_path} ({self.rdf_format})")
        parser = QuadLineParser(with_graph=self.rdf_format == "nquads")
        with open(self.file_path, encoding='utf-8') as f:
            line_number = 0
            try:
                for line_number, line in enumerate(f, start=1):
                    quad = parser.parse_quad(line.rstrip("\r\n"))
                    if quad is not None:
                        yield quad
            except (ParserError, UnicodeDecodeError) as e:
                logger.error(f"Failed to parse {self.file_path} at line {line_number}: {e}")
                raise QuadSourceError(
                    f"Invalid RDF syntax in {self.file_path} at line {line_number}: {e}",
                    component="FileQuadSource",
                ) from e

    def _read_dataset(self) -> Iterator[Quad]:
        dataset = self._load_dataset()
        for s, p, o, g in dataset.quads((None, None, None, None)):
            yield Quad(s, p, o, self._graph_label(g))

    def _load_dataset(self) -> Dataset:
        file_size_mb = self.file_path.stat().st_size / (1024 * 1024)
        can_proceed, memory_message = MemoryManager.check_memory_available(
            file_size_mb, force=self.force
        )
        if not can_proceed:
            logger.error(f"Memory check failed: {memory_message}")
            raise QuadSourceError(memory_message, component="FileQuadSource")
        logger.debug(f"Memory check: {memory_message}")

        logger.info(f"Parsing {self.file_path} ({self.rdf_format}, {file_size_mb:.2f} MB)")
        dataset = Dataset()
        try:
            # Parse into the default graph so unnamed statements keep graph=None
            dataset.default_graph.parse(
                str(self.file_path), format=self.rdf_format, publicID=self.base_iri
            )
        except MemoryError as e:
            logger.error(MemoryManager.format_memory_status())
            raise QuadSourceError(
                f"Insufficient memory while parsing {self.file_path} ({file_size_mb:.1f} MB)",
                component="FileQuadSource",
            ) from e
        except Exception as e:
            logger.error(f"Failed to parse RDF file {self.file_path}: {e}")
            raise QuadSourceError(
                f"Invalid RDF syntax in {self.file_path}: {e}",
                component="FileQuadSource",
            ) from e

        logger.debug(
            f"Finished parsing {self.file_path}, "
            f"process now uses {MemoryManager.get_memory_usage_mb():.1f} MB"
        )
        return dataset

    @staticmethod
    def _graph_label(graph):
        if isinstance(graph, Graph):
            graph = graph.identifier
        if graph is None or graph == DATASET_DEFAULT_GRAPH_ID:
            return None
        return graph
