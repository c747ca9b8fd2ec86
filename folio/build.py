"""Build pipeline for Folio.

This module wires the three stages together: it loads configuration, loads and
validates every post, and hands the sorted Documents to the assembler.

Key functions:
- build_site: Run the whole pipeline for a project directory.
- load_documents: Load and validate every post, optionally in parallel.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from pathlib import Path

from .assembler import RenderPlan, SiteAssembler
from .collections import SiteCollection
from .config import SiteConfig, load_config
from .content import Document, DocumentLoader
from .validation import MetadataValidator

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Result of a build.

    Attributes:
        collection: All validated documents with their indexes.
        plan: Pages the renderer has to produce.
        config: Configuration the build ran with.
    """

    collection: SiteCollection
    plan: RenderPlan
    config: SiteConfig


def load_documents(config: SiteConfig) -> list[Document]:
    """Load and validate every post under the posts directory.

    With ``config.workers > 1`` files are processed on a thread pool. Results
    are always sorted by identifier, and the error of the first failing file
    (in path order) is the one raised.

    Raises:
        ContentError: Any load or validation failure.
    """
    loader = DocumentLoader(config)
    validator = MetadataValidator(config)

    def process(path: Path) -> Document:
        return validator.validate(loader.load(path))

    paths = loader.iter_files()
    if config.workers > 1 and len(paths) > 1:
        logger.debug("Processing %d files on %d workers", len(paths), config.workers)
        with ThreadPoolExecutor(max_workers=config.workers) as pool:
            futures = [pool.submit(process, path) for path in paths]
            # result() re-raises in submission order
            documents = [future.result() for future in futures]
    else:
        documents = [process(path) for path in paths]
    documents.sort(key=lambda doc: (doc.identifier, str(doc.source_path)))
    return documents


def build_site(
    project_root: Path,
    config: SiteConfig | None = None,
    workers: int | None = None,
) -> BuildResult:
    """Run the pipeline for a project.

    Either every document validates and a complete result is returned, or the
    first error propagates and nothing is returned.

    Args:
        project_root: Root directory of the project.
        config: Pre-built configuration; loaded from folio.yaml when omitted.
        workers: Optional override for the number of worker threads.

    Returns:
        BuildResult with the collection and rendering plan.
    """
    if config is None:
        config = load_config(project_root, workers=workers)
    elif workers is not None:
        config = replace(config, workers=workers).validate()
    documents = load_documents(config)
    assembler = SiteAssembler(config)
    collection = assembler.assemble(documents)
    plan = assembler.plan(collection)
    logger.info("Built %d documents into %d render targets", len(collection), len(plan))
    return BuildResult(collection=collection, plan=plan, config=config)
