"""
DependencyClosureBuilder — transitive assembly references of a seed list.

Per reference (depth-first):
  1. Resolve to (simple name, path): an existing file is taken as-is, a bare
     name is looked up in the runtime directory as <name>, <name>.dll, <name>.exe
  2. Already in the closure            → stop
  3. Path does not exist               → stop (dropped silently)
  4. Name in EXCLUDED_ASSEMBLY_NAMES   → stop, not added
  5. Name is System.Private.CoreLib    → add without opening
  6. Otherwise open via MetadataReader → add, then walk every reference;
     an unreadable module (native, corrupt) is skipped on its own

Cycles terminate because a name is added before its references are walked.
The walk keeps its own stack, so chain depth is not bound by the recursion limit.
"""

import logging
import os
from typing import Iterable, Optional

from fxresolver.data import CORE_LIBRARY_NAME, EXCLUDED_ASSEMBLY_NAMES
from fxresolver.exceptions import MetadataReadError
from fxresolver.metadata import MetadataReader
from .models import DependencyClosure

__all__ = ["DependencyClosureBuilder"]

logger = logging.getLogger(__name__)

_PROBE_EXTENSIONS = ("", ".dll", ".exe")


class DependencyClosureBuilder:
    """
    Usage::

        builder = DependencyClosureBuilder(runtime_dir, PeMetadataReader())
        closure = builder.build(glob.glob(os.path.join(runtime_dir, "*.dll")))
        print(closure.paths())
    """

    def __init__(self, runtime_dir: str, reader: MetadataReader) -> None:
        self._runtime_dir = runtime_dir
        self._reader = reader

    def build(self, seeds: Iterable[str]) -> DependencyClosure:
        """Walk every seed (path or simple name) into one closure."""
        closure = DependencyClosure()
        for reference in seeds:
            self._traverse(reference, closure)
        logger.debug("Dependency closure holds %d assemblies", len(closure))
        return closure

    # ── Resolution ────────────────────────────────────────────────────────────

    def resolve_reference(self, reference: str) -> tuple[str, str]:
        """(simple name, path) for a file path or a bare assembly name."""
        if os.path.isfile(reference):
            return os.path.splitext(os.path.basename(reference))[0], reference
        return reference, self.framework_path(reference)

    def framework_path(self, simple_name: str) -> str:
        """Path of `simple_name` in the runtime directory; the bare path if nothing exists."""
        root = os.path.join(self._runtime_dir, simple_name)
        for ext in _PROBE_EXTENSIONS:
            if os.path.isfile(root + ext):
                return root + ext
        return root

    # ── Walk ──────────────────────────────────────────────────────────────────

    def _traverse(self, reference: str, closure: DependencyClosure) -> None:
        # children pushed reversed so they pop in reference order (pre-order)
        pending = [reference]
        while pending:
            current = pending.pop()
            name, path = self.resolve_reference(current)

            if name in closure:
                continue
            if not os.path.isfile(path):
                logger.debug("Unresolved reference %s", current)
                continue
            if name in EXCLUDED_ASSEMBLY_NAMES:
                logger.debug("Excluded %s", name)
                continue
            if name == CORE_LIBRARY_NAME:
                closure.add(name, path)
                continue

            references = self._try_read_references(path)
            if references is None:
                continue
            closure.add(name, path)
            pending.extend(reversed(references))

    def _try_read_references(self, path: str) -> Optional[list[str]]:
        """Outbound assembly references of `path`, or None if it cannot be read."""
        try:
            metadata = self._reader.open(path, minimal=True)
        except (MetadataReadError, OSError) as exc:
            logger.debug("Skipping %s: %s", path, exc)
            return None
        return list(metadata.assembly_references)
