"""
FxResolver — references for a chosen or currently-executing framework.

Used for
  • script execution, editing and compilation
  • editing source files orphaned from a project
  • default compiler references

Identity (runtime directory, version, TFM, RID) is established once in the
constructor and never recomputed. Reference queries then pick one of:
  1. desktop target       → fixed legacy list
  2. reference pack found → every *.dll in the pack + language libraries
  3. otherwise            → dependency closure of the runtime's *.dll +
                            language libraries
"""

from __future__ import annotations

import glob
import logging
import os
import re
from typing import Iterable, Optional

from fxresolver.closure import DependencyClosure, DependencyClosureBuilder
from fxresolver.config import DEFAULT_SDKS_DIR, ResolverConfig
from fxresolver.data import DEFAULT_SDK_RID, SYSTEM_ASSEMBLY_NAMES
from fxresolver.host import HostInfo, probe_host
from fxresolver.metadata import MetadataReader, PeMetadataReader
from fxresolver.runtime import (
    PlatformIdentifierResolver,
    ReferencePackLocator,
    RuntimeEnvironment,
    RuntimeLocator,
    TargetFrameworkResolver,
)
from .defaults import (
    default_fsharp_core_location,
    default_fsi_library_location,
    desktop_default_references,
    find_value_tuple_reference,
)

__all__ = ["FxResolver"]

logger = logging.getLogger(__name__)

_SDK_VERSION_RE = re.compile(r"^[\d.]+$")


class FxResolver:
    """
    Usage::

        resolver = FxResolver()
        print(resolver.get_target_framework_moniker())   # netcoreapp3.1
        refs = resolver.get_default_references(
            use_interactive_support_lib=True,
            use_dotnet_framework_target=False,
            use_reference_pack=True,
        )

    Raises:
        RuntimeNotFoundError: (from the constructor) no runtime directory
            could be established for the host or the given SDK root.
    """

    def __init__(
        self,
        host: Optional[HostInfo] = None,
        reader: Optional[MetadataReader] = None,
        sdk_root: Optional[str] = None,
        rid: Optional[str] = None,
        pre_inferred_use_dotnet_framework: Optional[bool] = None,
        config: Optional[ResolverConfig] = None,
    ) -> None:
        self._config = config or ResolverConfig()
        self._host = host or probe_host(self._config)
        self._reader = reader or PeMetadataReader()

        sdk_root = sdk_root or self._config.sdk_root or None
        rid = rid or self._config.rid or None
        if pre_inferred_use_dotnet_framework is not None and not (sdk_root or rid):
            inferred = self.try_get_default_sdk_root_and_platform(
                pre_inferred_use_dotnet_framework, self._host, self._config.sdks_dir
            )
            if inferred:
                sdk_root, rid = inferred

        runtime_dir, runtime_version = RuntimeLocator(self._host).locate(sdk_root)
        self._env = RuntimeEnvironment(
            runtime_dir=runtime_dir,
            runtime_version=runtime_version,
            tfm=TargetFrameworkResolver(self._host).resolve(sdk_root),
            rid=PlatformIdentifierResolver(self._host, rid).resolve(),
            sdk_root=sdk_root,
        )
        self._value_tuple = find_value_tuple_reference(self._host, runtime_dir, sdk_root)
        self._ref_packs = ReferencePackLocator(runtime_dir, runtime_version)
        logger.info("Resolving references for %s", self._env)

    # ── Identity ──────────────────────────────────────────────────────────────

    @property
    def environment(self) -> RuntimeEnvironment:
        return self._env

    @property
    def host(self) -> HostInfo:
        return self._host

    def get_target_framework_moniker(self) -> str:
        """e.g. "netcoreapp3.1" or "net472"."""
        return self._env.tfm

    def get_platform_identifier(self) -> str:
        """e.g. "win-x64" or "linux-arm64"."""
        return self._env.rid

    def get_reference_pack_directory(self) -> Optional[str]:
        return self._ref_packs.locate()

    def is_under_reference_pack_directory(self, path: str) -> bool:
        return self._ref_packs.contains(path)

    def get_system_assembly_names(self) -> frozenset[str]:
        return SYSTEM_ASSEMBLY_NAMES

    # ── References ────────────────────────────────────────────────────────────

    def get_default_references(
        self,
        use_interactive_support_lib: bool,
        use_dotnet_framework_target: bool,
        use_reference_pack: bool,
    ) -> list[str]:
        """Default references for scripts and out-of-project sources."""
        return self._fetch_default_references(
            use_interactive_support_lib, use_reference_pack, use_dotnet_framework_target
        )

    def get_basic_script_closure_references(
        self,
        use_interactive_support_lib: bool,
        use_reference_pack: bool,
        use_dotnet_framework_target: bool,
    ) -> list[str]:
        """References seeded into a script's configuration before its load closure is computed."""
        return self._fetch_default_references(
            use_interactive_support_lib, use_reference_pack, use_dotnet_framework_target
        )

    def get_dependency_closure(self, seeds: Iterable[str]) -> DependencyClosure:
        """Transitive closure of `seeds`, resolving bare names against the runtime directory."""
        return DependencyClosureBuilder(self._env.runtime_dir, self._reader).build(seeds)

    def _fetch_default_references(
        self,
        use_interactive_support_lib: bool,
        use_reference_pack: bool,
        use_dotnet_framework_target: bool,
    ) -> list[str]:
        if use_dotnet_framework_target:
            return desktop_default_references(use_interactive_support_lib, self._value_tuple)

        if use_reference_pack:
            pack = self._ref_packs.locate()
            if pack is not None:
                return self._reference_pack_references(pack, use_interactive_support_lib)
            logger.debug("No reference pack for %s; walking implementation assemblies",
                         self._env.runtime_version)

        return self._implementation_references(use_interactive_support_lib)

    def _language_libraries(self, use_interactive_support_lib: bool) -> list[str]:
        libs = [default_fsharp_core_location(self._host)]
        if use_interactive_support_lib:
            libs.append(default_fsi_library_location(self._host))
        return libs

    def _reference_pack_references(self, pack: str, use_interactive_support_lib: bool) -> list[str]:
        if not os.path.isdir(pack):
            logger.warning("Reference pack %s is not readable", pack)
            return []
        return sorted(glob.glob(os.path.join(glob.escape(pack), "*.dll"))) + \
            self._language_libraries(use_interactive_support_lib)

    def _implementation_references(self, use_interactive_support_lib: bool) -> list[str]:
        seeds = sorted(glob.glob(os.path.join(glob.escape(self._env.runtime_dir), "*.dll")))
        seeds += self._language_libraries(use_interactive_support_lib)
        return self.get_dependency_closure(seeds).paths()

    # ── SDK discovery ─────────────────────────────────────────────────────────

    @staticmethod
    def try_get_default_sdk_root_and_platform(
        use_dotnet_framework_target: bool,
        host: Optional[HostInfo] = None,
        sdks_dir: str = DEFAULT_SDKS_DIR,
    ) -> Optional[tuple[str, str]]:
        """
        A default SDK to infer target framework assemblies from.

        Only a desktop-runtime Windows host (e.g. a 32-bit IDE process)
        needs one; on the core runtime the running tooling's own runtime
        is used, and None is returned.
        """
        host = host or probe_host()
        if use_dotnet_framework_target or host.is_core_runtime or not host.is_windows:
            return None

        try:
            candidates = [
                e.path for e in os.scandir(sdks_dir)
                if e.is_dir() and _SDK_VERSION_RE.match(e.name)
            ]
        except OSError as exc:
            logger.debug("No SDKs under %s: %s", sdks_dir, exc)
            return None
        if not candidates:
            return None
        return sorted(candidates)[-1], DEFAULT_SDK_RID
