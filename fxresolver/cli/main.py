"""
CLI entry point for fxresolver.

Usage
─────
  # Show the inferred runtime identity
  python -m fxresolver info

  # Default script references (closure walk, no reference pack)
  python -m fxresolver refs --interactive --no-ref-pack

  # Transitive closure of a few assemblies
  python -m fxresolver closure System.Console /path/to/MyLib.dll

  # Default SDK for a desktop-runtime host
  python -m fxresolver sdk

Subcommands are implemented as standalone functions (cmd_info, cmd_refs,
cmd_closure, cmd_system, cmd_sdk) so they can be unit-tested without
invoking argparse.
"""

import argparse
import logging
import sys
from typing import Optional, TextIO

from fxresolver.config import ResolverConfig
from fxresolver.exceptions import FxResolverError
from fxresolver.host import HostInfo, probe_host
from fxresolver.resolver import FxResolver

__all__ = [
    "build_parser",
    "cmd_info",
    "cmd_refs",
    "cmd_closure",
    "cmd_system",
    "cmd_sdk",
    "main",
]

logger = logging.getLogger(__name__)


# ── Argument parser ────────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argument parser.

    Subcommands: info | refs | closure | system | sdk
    """
    parser = argparse.ArgumentParser(
        prog="fxresolver",
        description="Resolve compile-time reference assemblies for scripts",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Enable verbose debug logging",
    )
    parser.add_argument(
        "--sdk-root",
        default=None,
        dest="sdk_root",
        metavar="PATH",
        help="SDK directory containing dotnet.runtimeconfig.json (or FXRESOLVER_SDK_ROOT)",
    )
    parser.add_argument(
        "--rid",
        default=None,
        metavar="RID",
        help="Platform identifier override, e.g. win-x64 (or FXRESOLVER_RID)",
    )

    sub = parser.add_subparsers(dest="subcommand")

    sub.add_parser("info", help="Show runtime directory, version, TFM and RID")

    # ── refs ──────────────────────────────────────────────────────────────
    refs = sub.add_parser("refs", help="List default script references")
    refs.add_argument(
        "--interactive",
        action="store_true",
        default=False,
        help="Include the interactive support library",
    )
    refs.add_argument(
        "--desktop",
        action="store_true",
        default=False,
        help="Target the legacy desktop framework",
    )
    refs.add_argument(
        "--no-ref-pack",
        action="store_true",
        default=False,
        dest="no_ref_pack",
        help="Skip the reference pack and walk implementation assemblies",
    )

    # ── closure ───────────────────────────────────────────────────────────
    closure = sub.add_parser("closure", help="Dependency closure of assemblies")
    closure.add_argument(
        "seeds",
        nargs="+",
        metavar="SEED",
        help="Assembly path or simple name",
    )

    sub.add_parser("system", help="List system assembly names")

    # ── sdk ───────────────────────────────────────────────────────────────
    sdk = sub.add_parser("sdk", help="Default SDK directory and RID for this host")
    sdk.add_argument(
        "--desktop",
        action="store_true",
        default=False,
        help="Target the legacy desktop framework",
    )

    return parser


# ── Command implementations ───────────────────────────────────────────────────


def cmd_info(resolver: FxResolver, out: TextIO = sys.stdout) -> None:
    """Print the resolver's runtime identity."""
    env = resolver.environment
    pack = resolver.get_reference_pack_directory()
    print(f"runtime dir:     {env.runtime_dir}", file=out)
    print(f"runtime version: {env.runtime_version}", file=out)
    print(f"tfm:             {env.tfm}", file=out)
    print(f"rid:             {env.rid}", file=out)
    print(f"sdk root:        {env.sdk_root or '-'}", file=out)
    print(f"reference pack:  {pack or '-'}", file=out)


def cmd_refs(
    resolver: FxResolver,
    interactive: bool,
    desktop: bool,
    use_reference_pack: bool,
    out: TextIO = sys.stdout,
) -> list[str]:
    """Print one default reference per line and return them."""
    refs = resolver.get_default_references(
        use_interactive_support_lib=interactive,
        use_dotnet_framework_target=desktop,
        use_reference_pack=use_reference_pack,
    )
    for ref in refs:
        print(ref, file=out)
    logger.info("%d references", len(refs))
    return refs


def cmd_closure(resolver: FxResolver, seeds: list[str], out: TextIO = sys.stdout) -> dict[str, str]:
    """Print `name<TAB>path` for every assembly in the closure of `seeds`."""
    closure = resolver.get_dependency_closure(seeds)
    for name, path in sorted(closure.items(), key=lambda item: item[0].lower()):
        print(f"{name}\t{path}", file=out)
    return closure.as_dict()


def cmd_system(resolver: FxResolver, out: TextIO = sys.stdout) -> None:
    for name in sorted(resolver.get_system_assembly_names(), key=str.lower):
        print(name, file=out)


def cmd_sdk(
    desktop: bool,
    config: ResolverConfig,
    host: Optional[HostInfo] = None,
    out: TextIO = sys.stdout,
) -> Optional[tuple[str, str]]:
    """Print the default SDK root and RID, if this host needs one."""
    host = host or probe_host(config)
    found = FxResolver.try_get_default_sdk_root_and_platform(desktop, host, config.sdks_dir)
    if found is None:
        print("No default SDK needed or found for this host.", file=out)
    else:
        print(f"{found[0]}\t{found[1]}", file=out)
    return found


# ── Entry point ───────────────────────────────────────────────────────────────


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point. Returns exit code."""
    parser = build_parser()
    ns = parser.parse_args(argv)

    level = logging.DEBUG if ns.debug else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")

    if ns.subcommand is None:
        parser.print_help()
        return 0

    config = ResolverConfig.from_env().merged(sdk_root=ns.sdk_root, rid=ns.rid)

    try:
        if ns.subcommand == "sdk":
            cmd_sdk(desktop=ns.desktop, config=config, out=sys.stdout)
            return 0

        resolver = FxResolver(config=config)

        if ns.subcommand == "info":
            cmd_info(resolver, out=sys.stdout)
        elif ns.subcommand == "refs":
            cmd_refs(
                resolver,
                interactive=ns.interactive,
                desktop=ns.desktop,
                use_reference_pack=not ns.no_ref_pack,
                out=sys.stdout,
            )
        elif ns.subcommand == "closure":
            cmd_closure(resolver, ns.seeds, out=sys.stdout)
        elif ns.subcommand == "system":
            cmd_system(resolver, out=sys.stdout)
    except FxResolverError as exc:
        logger.debug("%s failed", ns.subcommand, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
