"""
Unit tests for fxresolver/cli/ and fxresolver/config.py

Coverage plan
─────────────
arg parsing   → refs / closure / sdk subcommands, global overrides
commands      → info, refs, closure, system, sdk against a synthetic runtime
main()        → no subcommand, fatal resolver error
config        → FXRESOLVER_* variables, CLI override merging
"""

from dataclasses import replace
from io import StringIO

import pytest

from fxresolver import FxResolver, ResolverConfig
from fxresolver.config import DEFAULT_SDKS_DIR


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def _parse(args: list[str]):
    """Call the CLI argument parser and return the parsed namespace."""
    from fxresolver.cli.main import build_parser
    parser = build_parser()
    return parser.parse_args(args)


@pytest.fixture
def resolver(core_host):
    return FxResolver(host=core_host)


# ─────────────────────────────────────────────────────────────────────────────
# 1. Argument parsing
# ─────────────────────────────────────────────────────────────────────────────

class TestArgParsing:

    def test_refs_flags_default_off(self):
        ns = _parse(["refs"])
        assert ns.subcommand == "refs"
        assert (ns.interactive, ns.desktop, ns.no_ref_pack) == (False, False, False)

    def test_refs_with_all_flags(self):
        ns = _parse(["refs", "--interactive", "--desktop", "--no-ref-pack"])
        assert ns.interactive and ns.desktop and ns.no_ref_pack

    def test_closure_collects_seeds(self):
        ns = _parse(["closure", "System.Console", "/tmp/MyLib.dll"])
        assert ns.seeds == ["System.Console", "/tmp/MyLib.dll"]

    def test_closure_requires_a_seed(self):
        with pytest.raises(SystemExit):
            _parse(["closure"])

    def test_global_overrides(self):
        ns = _parse(["--debug", "--sdk-root", "/sdk/5.0.100", "--rid", "win-x86", "info"])
        assert ns.debug is True
        assert ns.sdk_root == "/sdk/5.0.100"
        assert ns.rid == "win-x86"
        assert ns.subcommand == "info"

    def test_sdk_desktop_flag(self):
        assert _parse(["sdk", "--desktop"]).desktop is True


# ─────────────────────────────────────────────────────────────────────────────
# 2. Commands
# ─────────────────────────────────────────────────────────────────────────────

class TestCommands:

    def test_info_prints_identity(self, resolver, runtime_dir):
        from fxresolver.cli.main import cmd_info
        out = StringIO()

        cmd_info(resolver, out=out)

        text = out.getvalue()
        assert "3.1.8" in text
        assert "netcoreapp3.1" in text
        assert "linux-x64" in text
        assert "reference pack:  -" in text

    def test_refs_desktop_prints_fixed_list(self, resolver):
        from fxresolver.cli.main import cmd_refs
        out = StringIO()

        refs = cmd_refs(resolver, interactive=False, desktop=True, use_reference_pack=True, out=out)

        assert out.getvalue().splitlines() == refs
        assert refs[0] == "mscorlib"

    def test_refs_closure_of_runtime(self, resolver, runtime_dir, make_assembly):
        from fxresolver.cli.main import cmd_refs
        console = make_assembly(runtime_dir / "System.Console.dll", references=("System.Runtime",))
        runtime = make_assembly(runtime_dir / "System.Runtime.dll")

        refs = cmd_refs(resolver, interactive=False, desktop=False,
                        use_reference_pack=False, out=StringIO())

        assert sorted(refs) == sorted([str(console), str(runtime)])

    def test_closure_prints_sorted_pairs(self, resolver, runtime_dir, make_assembly):
        from fxresolver.cli.main import cmd_closure
        a = make_assembly(runtime_dir / "alpha.dll")
        b = make_assembly(runtime_dir / "Beta.dll", references=("alpha",))
        out = StringIO()

        result = cmd_closure(resolver, ["Beta"], out=out)

        assert result == {"Beta": str(b), "alpha": str(a)}
        assert out.getvalue().splitlines() == [f"alpha\t{a}", f"Beta\t{b}"]

    def test_system_lists_names(self, resolver):
        from fxresolver.cli.main import cmd_system
        out = StringIO()

        cmd_system(resolver, out=out)

        lines = out.getvalue().splitlines()
        assert "mscorlib" in lines
        assert lines == sorted(lines, key=str.lower)

    def test_sdk_not_needed_on_core_host(self, core_host):
        from fxresolver.cli.main import cmd_sdk
        out = StringIO()

        assert cmd_sdk(desktop=False, config=ResolverConfig(), host=core_host, out=out) is None
        assert "No default SDK" in out.getvalue()

    def test_sdk_found_on_desktop_host(self, desktop_host, tmp_path):
        from fxresolver.cli.main import cmd_sdk
        (tmp_path / "sdks" / "5.0.100").mkdir(parents=True)
        config = ResolverConfig(sdks_dir=str(tmp_path / "sdks"))
        out = StringIO()

        found = cmd_sdk(desktop=False, config=config, host=desktop_host, out=out)

        assert found == (str(tmp_path / "sdks" / "5.0.100"), "win-x64")
        assert out.getvalue().strip() == f"{found[0]}\twin-x64"

    def test_sdk_probes_host_with_config(self, monkeypatch, core_host):
        from fxresolver.cli.main import cmd_sdk
        seen = []

        def fake_probe(config=None):
            seen.append(config)
            return core_host

        import sys
        monkeypatch.setattr(sys.modules["fxresolver.cli.main"], "probe_host", fake_probe)
        config = ResolverConfig(toolchain_dir="/opt/fsharp", runtime_dir="/opt/runtime")

        cmd_sdk(desktop=False, config=config, out=StringIO())

        assert seen == [config]


# ─────────────────────────────────────────────────────────────────────────────
# 3. main()
# ─────────────────────────────────────────────────────────────────────────────

class TestMain:

    def test_no_subcommand_prints_help(self, capsys):
        from fxresolver.cli.main import main

        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()

    def test_fatal_resolver_error_exits_one(self, monkeypatch, core_host, tmp_path, capsys):
        from fxresolver.cli.main import main
        broken = replace(core_host, implementation_dir=str(tmp_path / "gone"),
                         toolchain_dir=str(tmp_path / "gone"))
        monkeypatch.setattr("fxresolver.resolver.fx_resolver.probe_host", lambda config=None: broken)

        assert main(["info"]) == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_info_with_probed_host(self, monkeypatch, core_host, capsys):
        from fxresolver.cli.main import main
        monkeypatch.setattr("fxresolver.resolver.fx_resolver.probe_host", lambda config=None: core_host)

        assert main(["--rid", "osx-arm64", "info"]) == 0
        assert "osx-arm64" in capsys.readouterr().out


# ─────────────────────────────────────────────────────────────────────────────
# 4. ResolverConfig
# ─────────────────────────────────────────────────────────────────────────────

class TestResolverConfig:

    def test_defaults(self):
        config = ResolverConfig.from_env({})
        assert config.sdk_root == ""
        assert config.sdks_dir == DEFAULT_SDKS_DIR

    def test_reads_prefixed_variables(self):
        config = ResolverConfig.from_env({
            "FXRESOLVER_SDK_ROOT": "/sdk",
            "FXRESOLVER_RID": "linux-musl-x64",
            "FXRESOLVER_SDKS_DIR": "/opt/sdks",
            "FXRESOLVER_TOOLCHAIN_DIR": "/opt/fsharp",
            "FXRESOLVER_RUNTIME_DIR": "/opt/runtime",
        })
        assert config == ResolverConfig("/sdk", "linux-musl-x64", "/opt/sdks",
                                        "/opt/fsharp", "/opt/runtime")

    def test_empty_sdks_dir_keeps_default(self):
        assert ResolverConfig.from_env({"FXRESOLVER_SDKS_DIR": ""}).sdks_dir == DEFAULT_SDKS_DIR

    def test_merged_ignores_empty_overrides(self):
        base = ResolverConfig(rid="win-x64")
        assert base.merged(rid=None, sdk_root="") is base

    def test_merged_applies_overrides(self):
        merged = ResolverConfig(rid="win-x64").merged(rid="win-arm64", sdk_root="/sdk")
        assert (merged.rid, merged.sdk_root) == ("win-arm64", "/sdk")
