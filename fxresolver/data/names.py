"""Fixed package, library and file names the resolver probes for."""

__all__ = [
    "CORE_RUNTIME_PACKAGE_NAME",
    "REFERENCE_PACK_PACKAGE_NAME",
    "SDK_MANIFEST_FILE",
    "DEPS_MANIFEST_EXTENSION",
    "FSHARP_CORE_LIBRARY_NAME",
    "FSI_LIBRARY_NAME",
    "CORE_LIBRARY_NAME",
    "VALUE_TUPLE_NAME",
    "EXCLUDED_ASSEMBLY_NAMES",
    "TFM_PREFIX",
    "DEPS_TFM_PREFIX",
    "DEFAULT_SDK_RID",
]

CORE_RUNTIME_PACKAGE_NAME   = "Microsoft.NETCore.App"
REFERENCE_PACK_PACKAGE_NAME = "Microsoft.NETCore.App.Ref"

SDK_MANIFEST_FILE       = "dotnet.runtimeconfig.json"
DEPS_MANIFEST_EXTENSION = ".deps.json"

FSHARP_CORE_LIBRARY_NAME = "FSharp.Core"
FSI_LIBRARY_NAME         = "FSharp.Compiler.Interactive.Settings"

# Cannot be opened through the generic metadata path; taken as-is.
CORE_LIBRARY_NAME = "System.Private.CoreLib"
VALUE_TUPLE_NAME  = "System.ValueTuple"

# Usable only together with the Windows SDK contract package, which is not
# referenced by default ("Windows, Version=255.255.255.255").
EXCLUDED_ASSEMBLY_NAMES = frozenset([
    "System.Runtime.WindowsRuntime",
    "System.Runtime.WindowsRuntime.UI.Xaml",
])

TFM_PREFIX      = "netcoreapp"
DEPS_TFM_PREFIX = ".NETCoreApp,Version=v"

DEFAULT_SDK_RID = "win-x64"
