"""
Default reference sets for scripts and out-of-project sources.

DESKTOP_DEFAULT_REFERENCES is split around the language-specific entries
(FSharp.Core, the interactive settings library and System.ValueTuple), which
fxresolver.resolver.defaults splices in at run time.

SYSTEM_ASSEMBLY_NAMES lists assemblies always considered "system" by
downstream consumers: shareable between projects, and the home of every
well-known system type the type checker references.
"""

from .names import FSHARP_CORE_LIBRARY_NAME, FSI_LIBRARY_NAME

__all__ = [
    "DESKTOP_DEFAULT_REFERENCES_HEAD",
    "DESKTOP_DEFAULT_REFERENCES_TAIL",
    "SYSTEM_ASSEMBLY_NAMES",
]

DESKTOP_DEFAULT_REFERENCES_HEAD: tuple[str, ...] = (
    "mscorlib",
    "System",
    "System.Xml",
    "System.Runtime.Remoting",
    "System.Runtime.Serialization.Formatters.Soap",
    "System.Data",
    "System.Drawing",
    "System.Core",
)

# Portable-profile and .NET Standard 1.6 dependencies of FSharp.Core, needed
# when a script references a component built against those profiles.
DESKTOP_DEFAULT_REFERENCES_TAIL: tuple[str, ...] = (
    "netstandard",
    "System.Runtime",           # lots of types
    "System.Linq",              # System.Linq.Expressions.Expression<T>
    "System.Reflection",        # System.Reflection.ParameterInfo
    "System.Linq.Expressions",  # System.Linq.IQueryable<T>
    "System.Threading.Tasks",   # System.Threading.CancellationToken
    "System.IO",                # System.IO.TextWriter
    "System.Net.Requests",      # System.Net.WebResponse etc.
    "System.Collections",       # System.Collections.Generic.List<T>
    "System.Runtime.Numerics",  # BigInteger
    "System.Threading",         # OperationCanceledException
    "System.Web",
    "System.Web.Services",
    "System.Windows.Forms",
    "System.Numerics",
)

SYSTEM_ASSEMBLY_NAMES: frozenset[str] = frozenset([
    "mscorlib",
    "netstandard",
    "System.Runtime",
    FSHARP_CORE_LIBRARY_NAME,

    "System",
    "System.Xml",
    "System.Runtime.Remoting",
    "System.Runtime.Serialization.Formatters.Soap",
    "System.Data",
    "System.Deployment",
    "System.Design",
    "System.Messaging",
    "System.Drawing",
    "System.Net",
    "System.Web",
    "System.Web.Services",
    "System.Windows.Forms",
    "System.Core",
    "System.Observable",
    "System.Numerics",
    "System.ValueTuple",

    # coreclr and portable profiles
    "System.Collections",
    "System.Collections.Concurrent",
    "System.Console",
    "System.Diagnostics.Debug",
    "System.Diagnostics.Tools",
    "System.Globalization",
    "System.IO",
    "System.Linq",
    "System.Linq.Expressions",
    "System.Linq.Queryable",
    "System.Net.Requests",
    "System.Reflection",
    "System.Reflection.Emit",
    "System.Reflection.Emit.ILGeneration",
    "System.Reflection.Extensions",
    "System.Resources.ResourceManager",
    "System.Runtime.Extensions",
    "System.Runtime.InteropServices",
    "System.Runtime.InteropServices.PInvoke",
    "System.Runtime.Numerics",
    "System.Text.Encoding",
    "System.Text.Encoding.Extensions",
    "System.Text.RegularExpressions",
    "System.Threading",
    "System.Threading.Tasks",
    "System.Threading.Tasks.Parallel",
    "System.Threading.Thread",
    "System.Threading.ThreadPool",
    "System.Threading.Timer",

    FSI_LIBRARY_NAME,
    "Microsoft.Win32.Registry",
    "System.Diagnostics.Tracing",
    "System.Globalization.Calendars",
    "System.Reflection.Primitives",
    "System.Runtime.Handles",
    "Microsoft.Win32.Primitives",
    "System.IO.FileSystem",
    "System.Net.Primitives",
    "System.Net.Sockets",
    "System.Private.Uri",
    "System.AppContext",
    "System.Buffers",
    "System.Collections.Immutable",
    "System.Diagnostics.DiagnosticSource",
    "System.Diagnostics.Process",
    "System.Diagnostics.TraceSource",
    "System.Globalization.Extensions",
    "System.IO.Compression",
    "System.IO.Compression.ZipFile",
    "System.IO.FileSystem.Primitives",
    "System.Net.Http",
    "System.Net.NameResolution",
    "System.Net.WebHeaderCollection",
    "System.ObjectModel",
    "System.Reflection.Emit.Lightweight",
    "System.Reflection.Metadata",
    "System.Reflection.TypeExtensions",
    "System.Runtime.InteropServices.RuntimeInformation",
    "System.Runtime.Loader",
    "System.Security.Claims",
    "System.Security.Cryptography.Algorithms",
    "System.Security.Cryptography.Cng",
    "System.Security.Cryptography.Csp",
    "System.Security.Cryptography.Encoding",
    "System.Security.Cryptography.OpenSsl",
    "System.Security.Cryptography.Primitives",
    "System.Security.Cryptography.X509Certificates",
    "System.Security.Principal",
    "System.Security.Principal.Windows",
    "System.Threading.Overlapped",
    "System.Threading.Tasks.Extensions",
    "System.Xml.ReaderWriter",
    "System.Xml.XDocument",
])
