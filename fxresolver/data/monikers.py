"""Target-framework moniker tables."""

__all__ = [
    "DESKTOP_VERSION_MONIKERS",
    "DEFAULT_DESKTOP_CORE_LIBRARY_VERSION",
    "DEFAULT_DESKTOP_MONIKER",
    "DEFAULT_CORE_MONIKER",
]

# Checked top to bottom; the first row whose four thresholds are each <= the
# matching component of the core library file version wins.
DESKTOP_VERSION_MONIKERS: tuple[tuple[int, int, int, int, str], ...] = (
    # major, minor, build, revision, moniker
    (4, 8,  3815,     0, "net48"),
    (4, 8,  3761,     0, "net48"),
    (4, 7,  3190,     0, "net472"),
    (4, 7,  3062,     0, "net472"),
    (4, 7,  2600,     0, "net471"),
    (4, 7,  2558,     0, "net471"),
    (4, 7,  2053,     0, "net47"),
    (4, 7,  2046,     0, "net47"),
    (4, 6,  1590,     0, "net462"),
    (4, 6,    57,     0, "net462"),
    (4, 6,  1055,     0, "net461"),
    (4, 6,    81,     0, "net46"),
    (4, 0, 30319, 34209, "net452"),
    (4, 0, 30319, 17020, "net452"),
    (4, 0, 30319, 18408, "net451"),
    (4, 0, 30319, 17929, "net45"),
    (4, 0, 30319,     1, "net4"),
)

DEFAULT_DESKTOP_CORE_LIBRARY_VERSION = (4, 8, 3815, 0)
DEFAULT_DESKTOP_MONIKER = "net48"

# Oldest long-term-support release still in service.
DEFAULT_CORE_MONIKER = "netcoreapp3.1"
