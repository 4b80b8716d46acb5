"""
Runtime identity: runtime directory, TFM, RID and reference pack.
"""

from .locator import RuntimeLocator
from .models import RuntimeEnvironment
from .refpack import ReferencePackLocator, parse_tfm_version
from .rid import PlatformIdentifierResolver
from .tfm import TargetFrameworkResolver, match_desktop_moniker

__all__ = [
    "PlatformIdentifierResolver",
    "ReferencePackLocator",
    "RuntimeEnvironment",
    "RuntimeLocator",
    "TargetFrameworkResolver",
    "match_desktop_moniker",
    "parse_tfm_version",
]
