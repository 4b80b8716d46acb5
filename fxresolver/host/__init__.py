from .models import Architecture, HostInfo, OSPlatform
from .probe import HostProbe, probe_host

__all__ = ["Architecture", "HostInfo", "OSPlatform", "HostProbe", "probe_host"]
