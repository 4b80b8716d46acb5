from .builder import DependencyClosureBuilder
from .models import DependencyClosure

__all__ = ["DependencyClosure", "DependencyClosureBuilder"]
