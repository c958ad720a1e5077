"""
Host interfaces consumed by the map style utilities.
"""

from .map_host import IMapHost, ISourceHandle

__all__ = ["IMapHost", "ISourceHandle"]
