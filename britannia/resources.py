"""A cache of loaded resources, keyed by kind and name."""

from __future__ import annotations

import enum
import os
from typing import Any, Callable, Mapping

from britannia.log import log


class ResourceKind(enum.Enum):
    """Kinds of resource the manager holds."""

    TEXTURE = "texture"
    MODEL = "model"
    SOUND = "sound"
    MUSIC = "music"
    CONFIG = "config"


_UNLOADED_ON_SHUTDOWN = (
    ResourceKind.TEXTURE,
    ResourceKind.MODEL,
    ResourceKind.SOUND,
    ResourceKind.MUSIC,
)


class ResourceManager:
    """Loads resources on demand through per-kind loaders and keeps them."""

    def __init__(self, loaders: Mapping[ResourceKind, Callable[[str], Any]]) -> None:
        self._loaders = dict(loaders)
        self._resources: dict[ResourceKind, dict[str, Any]] = {kind: {} for kind in ResourceKind}

    def add(self, kind: ResourceKind, name: str) -> Any:
        """Load a resource, replacing any cached one of the same name."""
        try:
            loader = self._loaders[kind]
        except KeyError:
            raise LookupError(f"no loader for {kind.value} resources") from None
        log(f"Loading {kind.value} {name}")
        resource = loader(name)
        self._resources[kind][name] = resource
        log("Load successful.")
        return resource

    def get(self, kind: ResourceKind, name: str) -> Any:
        """Return a cached resource, loading it first if needed."""
        cache = self._resources[kind]
        if name in cache:
            return cache[name]
        log(f"Loading {kind.value} {name} on the fly!")
        return self.add(kind, name)

    def file_exists(self, name: str) -> bool:
        """True if a texture of that name is cached or the file exists."""
        return name in self._resources[ResourceKind.TEXTURE] or os.path.isfile(name)

    def clear_textures(self) -> None:
        """Forget cached textures so they are loaded again on next use."""
        self._resources[ResourceKind.TEXTURE].clear()

    def shutdown(self) -> None:
        """Close every texture, model, sound and music resource that can be closed."""
        for kind in _UNLOADED_ON_SHUTDOWN:
            for resource in self._resources[kind].values():
                close = getattr(resource, "close", None)
                if callable(close):
                    close()
            self._resources[kind].clear()