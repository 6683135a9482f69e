from .container import ServiceContainer, container

__all__ = ["ServiceContainer", "container"]
