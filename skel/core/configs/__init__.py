from .resource_config import ResourceManagerConfig

__all__ = ["ResourceManagerConfig"]
