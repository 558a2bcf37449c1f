"""Logging configuration models."""

from typing import Optional, List, Union, Dict, Any

from pydantic import BaseModel, Field, ConfigDict


class HandlerConfig(BaseModel):
    """Base handler configuration.

    The 'type' field selects the config class and factory registered with
    `register_handler`. Unknown fields are kept so that handler-specific
    options survive a round trip through YAML.

    Args:
        type: Handler type identifier (e.g., "console", "file")
        enabled: Enable this handler (default: True)
        level: Log level for this handler (default: DEBUG)
        format_str: Custom format string
    """

    model_config = ConfigDict(extra="allow")

    type: str
    enabled: bool = True
    level: str = "DEBUG"
    format_str: Optional[str] = None


class LogConfig(BaseModel):
    """Logger configuration for the resource registry.

    Args:
        name: Logger name (default: "skel.core", the package logger)
        level: Logger level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        handlers: Handler configurations, as dicts or HandlerConfig instances
        propagate: Propagate to parent loggers (default: False)

    Example:
        config = LogConfig(
            name="skel.app",
            level="DEBUG",
            handlers=[
                {"type": "console", "level": "INFO"},
                {"type": "file", "filepath": "logs/skel.log"},
            ]
        )
        logger = setup_logger(config)
    """

    name: str = "skel.core"
    level: str = "INFO"
    handlers: List[Union[HandlerConfig, Dict[str, Any]]] = Field(
        default_factory=lambda: [{"type": "console"}]
    )
    propagate: bool = False
