"""Console theme for registry logs."""

from rich.theme import Theme


# Only problems stand out; lifecycle noise stays neutral
LOGGING_THEME = Theme({
    "logging.level.debug": "#6e7681",
    "logging.level.info": "white",
    "logging.level.warning": "#d29922",
    "logging.level.error": "#f85149",
    "logging.level.critical": "bold reverse #b81c1c",

    "log.time": "dim white",
    "log.message": "white",
    "log.path": "#6e7681",

    # Inline markup used by the registries
    "key": "#a5d6ff",          # style keys and component names
    "inject": "#a5d6a7",       # artifact injected
    "remove": "#ffb86c",       # artifact removed
    "muted": "#b0b8c1",
    "error": "#ffa198",
})
