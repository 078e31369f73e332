import logging
from rich.logging import RichHandler
from rich.console import Console
from rich.theme import Theme

ROOT_LOGGER = "bundlehost"

custom_theme = Theme({
    "logging.level.debug": "cyan",
    "logging.level.info": "bold #FFFFFF on #61AD00",
    "logging.level.warning": "bold #FFFFFF on #DB6900",
    "logging.level.error": "bold #FFFFFF on #d70000",
    "logging.level.critical": "bold #FFFFFF on red",
    "log.time": "#A3A3A3",
    "component": "bold #7FB2FF",
})

console = Console(theme=custom_theme)


class ComponentFilter(logging.Filter):
    """Expose the last part of the logger name as ``record.component``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.component = record.name.rsplit(".", 1)[-1]
        return True


class CustomRichHandler(RichHandler):
    def render_message(self, record, message):
        """Prefix the component tag and color the text by level."""
        text = super().render_message(record, message)

        if record.levelno >= logging.ERROR:
            text.style = "#FF7878"
        elif record.levelno >= logging.WARNING:
            text.style = "#FFD078"

        component = getattr(record, "component", None)
        if component:
            text.stylize("component", 0, len(component) + 2)

        return text


def _root_logger() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = CustomRichHandler(
            console=console,
            rich_tracebacks=True,
            show_time=True,
            omit_repeated_times=False,
            show_path=False,
            markup=False,
            enable_link_path=False
        )
        handler.addFilter(ComponentFilter())
        handler.setFormatter(logging.Formatter("[%(component)s] %(message)s"))
        root.addHandler(handler)
        root.setLevel(logging.INFO)
        # Keep bundle logs out of uvicorn's / the root logger's handlers
        root.propagate = False
    return root


def setup_logger(component: str) -> logging.Logger:
    """
    Logger for one component, e.g. ``setup_logger("startup")``.

    All component loggers share the handler of the ``bundlehost`` logger, so
    their level is controlled in one place by ``set_log_level``.
    """
    _root_logger()
    return logging.getLogger(f"{ROOT_LOGGER}.{component}")


def set_log_level(level_name: str) -> int:
    """Apply a level name (DEBUG, INFO, ...); unknown names fall back to INFO."""
    level = logging.getLevelName(level_name.strip().upper())
    if not isinstance(level, int):
        level = logging.INFO
    _root_logger().setLevel(level)
    return level


def set_debug_mode(enabled: bool):
    set_log_level("DEBUG" if enabled else "INFO")
