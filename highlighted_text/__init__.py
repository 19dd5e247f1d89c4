"""
highlighted_text
================

Rich-text highlighting engine: plain text plus an ordered list of
pattern-based formatting rules in, attributed text out.

This package provides:
    - A pure, deterministic highlight engine (``compute_highlighted_text``)
    - Platform-neutral font, color and attributed-text value types
    - Immutable rule configuration (``HighlightRule``, ``TextFormattingRule``)
    - Ready-made URL and Markdown rule presets

Basic usage:
    >>> from highlighted_text import (
    ...     AttributeKey, Color, FontTrait, HighlightRule, TextDefaults,
    ...     TextFormattingRule, compute_highlighted_text,
    ... )
    >>>
    >>> rules = [
    ...     HighlightRule.single(r"\\bTODO\\b", TextFormattingRule.with_traits(FontTrait.BOLD)),
    ...     HighlightRule.single(
    ...         r"#\\d+",
    ...         TextFormattingRule.computed("issue", lambda s, d, r: int(s[1:])),
    ...     ),
    ... ]
    >>> result = compute_highlighted_text("TODO: close #42", TextDefaults(), rules)
    >>> result.attribute("issue", 13)
    42

Configuration:
    >>> import os
    >>> os.environ["HIGHLIGHTED_TEXT_LOG_LEVEL"] = "DEBUG"
    >>>
    >>> from highlighted_text import HighlightEngine, load_config
    >>>
    >>> engine = HighlightEngine.from_config(load_config(), rules)

Version: 0.1.0
License: MIT
Python: 3.11+
"""

import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# =============================================================================
# VERSION METADATA
# =============================================================================

__version__ = "0.1.0"
__author__ = "highlighted_text developers"
__description__ = "Deterministic rule-based rich-text highlighting engine"
__license__ = "MIT"
__python_requires__ = ">=3.11"

VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

if sys.version_info < (3, 11):
    raise RuntimeError(
        f"highlighted_text requires Python 3.11 or newer. "
        f"Current version: {sys.version_info.major}."
        f"{sys.version_info.minor}.{sys.version_info.micro}"
    )

# =============================================================================
# LOGGING
# =============================================================================

_LOGGER_NAMESPACE = "highlighted_text"

_LOG_LEVELS: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _setup_logging() -> None:
    """
    Configure the package logger once.

    - stderr handler for WARNING and above
    - rotating file handler for all levels when HIGHLIGHTED_TEXT_LOG_DIR is set
    - format: [timestamp] LEVEL [module.function:line] message

    The level comes from HIGHLIGHTED_TEXT_LOG_LEVEL (DEBUG, INFO, WARNING,
    ERROR, CRITICAL; default INFO). Repeated calls have no further effect.
    """
    log_level_str = os.environ.get("HIGHLIGHTED_TEXT_LOG_LEVEL", "INFO").upper()
    log_level = _LOG_LEVELS.get(log_level_str, logging.INFO)

    root_logger = logging.getLogger(_LOGGER_NAMESPACE)
    if root_logger.handlers:
        return

    root_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    log_dir_env = os.environ.get("HIGHLIGHTED_TEXT_LOG_DIR")
    if log_dir_env:
        try:
            log_dir = Path(log_dir_env)
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_dir / "highlighted_text.log",
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(f"File logging unavailable ({e}); using console only.")

    root_logger.propagate = False


def get_logger(module_name: str) -> logging.Logger:
    """
    Return a logger inside the ``highlighted_text`` namespace.

    Args:
        module_name: Usually ``__name__``. ``__main__`` maps to
            ``highlighted_text.main``; other names outside the namespace are
            prefixed with it.

    Example:
        >>> get_logger("my_plugin").name
        'highlighted_text.my_plugin'
    """
    if module_name == _LOGGER_NAMESPACE or module_name.startswith(_LOGGER_NAMESPACE + "."):
        full_name = module_name
    elif module_name == "__main__":
        full_name = f"{_LOGGER_NAMESPACE}.main"
    else:
        full_name = f"{_LOGGER_NAMESPACE}.{module_name.lstrip('.')}"
    return logging.getLogger(full_name)


# =============================================================================
# CONFIGURATION
# =============================================================================

_DEFAULT_CONFIG: Dict[str, Any] = {
    "log_level": "INFO",
    "default_font_family": "system-ui",
    "default_font_size": 13.0,
    "default_text_color": "#000000",
}

DEFAULT_CONFIG_FILENAME = "highlighted_text.json"


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from a JSON file merged over the defaults.

    Keys:
        - log_level: str, applied to the package logger by apply_config()
        - default_font_family: str
        - default_font_size: float
        - default_text_color: str, any color Pillow's ImageColor parses

    Args:
        config_path: Path to a JSON object file. Defaults to
            ``highlighted_text.json`` in the working directory.

    Returns:
        A new dict holding every default key, overridden by the file's values.
        Invalid or unreadable files are logged and the defaults returned.
    """
    logger = get_logger(__name__)

    if config_path is None:
        config_path = Path(DEFAULT_CONFIG_FILENAME)

    config = _DEFAULT_CONFIG.copy()

    if not config_path.exists():
        logger.info(f"Config file {config_path} not found. Using defaults.")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            user_config = json.load(f)

        if not isinstance(user_config, dict):
            raise ValueError(
                f"Config file must hold a JSON object, got {type(user_config).__name__}"
            )

        config.update(user_config)
        logger.info(f"Configuration loaded from {config_path}")
        logger.debug(f"Configuration: {config}")
    except json.JSONDecodeError as e:
        logger.warning(
            f"Cannot parse {config_path}: invalid JSON at line {e.lineno}, "
            f"column {e.colno}. Using defaults."
        )
    except OSError as e:
        logger.warning(f"Cannot read {config_path}: {e}. Using defaults.")
    except ValueError as e:
        logger.warning(f"Invalid config format: {e}. Using defaults.")

    return config


def apply_config(config: Dict[str, Any]) -> None:
    """
    Apply the process-wide settings of a loaded configuration.

    Sets the ``highlighted_text`` logger and its file handlers to
    ``config["log_level"]``. The stderr handler stays at WARNING. An unknown
    level name is logged and ignored.

    Example:
        >>> apply_config(load_config())
    """
    logger = get_logger(__name__)
    level_name = str(config.get("log_level", _DEFAULT_CONFIG["log_level"])).upper()
    level = _LOG_LEVELS.get(level_name)
    if level is None:
        logger.warning(f"Unknown log_level {level_name!r} in config; keeping current level.")
        return

    package_logger = logging.getLogger(_LOGGER_NAMESPACE)
    package_logger.setLevel(level)
    for handler in package_logger.handlers:
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            handler.setLevel(level)
    logger.debug(f"Log level set to {level_name}")


# =============================================================================
# PUBLIC API
# =============================================================================

from .engine import HighlightEngine, compute_highlighted_text  # noqa: E402
from .exceptions import (  # noqa: E402
    AttributeComputationError,
    HighlightError,
    InvalidPatternError,
    InvalidRangeError,
    RuleConfigurationError,
)
from .model import (  # noqa: E402
    AttributedText,
    AttributeKey,
    AttributeRun,
    Color,
    FontDescriptor,
    FontTrait,
    HighlightRule,
    LineStyle,
    TextDefaults,
    TextFormattingRule,
    TextRange,
)
from .presets import MARKDOWN_RULES, URL_RULES  # noqa: E402

__all__ = [
    # Version metadata
    "__version__",
    "__author__",
    "__description__",
    "__license__",
    "__python_requires__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    # Utilities
    "get_logger",
    "load_config",
    "apply_config",
    # Engine
    "compute_highlighted_text",
    "HighlightEngine",
    # Model
    "AttributedText",
    "AttributeRun",
    "TextRange",
    "AttributeKey",
    "FontTrait",
    "LineStyle",
    "Color",
    "FontDescriptor",
    "TextDefaults",
    "TextFormattingRule",
    "HighlightRule",
    # Presets
    "URL_RULES",
    "MARKDOWN_RULES",
    # Errors
    "HighlightError",
    "InvalidRangeError",
    "AttributeComputationError",
    "RuleConfigurationError",
    "InvalidPatternError",
]

_setup_logging()
get_logger(__name__).debug(f"highlighted_text v{__version__} initialized")
