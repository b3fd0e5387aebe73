"""
namedlog — level-filtered, hierarchically named logging façade.

Loggers are built as chains of named segments (``root.named("App")
.named("Request", 7)``) in front of a console-like sink or an external
structured sink. Level decisions and ANSI styling are resolved once per
logger, so filtered calls cost a no-op call.

Public API:
    create_logger_provider — provider with the default policy
    LoggerProvider         — configure_logger / configure_logging / get_logger
    init_logging           — singleton initialization
    get_provider           — access singleton
    get_logger             — root logger from the singleton
    Logger, UtilLogger     — logger handles
    Severity, Category     — level and category model
    StyleConfig            — console styling options
    ConsoleSink            — default stderr sink
    traced                 — function tracing decorator
"""

from namedlog._version import __version__, __app_name__
from namedlog.levels import (
    Severity, Category, LogKind, LogMeta, KINDS, LEVELS,
    encode, severity_of, category_of, meets_minimum, parse_level,
)
from namedlog.source import LogSource, NameKey
from namedlog.filtering import Includes, resolve_includes, should_log
from namedlog.style import StyleConfig, StyleContext
from namedlog.factory import Logger, UtilLogger
from namedlog.provider import (
    LoggerProvider, create_logger_provider, init_logging, get_provider, get_logger,
)
from namedlog.sinks import ConsoleSink
from namedlog.trace import traced

__all__ = [
    '__version__', '__app_name__',
    'Severity', 'Category', 'LogKind', 'LogMeta', 'KINDS', 'LEVELS',
    'encode', 'severity_of', 'category_of', 'meets_minimum', 'parse_level',
    'LogSource', 'NameKey',
    'Includes', 'resolve_includes', 'should_log',
    'StyleConfig', 'StyleContext',
    'Logger', 'UtilLogger',
    'LoggerProvider', 'create_logger_provider', 'init_logging', 'get_provider', 'get_logger',
    'ConsoleSink',
    'traced',
]
