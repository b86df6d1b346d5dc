"""
Configuration management package for MiniFileExplorer.

This package provides YAML configuration loading and validation.
"""

from .parser import (
    ConfigParser,
    ConfigParseResult,
    ConfigurationError,
    load_config,
    create_config_template,
    render_config_template
)

__all__ = [
    'ConfigParser',
    'ConfigParseResult',
    'ConfigurationError',
    'load_config',
    'create_config_template',
    'render_config_template'
]
