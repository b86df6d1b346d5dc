"""
YAML configuration loading for MiniFileExplorer.

The configuration file is optional. When `--config` is not given the parser
looks in the home directory and in ~/.config/mini-explorer; finding nothing
means the explorer runs on defaults.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError

from ..models.config import ExplorerConfig


logger = logging.getLogger(__name__)

CONFIG_NAMES = (
    '.miniexplorer.yaml',
    '.miniexplorer.yml',
    'miniexplorer.yaml',
    'miniexplorer.yml',
)

TEMPLATE_COMMENTS = {
    'start_directory': "Directory to start in when none is given on the command line",
    'time_format': "strftime format used for every printed timestamp",
    'logging': "Diagnostic logging: level and optional file",
}


class ConfigurationError(Exception):
    """Raised when the configuration file cannot be read or is invalid."""
    pass


@dataclass
class ConfigParseResult:
    """
    Outcome of loading the configuration.

    Attributes:
        config: The validated configuration
        warnings: Problems that do not stop the explorer from starting
        config_path: File the configuration came from, None for defaults
        is_default: Whether no file was used
    """
    config: ExplorerConfig
    warnings: List[str] = field(default_factory=list)
    config_path: Optional[Path] = None
    is_default: bool = False


class ConfigParser:
    """Locates, reads and validates the explorer's YAML configuration."""

    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> ConfigParseResult:
        """
        Load the configuration.

        Args:
            config_path: Explicit file to read; when None the default locations are searched

        Returns:
            ConfigParseResult with the validated configuration

        Raises:
            ConfigurationError: If an explicit file is missing, or any file used is invalid
        """
        if config_path is not None:
            path = Path(config_path).expanduser()
            if not path.exists():
                raise ConfigurationError(f"Configuration file not found: {path}")
            data = read_yaml_mapping(path)
        else:
            path, data = self._discover()

        try:
            config = ExplorerConfig.from_dict(data or {})
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

        result = ConfigParseResult(config=config, config_path=path, is_default=path is None)
        result.warnings = self._warnings_for(result)
        logger.info(f"Configuration loaded from {path or 'defaults'}")
        return result

    def _search_paths(self) -> List[Path]:
        home = Path.home()
        return [home, home / '.config' / 'mini-explorer']

    def _discover(self):
        """First readable default-named file, as (path, data), or (None, None)."""
        candidates = (d / name for d in self._search_paths() for name in CONFIG_NAMES)
        for candidate in candidates:
            if not candidate.is_file():
                continue
            try:
                return candidate, read_yaml_mapping(candidate)
            except ConfigurationError as e:
                logger.warning(f"Skipping {candidate}: {e}")
        logger.info("No configuration file found, using defaults")
        return None, None

    def _warnings_for(self, result: ConfigParseResult) -> List[str]:
        config = result.config
        warnings = []
        if result.is_default:
            warnings.append("No configuration file found, using default settings")
        if config.start_directory and not Path(config.start_directory).is_dir():
            warnings.append(f"Configured start directory does not exist: {config.start_directory}")
        if config.logging.file:
            log_dir = Path(config.logging.file).parent
            if not log_dir.is_dir():
                warnings.append(f"Log file directory does not exist: {log_dir}")
        return warnings


def read_yaml_mapping(path: Path) -> Dict[str, Any]:
    """
    Read a YAML document that must be a mapping.

    An empty document counts as an empty mapping.

    Raises:
        ConfigurationError: If the file is unreadable, not YAML, or not a mapping
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file must contain a YAML object, got {type(data).__name__}")
    return data


def load_config(config_path: Optional[Union[str, Path]] = None) -> ConfigParseResult:
    """Load the configuration from `config_path` or the default locations."""
    return ConfigParser().load_config(config_path)


def render_config_template(config: Optional[ExplorerConfig] = None) -> str:
    """YAML for `config` (defaults if None), one commented block per top-level key."""
    values = (config or ExplorerConfig()).to_dict()
    blocks = ["# MiniFileExplorer Configuration"]
    for key, comment in TEMPLATE_COMMENTS.items():
        body = yaml.safe_dump({key: values[key]}, default_flow_style=False, sort_keys=False)
        blocks.append(f"# {comment}\n{body.rstrip()}")
    return "\n\n".join(blocks) + "\n"


def create_config_template(output_path: Union[str, Path]) -> Path:
    """
    Write the default configuration as a commented template.

    Args:
        output_path: Destination file; missing parent directories are created

    Returns:
        The path written

    Raises:
        ConfigurationError: If the file cannot be written
    """
    path = Path(output_path).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_config_template(), encoding='utf-8')
    except OSError as e:
        raise ConfigurationError(f"Cannot create template file {path}: {e}") from e
    logger.info(f"Wrote configuration template to {path}")
    return path
