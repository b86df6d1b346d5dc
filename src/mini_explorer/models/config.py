"""
Configuration data models for MiniFileExplorer.

This module defines the settings that can be supplied from a YAML file:
the directory to start in, how timestamps are rendered, and where
diagnostic logging goes.
"""

from typing import Dict, Optional, Any
from datetime import datetime
from pathlib import Path
from enum import Enum
import logging
from pydantic import BaseModel, Field, field_validator

from .entries import DEFAULT_TIME_FORMAT


class LogLevel(Enum):
    """Supported logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(BaseModel):
    """
    Configuration for diagnostic logging.
    
    Attributes:
        level: Minimum level of records to emit
        file: Optional log file; records go to stderr when unset
    """
    
    level: LogLevel = Field(LogLevel.WARNING, description="Minimum logging level")
    file: Optional[str] = Field(None, description="Path of the log file")
    
    @field_validator('level', mode='before')
    @classmethod
    def validate_level(cls, v) -> LogLevel:
        """Validate and convert level to enum, case-insensitively."""
        if isinstance(v, str):
            try:
                return LogLevel(v.upper())
            except ValueError:
                raise ValueError(f"Invalid log level: {v}")
        return v
    
    @field_validator('file')
    @classmethod
    def validate_file(cls, v: Optional[str]) -> Optional[str]:
        """Expand user path; treat blank values as unset."""
        if v is None or not v.strip():
            return None
        return str(Path(v).expanduser())
    
    def get_numeric_level(self) -> int:
        """Get the level as understood by the logging module."""
        return getattr(logging, self.level.value)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data = self.model_dump()
        data['level'] = self.level.value
        return data


class ExplorerConfig(BaseModel):
    """
    Main configuration class for MiniFileExplorer.
    
    Attributes:
        start_directory: Directory to start in when none is given on the command line
        time_format: strftime format for every timestamp the explorer prints
        logging: Diagnostic logging settings
    """
    
    start_directory: Optional[str] = Field(None, description="Initial directory")
    time_format: str = Field(DEFAULT_TIME_FORMAT, min_length=1, description="strftime format for timestamps")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")
    
    @field_validator('start_directory')
    @classmethod
    def validate_start_directory(cls, v: Optional[str]) -> Optional[str]:
        """Expand user path but keep relative paths relative."""
        if v is None or not v.strip():
            return None
        if v.startswith('~'):
            return str(Path(v).expanduser())
        return v
    
    @field_validator('time_format')
    @classmethod
    def validate_time_format(cls, v: str) -> str:
        """Reject formats strftime cannot render."""
        try:
            datetime(2000, 1, 2, 3, 4, 5).strftime(v)
        except ValueError as e:
            raise ValueError(f"Invalid time format '{v}': {e}")
        return v
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary representation."""
        data = self.model_dump()
        data['logging'] = self.logging.to_dict()
        return data
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ExplorerConfig':
        """Create configuration from dictionary representation."""
        return cls.model_validate(data)
    
    def __str__(self) -> str:
        """String representation of the configuration."""
        parts = [f"Start directory: {self.start_directory or 'cwd'}"]
        parts.append(f"Time format: {self.time_format}")
        parts.append(f"Log level: {self.logging.level.value}")
        
        return " | ".join(parts)
