"""Configuration management module for the Advocate Matcher."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, parse_config, validate_config_file
from .models import (
    AppConfig,
    AvailabilityBand,
    ConfidenceThresholds,
    LogFormat,
    LoggingConfig,
    LogLevel,
    MatchingCriteria,
    ScoringConfig,
    ScoringWeights,
)

__all__ = [
    # Main loader functions
    "load_config",
    "parse_config",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "ScoringConfig",
    "ScoringWeights",
    "AvailabilityBand",
    "ConfidenceThresholds",
    "MatchingCriteria",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
