from .config import PrimerConfig, DEFAULT_SCHEMA, EXPORT_FORMATS
from .loader import ConfigError, parse_value
from .schema import KeySpec, make_choices_validator, make_positive_validator

__all__ = [
	"PrimerConfig",
	"DEFAULT_SCHEMA",
	"EXPORT_FORMATS",
	"ConfigError",
	"parse_value",
	"KeySpec",
	"make_choices_validator",
	"make_positive_validator",
]
