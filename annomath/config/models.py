# annomath/config/models.py

"""
Pydantic models for defining the structure and validation of the annomath configuration (annomath.toml).
Uses Pydantic V2 syntax.
"""

from pathlib import Path
from typing import Any, List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# --- Helper Functions ---

def _resolve_path(path: Union[str, Path]) -> Path:
    """Resolves and expands user paths."""
    return Path(path).expanduser().resolve()

# --- Model Definitions ---

class EvaluatorConfig(BaseModel):
    """Behaviour of the expression dispatcher when a program is skipped."""
    default_value: float = Field(0.0, description="Neutral value returned for rejected or failing programs.")
    advisory_message: str = Field(
        "execution skipped: unsupported expression",
        description="Advisory shown to the user when a program is skipped.",
    )

class SpecialConfig(BaseModel):
    """Numerical parameters of the special-function estimators."""
    euler_terms: int = Field(100, gt=0, le=170, description="Truncation of Euler's infinite product (n! overflows a double above 170).")
    weierstrass_terms: int = Field(100, gt=0, description="Truncation of the Weierstrass product.")
    integral_upper: float = Field(20.0, gt=0, description="Upper bound of the gamma integral.")
    integral_step: float = Field(0.01, gt=0, description="Step of the gamma integral Riemann sum.")

class CatalogConfig(BaseModel):
    """Catalog rule selection."""
    disabled_rules: List[str] = Field(default_factory=list, description="Names of catalog rules to ignore.")

    @field_validator('disabled_rules', mode='before')
    @classmethod
    def split_rule_names(cls, value: Any) -> Any:
        """Accepts a comma separated string (e.g. from an environment variable)."""
        if isinstance(value, str):
            return [name.strip() for name in value.split(',') if name.strip()]
        return value

class PathsConfig(BaseModel):
    """Configuration for file paths used by annomath."""
    log_directory: Path = Field(default=Path("./annomath_logs"), description="Directory for log files.")
    output_dir: Path = Field(default=Path("./annomath_output"), description="Default directory for rewritten projects.")

    @field_validator('log_directory', 'output_dir', mode='before')
    @classmethod
    def resolve_paths_before_validation(cls, value: Any) -> Path:
        """Resolves paths before Pydantic validates them."""
        if isinstance(value, (str, Path)):
            return _resolve_path(value)
        return value

class LoggingConfig(BaseModel):
    """Logging configuration settings."""
    log_file_enabled: bool = Field(False, description="Enable/disable persistent file logging.")
    log_filename_template: str = Field("annomath_run_{timestamp:%Y%m%d_%H%M%S}.log", description="Naming pattern for log files.")
    log_level_file: str = Field("DEBUG", description="Minimum level for file logs (DEBUG, INFO, WARNING, ERROR, CRITICAL).")
    log_format: str = Field("%(asctime)s [%(levelname)-8s] %(name)-30s - %(message)s (%(filename)s:%(lineno)d)", description="Format string for file log entries.")
    log_level_console: str = Field("INFO", description="Default minimum level for console output (overridden by verbosity flags).")

    @field_validator('log_level_file', 'log_level_console')
    @classmethod
    def check_log_level(cls, value: str) -> str:
        """Validate log level strings."""
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in allowed_levels:
            raise ValueError(f"Invalid log level '{value}'. Must be one of {allowed_levels}")
        return upper_value

class AnnomathConfig(BaseModel):
    """Root configuration model for annomath."""
    model_config = ConfigDict(
        extra='ignore',
        validate_assignment=True
    )

    evaluator: EvaluatorConfig = Field(default_factory=EvaluatorConfig)
    special: SpecialConfig = Field(default_factory=SpecialConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
