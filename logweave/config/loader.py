"""
Load and validate logging configuration from a dict, a JSON file or the
``LOGWEAVE_CONFIG`` environment variable.

Pydantic validation errors are re-raised as ConfigurationError with the
offending field names in ``details``.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from logweave.config.schemas import LoggingConfigSchema
from logweave.core.exceptions import ConfigurationError

CONFIG_ENV_VAR = "LOGWEAVE_CONFIG"

SchemaT = TypeVar("SchemaT", bound=BaseModel)

ConfigSource = Union[Mapping[str, Any], str, Path, LoggingConfigSchema, None]


def validate_config(schema: Type[SchemaT], data: Mapping[str, Any], what: str) -> SchemaT:
    """Validate *data* against *schema*; raise ConfigurationError naming bad fields."""
    try:
        return schema.model_validate(dict(data))
    except ValidationError as exc:
        problems = [
            {
                "field": ".".join(str(p) for p in err.get("loc", ())) or "<root>",
                "message": err.get("msg", ""),
            }
            for err in exc.errors()
        ]
        summary = "; ".join(f"{p['field']}: {p['message']}" for p in problems)
        raise ConfigurationError(
            f"Invalid {what} configuration: {summary}",
            details={"fields": [p["field"] for p in problems], "errors": problems},
            cause=exc,
        ) from exc


def read_config_file(path: Union[str, Path]) -> dict[str, Any]:
    """Read a JSON config file into a dict."""
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(
            f"Cannot read logging config file {str(path)!r}: {exc}",
            details={"path": str(path)},
            cause=exc,
        ) from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            f"Logging config file {str(path)!r} is not valid JSON: {exc}",
            details={"path": str(path), "line": exc.lineno, "column": exc.colno},
            cause=exc,
        ) from exc
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Logging config file {str(path)!r} must contain a JSON object",
            details={"path": str(path)},
        )
    return data


def load_logging_config(source: ConfigSource = None) -> LoggingConfigSchema:
    """
    Build a validated LoggingConfigSchema.

    source:
        dict-like  -> validated directly
        str / Path -> JSON file path
        None       -> path from LOGWEAVE_CONFIG, or an empty config if unset
    """
    if isinstance(source, LoggingConfigSchema):
        return source
    if source is None:
        env_path: Optional[str] = os.environ.get(CONFIG_ENV_VAR)
        if not env_path:
            return LoggingConfigSchema()
        source = env_path
    if isinstance(source, (str, Path)):
        source = read_config_file(source)
    return validate_config(LoggingConfigSchema, source, "logging")
