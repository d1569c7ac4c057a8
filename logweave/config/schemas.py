"""Pydantic schemas for logging configuration (dicts or JSON files).

Keys follow the JSON config shape (``filePattern``, ``dateFormat``,
``rotationCycle`` ...); snake_case field names are accepted as well. Level and
rotation-cycle strings are resolved by the appenders themselves so that their
errors name the valid alternatives.
"""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_APPENDER_FORMAT = "%d %t %l %m %f"
DEFAULT_APPENDER_DATE_FORMAT = "yyyy-MM-dd HH:mm:ss"


class AppenderConfigSchema(BaseModel):
    """Fields shared by every appender type."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    type: str = Field(..., min_length=1, description="Registered appender type, e.g. CONSOLE, FILE")
    level: str = Field("INFO", description="Minimum level for this appender")
    format: str = DEFAULT_APPENDER_FORMAT
    date_format: str = Field(DEFAULT_APPENDER_DATE_FORMAT, alias="dateFormat")
    enabled: bool = True

    @field_validator("type")
    @classmethod
    def _upper_type(cls, value: str) -> str:
        return value.strip().upper()


class ConsoleAppenderConfigSchema(AppenderConfigSchema):
    mode: Literal["stdout", "stderr"] = "stdout"

    @field_validator("mode", mode="before")
    @classmethod
    def _lower_mode(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value


class FileAppenderConfigSchema(AppenderConfigSchema):
    file_pattern: str = Field(..., alias="filePattern", min_length=1)
    file_extension: str = Field("log", alias="fileExtension")
    path: str = "logs/"
    rotation_cycle: str = Field("never", alias="rotationCycle")


class LoggingConfigSchema(BaseModel):
    """Top-level configuration consumed by LoggerFactory.init()."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    appenders: List[Dict[str, Any]] = Field(default_factory=list)
    app_version: Optional[str] = Field(None, alias="appVersion")
    device_id: Optional[str] = Field(None, alias="deviceId")
    session_id: Optional[str] = Field(None, alias="sessionId")
    mdc: Dict[str, str] = Field(default_factory=dict)
    depth_offset: int = Field(0, alias="depthOffset", ge=0)
    self_debug: bool = Field(False, alias="selfDebug")
    self_log_level: str = Field("DEBUG", alias="selfLogLevel")
