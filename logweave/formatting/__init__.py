"""
Template engine: format patterns (``[%d][%l] %m``) and date patterns
(``yyyy-MM-dd HH:mm:ss.SSS``), both compiled once and cached.
"""
from logweave.formatting.date_format import (
    DEFAULT_DATE_FORMAT,
    SimpleDateFormat,
    clear_date_format_cache,
    format_date,
    get_date_format,
)
from logweave.formatting.template import (
    FormatTemplate,
    LiteralPart,
    PlaceholderKind,
    PlaceholderPart,
    TemplateCache,
    clear_template_cache,
    get_template,
    parse_pattern,
    render,
    template_cache,
)

__all__ = [
    "DEFAULT_DATE_FORMAT",
    "SimpleDateFormat",
    "FormatTemplate",
    "LiteralPart",
    "PlaceholderKind",
    "PlaceholderPart",
    "TemplateCache",
    "clear_date_format_cache",
    "clear_template_cache",
    "format_date",
    "get_date_format",
    "get_template",
    "parse_pattern",
    "render",
    "template_cache",
]
