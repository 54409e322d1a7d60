"""
Webhook payload template engine.

Templates are JSON documents where ``{{path}}`` placeholders may stand in
value positions. Placeholders written inside string literals are plain text.
"""

from .engine import WebhookPayloadTemplate, iter_placeholders, parse
from .errors import InvalidJsonError, InvalidVariableError, PayloadTemplateError
from .lexer import TemplateLexer, tokenize_template
from .parser import TemplateParser, parse_template
from .path import PlaceholderPath, parse_path
from .resolver import PathResolver, resolve_path
from .serializer import stringify
from .variables import VariableMarker, get_variable

__all__ = [
    "WebhookPayloadTemplate",
    "parse",
    "stringify",
    "get_variable",
    "iter_placeholders",
    "VariableMarker",
    "PayloadTemplateError",
    "InvalidJsonError",
    "InvalidVariableError",
    "TemplateLexer",
    "tokenize_template",
    "TemplateParser",
    "parse_template",
    "PlaceholderPath",
    "parse_path",
    "PathResolver",
    "resolve_path",
]
