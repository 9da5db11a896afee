"""Output generators"""

from .markdown import emit_markdown, generate_markdown
from .typescript import emit_typescript, generate_typescript

__all__ = ["emit_markdown", "generate_markdown", "emit_typescript", "generate_typescript"]
