from .filename import generate_filename
from .redact import redact

__all__ = [
    "generate_filename",
    "redact",
]
