from .dialects import classify_line
from .normalize import normalize_to_enhanced, normalize_to_standard

__all__ = ["classify_line", "normalize_to_enhanced", "normalize_to_standard"]
