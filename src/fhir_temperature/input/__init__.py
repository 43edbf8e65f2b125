from .reader import PROMPT, ensure_finite, parse_temperature, read_temperature

__all__ = ["PROMPT", "ensure_finite", "parse_temperature", "read_temperature"]
