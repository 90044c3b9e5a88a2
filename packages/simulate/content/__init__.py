"""
Static game content.

Contains:
- Class table (damage/health/armor multipliers per class)
- Monster and dungeon rosters (import from .monsters)
"""

from .classes import Class, ClassConfig, CLASS_CONFIGS, get_class_config, parse_class

__all__ = ["Class", "ClassConfig", "CLASS_CONFIGS", "get_class_config", "parse_class"]
