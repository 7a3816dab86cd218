"""Core business logic layer.

Subpackages:
- calendar: ISO weeks and the weeks-since-birth mapping
- grid: year grid state (52 week slots per year)
- memories: adding, editing and deleting memories of a week
- goals: countdown to future weeks carrying data
"""
__all__ = ["calendar", "grid", "memories", "goals"]
