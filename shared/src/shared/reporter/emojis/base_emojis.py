"""
Base class for emoji registry components.

Every category is a class of string constants so call sites read as
`NetworkEmoji.RPC` instead of a literal character.
"""

from typing import Dict, List


class ComponentEmoji:
    """
    Base class for component-specific emoji collections.

    Example:
        >>> class MyEmoji(ComponentEmoji):
        ...     HELLO = "👋"
        >>> MyEmoji.get_all()
        {'HELLO': '👋'}
    """

    @classmethod
    def get_all(cls) -> Dict[str, str]:
        """
        Get all emoji definitions from this category.

        Returns:
            Dictionary mapping emoji name to emoji character
        """
        return {
            name: value
            for name, value in vars(cls).items()
            if not name.startswith("_") and isinstance(value, str)
        }

    @classmethod
    def list_names(cls) -> List[str]:
        """Get sorted list of emoji constant names in this category."""
        return sorted(name for name in cls.get_all() if name.isupper())

    @classmethod
    def format(cls, name: str, message: str) -> str:
        """
        Prefix message with the named emoji.

        Unknown names return the message unchanged.
        """
        emoji = cls.get_all().get(name.upper())
        if emoji is None:
            return message
        return f"{emoji} {message}"
