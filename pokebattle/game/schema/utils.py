"""Utility functions for schema operations."""


def normalize_name(name: str) -> str:
    """Normalize species, move, nature and ability names for lookups.

    Converts names to lowercase and removes every non-alphanumeric character,
    so that data-provider spellings and roster spellings match.

    Args:
        name: The name to normalize (e.g., "Farfetch'd", "Will-O-Wisp", "Mr. Mime")

    Returns:
        Normalized name with only lowercase alphanumeric characters

    Examples:
        >>> normalize_name("Will-O-Wisp")
        'willowisp'
        >>> normalize_name("Hyper Beam")
        'hyperbeam'
    """
    return "".join(c for c in name.lower() if c.isalnum())
