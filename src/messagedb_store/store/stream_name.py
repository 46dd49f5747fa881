"""Stream name utilities for Message DB.

Stream names follow the format: {category}[:{type}[+{type}...]][-{id}]

A stream name without an id is a category stream; reading it fans in the
messages of every entity stream in that category. A stream name with an id
is an entity stream.

Example:
    >>> stream_name("cart", "123")
    'cart-123'
    >>> is_category("cart")
    True
    >>> is_category("cart-123")
    False
    >>> get_types("cart:command+position-123")
    ['command', 'position']
"""

ID_SEPARATOR = "-"
TYPE_SEPARATOR = ":"
COMPOUND_SEPARATOR = "+"


def is_category(name: str) -> bool:
    """Return True if the stream name has no id segment."""
    return ID_SEPARATOR not in name


def get_category(name: str) -> str:
    """Return the category portion of a stream name, including any types.

    Example:
        >>> get_category("cart:command-123")
        'cart:command'
    """
    return name.split(ID_SEPARATOR, 1)[0]


def get_id(name: str) -> str | None:
    """Return the id portion of a stream name, or None for a category stream.

    The id may itself contain '-' characters (UUIDs do).

    Example:
        >>> get_id("cart-0b2d6f3e-1c1a-4a3e-8a9d-6f0b1c2d3e4f")
        '0b2d6f3e-1c1a-4a3e-8a9d-6f0b1c2d3e4f'
    """
    if is_category(name):
        return None
    return name.split(ID_SEPARATOR, 1)[1]


def get_cardinal_id(name: str) -> str | None:
    """Return the first element of a compound id, or None for a category stream.

    Example:
        >>> get_cardinal_id("cart-123+456")
        '123'
    """
    stream_id = get_id(name)
    if stream_id is None:
        return None
    return stream_id.split(COMPOUND_SEPARATOR, 1)[0]


def get_entity_name(name: str) -> str:
    """Return the category without its types.

    Example:
        >>> get_entity_name("cart:command-123")
        'cart'
    """
    return get_category(name).split(TYPE_SEPARATOR, 1)[0]


def get_types(name: str) -> list[str]:
    """Return the category types of a stream name (empty if there are none)."""
    category = get_category(name)
    if TYPE_SEPARATOR not in category:
        return []
    types = category.split(TYPE_SEPARATOR, 1)[1]
    return [t for t in types.split(COMPOUND_SEPARATOR) if t]


def stream_name(
    category: str,
    stream_id: str | None = None,
    types: list[str] | None = None,
) -> str:
    """Build a Message DB stream name from components.

    Args:
        category: Logical grouping of related streams (e.g., "cart")
        stream_id: Entity id; when None, a category stream name is returned
        types: Optional category types (e.g., ["command"])

    Returns:
        A stream name string.

    Raises:
        ValueError: If the category is empty or contains a separator, if a
            type is empty or contains a separator, or if stream_id is given
            but empty.

    Example:
        >>> stream_name("cart", "123", types=["command"])
        'cart:command-123'
    """
    if not category or not category.strip():
        raise ValueError("category cannot be empty")
    if ID_SEPARATOR in category:
        raise ValueError("category cannot contain '-' character")
    if TYPE_SEPARATOR in category:
        raise ValueError("category cannot contain ':' character")

    name = category
    if types:
        for type_ in types:
            if not type_ or not type_.strip():
                raise ValueError("type cannot be empty")
            for separator in (ID_SEPARATOR, TYPE_SEPARATOR, COMPOUND_SEPARATOR):
                if separator in type_:
                    raise ValueError(f"type cannot contain '{separator}' character")
        name += TYPE_SEPARATOR + COMPOUND_SEPARATOR.join(types)

    if stream_id is not None:
        if not stream_id.strip():
            raise ValueError("stream_id cannot be empty")
        name += ID_SEPARATOR + stream_id

    return name
