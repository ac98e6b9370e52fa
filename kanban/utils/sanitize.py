"""Input sanitization for user-supplied text."""
from typing import Iterable, List, Optional


def clean_text(value: Optional[str]) -> Optional[str]:
    """Trim ``value`` and escape angle brackets so markup is inert when rendered.

    Only ``<`` and ``>`` are escaped; the result contains neither, so cleaning
    an already clean value returns it unchanged.
    """
    if value is None:
        return None
    return str(value).strip().replace("<", "&lt;").replace(">", "&gt;")


def clean_tags(tags: Optional[Iterable[str]]) -> Optional[List[str]]:
    if tags is None:
        return None
    return [clean_text(tag) for tag in tags]
