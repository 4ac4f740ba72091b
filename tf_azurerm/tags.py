"""Tag helpers shared by resources and data sources."""

from typing import Dict, Mapping, Optional


def flatten_tags(tags: Optional[Mapping[str, Optional[str]]]) -> Dict[str, str]:
    """Convert an SDK tag mapping into state form, dropping null values."""
    if not tags:
        return {}
    return {key: value for key, value in tags.items() if value is not None}
