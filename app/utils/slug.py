"""Утилиты для slug."""
from slugify import slugify


def make_slug(name: str) -> str:
    """Slug из названия: нижний регистр, без пунктуации, через дефис."""
    return slugify(name, lowercase=True)
