"""Language Resolution — maps a requested language selector onto the supported set.

Invariants:
    - Always returns a member of `supported` (never None, never raises)
    - Unsupported or missing selectors resolve to `default`
"""

from collections.abc import Sequence

from directory_api.core.domain_types import LanguageCode


def resolve_language(
    requested: str | None, supported: Sequence[str], default: str,
) -> LanguageCode:
    """Return `requested` if supported, else the default language."""
    if requested and requested in supported:
        return LanguageCode(requested)
    return LanguageCode(default)


def select_language_block(
    translations: dict, lang: str, default: str,
) -> dict:
    """Pick one language's text block, falling back to the default block."""
    block = translations.get(lang)
    if block is None:
        block = translations.get(default, {})
    return block
