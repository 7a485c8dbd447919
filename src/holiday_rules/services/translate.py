"""Language fallback for holiday names."""

from __future__ import annotations

from collections.abc import Iterable, Mapping


def language_chain(
    requested: str | Iterable[str] | None,
    configured: Iterable[str] = (),
    fallback: str = "en",
) -> list[str]:
    """Requested language(s) first, then the locale's, then ``fallback``; no duplicates."""

    if isinstance(requested, str):
        requested = [requested]
    chain: list[str] = []
    for language in [*(requested or []), *configured, fallback]:
        if language and language not in chain:
            chain.append(language)
    return chain


def resolve_name(names: Mapping[str, str], languages: Iterable[str], default: str) -> str:
    for language in languages:
        if names.get(language):
            return names[language]
    # No language of the chain matched: any translation beats the raw rule key.
    for name in names.values():
        if name:
            return name
    return default


def translate_name(
    names: Mapping[str, str],
    languages: list[str],
    *,
    default: str,
    substitute: bool = False,
    substitute_names: Mapping[str, str] | None = None,
) -> str:
    name = resolve_name(names, languages, default)
    if substitute and substitute_names:
        for language in languages:
            phrase = substitute_names.get(language)
            if phrase:
                return f"{name} ({phrase})"
    return name
