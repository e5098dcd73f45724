"""Client-side filtering and sorting of the fetched prompt collection."""

import unicodedata
from dataclasses import dataclass, field
from typing import Iterable, List, Set

from ..models import Prompt, Provider, SortField, SortOrder
from ..utils.helpers import parse_iso


@dataclass
class CollectionQuery:
    """Search text, facet selections and sort applied to the collection."""

    search: str = ""
    tags: Set[str] = field(default_factory=set)
    providers: Set[Provider] = field(default_factory=set)
    sort_field: SortField = SortField.UPDATED_AT
    sort_order: SortOrder = SortOrder.DESC


def collation_key(text: str) -> str:
    """Accent- and case-insensitive key for title ordering."""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def matches_search(prompt: Prompt, search: str) -> bool:
    """Case-insensitive substring match on title, description or any tag."""
    if not search:
        return True
    needle = search.casefold()
    return (
        needle in prompt.title.casefold()
        or needle in prompt.description.casefold()
        or any(needle in tag.casefold() for tag in prompt.tags)
    )


def filter_prompts(prompts: Iterable[Prompt], query: CollectionQuery) -> List[Prompt]:
    """
    Apply the text, tag and provider filters, then sort.

    An empty tag or provider selection lets every prompt through. Sorting is
    stable in both directions, so ties keep their input order.

    Args:
        prompts: The fetched collection
        query: Filters and sort to apply

    Returns:
        New list of the matching prompts
    """
    selected = [
        prompt
        for prompt in prompts
        if matches_search(prompt, query.search)
        and (not query.tags or not query.tags.isdisjoint(prompt.tags))
        and (not query.providers or prompt.provider in query.providers)
    ]

    if query.sort_field == SortField.TITLE:
        key = lambda prompt: collation_key(prompt.title)
    else:
        key = lambda prompt: parse_iso(prompt.updated_at)

    return sorted(selected, key=key, reverse=query.sort_order == SortOrder.DESC)


def available_tags(prompts: Iterable[Prompt]) -> List[str]:
    """Sorted unique tags across the collection, for the tag facet."""
    return sorted({tag for prompt in prompts for tag in prompt.tags})
