"""Tests for prompt collection filtering and sorting."""

from prompt_gitter.models import Prompt, Provider, SortField, SortOrder
from prompt_gitter.services.collection_view import (
    CollectionQuery,
    available_tags,
    collation_key,
    filter_prompts,
)


def make_prompt(id, title="Prompt", tags=(), provider=Provider.OPENAI, description="",
                updated_at="2024-01-01T00:00:00.000Z"):
    return Prompt(
        id=id,
        title=title,
        description=description,
        tags=list(tags),
        provider=provider,
        model="",
        filename=f"{id}.md",
        created_at="2024-01-01T00:00:00.000Z",
        updated_at=updated_at,
        content="body",
    )


def ids(prompts):
    return [p.id for p in prompts]


class TestFilters:
    """Test text, tag and provider filters."""

    def test_tag_selection(self):
        a = make_prompt("a", tags=["x"])
        b = make_prompt("b", tags=["y"])

        assert ids(filter_prompts([a, b], CollectionQuery(tags={"x"}))) == ["a"]
        assert set(ids(filter_prompts([a, b], CollectionQuery()))) == {"a", "b"}

    def test_tag_selection_matches_any_selected_tag(self):
        a = make_prompt("a", tags=["x"])
        b = make_prompt("b", tags=["y", "z"])
        c = make_prompt("c", tags=[])

        result = filter_prompts([a, b, c], CollectionQuery(tags={"x", "z"}))

        assert set(ids(result)) == {"a", "b"}

    def test_provider_selection(self):
        a = make_prompt("a", provider=Provider.OPENAI)
        b = make_prompt("b", provider=Provider.MISTRAL)
        c = make_prompt("c", provider=Provider.XAI)

        result = filter_prompts([a, b, c], CollectionQuery(providers={Provider.MISTRAL, Provider.XAI}))

        assert set(ids(result)) == {"b", "c"}

    def test_search_is_case_insensitive_over_title_description_and_tags(self):
        a = make_prompt("a", title="Email Writer")
        b = make_prompt("b", description="Drafts an EMAIL reply")
        c = make_prompt("c", tags=["e-mail", "emails"])
        d = make_prompt("d", title="Poems")

        result = filter_prompts([a, b, c, d], CollectionQuery(search="email"))

        assert set(ids(result)) == {"a", "b", "c"}

    def test_filters_are_combined(self):
        a = make_prompt("a", title="Code review", tags=["dev"], provider=Provider.ANTHROPIC)
        b = make_prompt("b", title="Code golf", tags=["dev"], provider=Provider.OPENAI)
        c = make_prompt("c", title="Code poem", tags=["fun"], provider=Provider.ANTHROPIC)

        query = CollectionQuery(search="code", tags={"dev"}, providers={Provider.ANTHROPIC})

        assert ids(filter_prompts([a, b, c], query)) == ["a"]


class TestSorting:
    """Test title and last-updated sorting."""

    def test_title_sort_ignores_case_and_accents(self):
        prompts = [
            make_prompt("1", title="banana"),
            make_prompt("2", title="Éclair"),
            make_prompt("3", title="Apple"),
            make_prompt("4", title="fig"),
        ]
        query = CollectionQuery(sort_field=SortField.TITLE, sort_order=SortOrder.ASC)

        result = filter_prompts(prompts, query)

        assert [p.title for p in result] == ["Apple", "banana", "Éclair", "fig"]

    def test_title_sort_is_stable_in_both_directions(self):
        prompts = [
            make_prompt("1", title="same"),
            make_prompt("2", title="Other"),
            make_prompt("3", title="Same"),
        ]

        ascending = filter_prompts(prompts, CollectionQuery(sort_field=SortField.TITLE, sort_order=SortOrder.ASC))
        descending = filter_prompts(prompts, CollectionQuery(sort_field=SortField.TITLE, sort_order=SortOrder.DESC))

        assert ids(ascending) == ["2", "1", "3"]
        assert ids(descending) == ["1", "3", "2"]

    def test_default_sort_puts_most_recent_first(self):
        old = make_prompt("old", updated_at="2024-01-01T00:00:00.000Z")
        new = make_prompt("new", updated_at="2024-06-01T08:30:00.000Z")
        mid = make_prompt("mid", updated_at="2024-03-01T00:00:00.500Z")

        assert ids(filter_prompts([old, new, mid], CollectionQuery())) == ["new", "mid", "old"]

    def test_ascending_date_sort(self):
        old = make_prompt("old", updated_at="2024-01-01T00:00:00.000Z")
        new = make_prompt("new", updated_at="2024-01-01T00:00:00.001Z")

        query = CollectionQuery(sort_field=SortField.UPDATED_AT, sort_order=SortOrder.ASC)

        assert ids(filter_prompts([new, old], query)) == ["old", "new"]

    def test_input_is_not_mutated(self):
        prompts = [make_prompt("b", title="b"), make_prompt("a", title="a")]
        filter_prompts(prompts, CollectionQuery(sort_field=SortField.TITLE, sort_order=SortOrder.ASC))
        assert ids(prompts) == ["b", "a"]


def test_collation_key_folds_case_and_accents():
    assert collation_key("Éclair") == collation_key("eclair")
    assert collation_key("STRASSE") == collation_key("straße")


def test_available_tags_are_sorted_and_unique():
    prompts = [make_prompt("a", tags=["z", "a"]), make_prompt("b", tags=["a", "m"])]
    assert available_tags(prompts) == ["a", "m", "z"]
