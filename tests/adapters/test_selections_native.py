from __future__ import annotations

from lib_shield_config.adapters.native import FALLBACK_KEY, SELECTION_PREFIX, StoreNativeConfigLookup
from lib_shield_config.adapters.selections import SELECTIONS_KEY, StoreSelectionIndex
from lib_shield_config.adapters.stores.memory import InMemoryStore


def _index(hasher, selections) -> StoreSelectionIndex:
    return StoreSelectionIndex(InMemoryStore({SELECTIONS_KEY: selections}), hasher)


def test_matches_by_hashed_application_token(hasher) -> None:
    index = _index(
        hasher,
        {
            "focus": {"applicationTokens": [hasher.hash("app-1"), hasher.hash("app-2")]},
            "social": {"applicationTokens": [hasher.hash("app-3")]},
        },
    )
    assert index.selection_ids(application_token="app-1") == ["focus"]
    assert index.selection_ids(application_token="app-9") == []


def test_most_specific_selection_first(hasher) -> None:
    index = _index(
        hasher,
        {
            "b-wide": {"applicationTokens": [hasher.hash("a"), hasher.hash("b")], "categoryTokens": [hasher.hash("c")]},
            "a-narrow": {"applicationTokens": [hasher.hash("a")]},
            "c-narrow": {"applicationTokens": [hasher.hash("a")]},
        },
    )
    assert index.selection_ids(application_token="a") == ["a-narrow", "c-narrow", "b-wide"]


def test_matches_by_category_or_domain(hasher) -> None:
    index = _index(
        hasher,
        {
            "games": {"categoryTokens": [hasher.hash("cat")]},
            "news": {"webDomainTokens": [hasher.hash("dom")]},
        },
    )
    assert index.selection_ids(web_domain_token="dom") == ["news"]
    assert index.selection_ids(application_token="x", category_token="cat") == ["games"]


def test_malformed_registry_is_ignored(hasher) -> None:
    assert _index(hasher, ["not", "a", "mapping"]).selection_ids(application_token="a") == []
    assert _index(hasher, {"s": {"applicationTokens": "nope"}}).selection_ids(application_token="a") == []
    assert _index(hasher, {"s": {"applicationTokens": [hasher.hash("a")]}}).selection_ids() == []


def test_native_lookup_order() -> None:
    store = InMemoryStore(
        {
            f"{SELECTION_PREFIX}_second": {"title": "second"},
            f"{SELECTION_PREFIX}_broken": "not a mapping",
            FALLBACK_KEY: {"title": "fallback"},
        }
    )
    lookup = StoreNativeConfigLookup(store)
    assert lookup.lookup(["first", "broken", "second"]) == {"title": "second"}
    assert lookup.lookup(["first"]) == {"title": "fallback"}


def test_native_lookup_without_anything() -> None:
    assert StoreNativeConfigLookup(InMemoryStore()).lookup(["s"]) is None


def test_native_lookup_custom_keys() -> None:
    store = InMemoryStore({"custom_S": {"title": "S"}, "base": {"title": "base"}})
    lookup = StoreNativeConfigLookup(store, key_prefix="custom", fallback_key="base")
    assert lookup.lookup(["S"]) == {"title": "S"}
    assert lookup.lookup([]) == {"title": "base"}
