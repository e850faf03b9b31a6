"""Settings endpoints of an index.

Every setting lives at ``/indexes/{uid}/settings/{name}`` and supports the
same three verbs: GET reads it, POST replaces it and DELETE restores the
default. Writes are asynchronous and return an :class:`AsyncUpdate`.
"""

from __future__ import annotations

from http import HTTPMethod, HTTPStatus
from typing import TYPE_CHECKING, Any

from meilisearch_lite.client.dispatcher import RequestDescriptor
from meilisearch_lite.client.models import AsyncUpdate, IndexSettings


if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from meilisearch_lite.client.dispatcher import Dispatcher


__all__ = ["SettingsAPI"]


class SettingsAPI:
    """Read, replace and reset the settings of one index."""

    API_NAME = "Settings"

    def __init__(self, dispatcher: Dispatcher, index_uid: str) -> None:
        """Bind the API to the index ``index_uid``."""
        self._dispatcher = dispatcher
        self.index_uid = index_uid

    # -------------------------------------------------------------------------
    # Generic verbs
    # -------------------------------------------------------------------------

    def _endpoint(self, name: str | None) -> str:
        base = f"/indexes/{self.index_uid}/settings"
        return f"{base}/{name}" if name else base

    def _get[T](self, name: str | None, response_type: type[T], function_name: str) -> T:
        value: T = self._dispatcher.dispatch(
            RequestDescriptor.build(
                HTTPMethod.GET,
                self._endpoint(name),
                function_name=function_name,
                api_name=self.API_NAME,
                accepted=[HTTPStatus.OK],
                response_type=response_type,
            )
        )
        return value

    def _update(self, name: str | None, payload: Any, function_name: str) -> AsyncUpdate:  # noqa: ANN401
        update: AsyncUpdate = self._dispatcher.dispatch(
            RequestDescriptor.build(
                HTTPMethod.POST,
                self._endpoint(name),
                function_name=function_name,
                api_name=self.API_NAME,
                accepted=[HTTPStatus.ACCEPTED],
                payload=payload,
                response_type=AsyncUpdate,
            )
        )
        return update

    def _reset(self, name: str | None, function_name: str) -> AsyncUpdate:
        update: AsyncUpdate = self._dispatcher.dispatch(
            RequestDescriptor.build(
                HTTPMethod.DELETE,
                self._endpoint(name),
                function_name=function_name,
                api_name=self.API_NAME,
                accepted=[HTTPStatus.ACCEPTED],
                response_type=AsyncUpdate,
            )
        )
        return update

    # -------------------------------------------------------------------------
    # All settings
    # -------------------------------------------------------------------------

    def get_all(self) -> IndexSettings:
        """Get every setting of the index."""
        return self._get(None, IndexSettings, "GetAll")

    def update_all(self, settings: IndexSettings) -> AsyncUpdate:
        """Update the settings that are not None in ``settings``."""
        return self._update(None, settings, "UpdateAll")

    def reset_all(self) -> AsyncUpdate:
        """Restore every setting to its default."""
        return self._reset(None, "ResetAll")

    # -------------------------------------------------------------------------
    # Ranking rules
    # -------------------------------------------------------------------------

    def get_ranking_rules(self) -> list[str]:
        """Get the ranking rules, in order of importance."""
        return self._get("ranking-rules", list[str], "GetRankingRules")

    def update_ranking_rules(self, rules: Sequence[str]) -> AsyncUpdate:
        """Replace the ranking rules."""
        return self._update("ranking-rules", list(rules), "UpdateRankingRules")

    def reset_ranking_rules(self) -> AsyncUpdate:
        """Restore the default ranking rules."""
        return self._reset("ranking-rules", "ResetRankingRules")

    # -------------------------------------------------------------------------
    # Distinct attribute
    # -------------------------------------------------------------------------

    def get_distinct_attribute(self) -> str | None:
        """Get the distinct attribute, None when unset."""
        return self._get(
            "distinct-attribute",
            str | None,  # type: ignore[arg-type]
            "GetDistinctAttribute",
        )

    def update_distinct_attribute(self, attribute: str) -> AsyncUpdate:
        """Set the attribute used to deduplicate results."""
        return self._update("distinct-attribute", attribute, "UpdateDistinctAttribute")

    def reset_distinct_attribute(self) -> AsyncUpdate:
        """Remove the distinct attribute."""
        return self._reset("distinct-attribute", "ResetDistinctAttribute")

    # -------------------------------------------------------------------------
    # Searchable attributes
    # -------------------------------------------------------------------------

    def get_searchable_attributes(self) -> list[str]:
        """Get the attributes searched by queries, by priority."""
        return self._get("searchable-attributes", list[str], "GetSearchableAttributes")

    def update_searchable_attributes(self, attributes: Sequence[str]) -> AsyncUpdate:
        """Replace the searchable attributes."""
        return self._update(
            "searchable-attributes",
            list(attributes),
            "UpdateSearchableAttributes",
        )

    def reset_searchable_attributes(self) -> AsyncUpdate:
        """Make every attribute searchable again."""
        return self._reset("searchable-attributes", "ResetSearchableAttributes")

    # -------------------------------------------------------------------------
    # Displayed attributes
    # -------------------------------------------------------------------------

    def get_displayed_attributes(self) -> list[str]:
        """Get the attributes returned in documents."""
        return self._get("displayed-attributes", list[str], "GetDisplayedAttributes")

    def update_displayed_attributes(self, attributes: Sequence[str]) -> AsyncUpdate:
        """Replace the displayed attributes."""
        return self._update(
            "displayed-attributes",
            list(attributes),
            "UpdateDisplayedAttributes",
        )

    def reset_displayed_attributes(self) -> AsyncUpdate:
        """Display every attribute again."""
        return self._reset("displayed-attributes", "ResetDisplayedAttributes")

    # -------------------------------------------------------------------------
    # Stop words
    # -------------------------------------------------------------------------

    def get_stop_words(self) -> list[str]:
        """Get the words ignored by queries."""
        return self._get("stop-words", list[str], "GetStopWords")

    def update_stop_words(self, words: Sequence[str]) -> AsyncUpdate:
        """Replace the stop words."""
        return self._update("stop-words", list(words), "UpdateStopWords")

    def reset_stop_words(self) -> AsyncUpdate:
        """Remove every stop word."""
        return self._reset("stop-words", "ResetStopWords")

    # -------------------------------------------------------------------------
    # Synonyms
    # -------------------------------------------------------------------------

    def get_synonyms(self) -> dict[str, list[str]]:
        """Get the synonyms, keyed by word."""
        return self._get("synonyms", dict[str, list[str]], "GetSynonyms")

    def update_synonyms(self, synonyms: Mapping[str, Sequence[str]]) -> AsyncUpdate:
        """Replace the synonyms, a mapping of word to its synonyms."""
        payload = {word: list(values) for word, values in synonyms.items()}
        return self._update("synonyms", payload, "UpdateSynonyms")

    def reset_synonyms(self) -> AsyncUpdate:
        """Remove every synonym."""
        return self._reset("synonyms", "ResetSynonyms")

    # -------------------------------------------------------------------------
    # Attributes for faceting
    # -------------------------------------------------------------------------

    def get_attributes_for_faceting(self) -> list[str]:
        """Get the attributes usable as facets."""
        return self._get(
            "attributes-for-faceting",
            list[str],
            "GetAttributesForFaceting",
        )

    def update_attributes_for_faceting(self, attributes: Sequence[str]) -> AsyncUpdate:
        """Replace the attributes usable as facets."""
        return self._update(
            "attributes-for-faceting",
            list(attributes),
            "UpdateAttributesForFaceting",
        )

    def reset_attributes_for_faceting(self) -> AsyncUpdate:
        """Remove every facet attribute."""
        return self._reset("attributes-for-faceting", "ResetAttributesForFaceting")
