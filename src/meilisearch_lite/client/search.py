"""Search endpoint of an index."""

from __future__ import annotations

from http import HTTPMethod, HTTPStatus
from typing import TYPE_CHECKING, Any

from meilisearch_lite.client.dispatcher import RequestDescriptor
from meilisearch_lite.client.models import SearchRequest, SearchResponse


if TYPE_CHECKING:
    from meilisearch_lite.client.dispatcher import Dispatcher


__all__ = ["DEFAULT_SEARCH_LIMIT", "SearchAPI", "build_search_body"]


DEFAULT_SEARCH_LIMIT = 20


def build_search_body(request: SearchRequest) -> dict[str, Any]:
    """Translate a search request into the POST body the server expects.

    Only parameters that differ from the server defaults are sent. The query
    string is left out for placeholder searches.

    Args:
        request: The search parameters.

    Returns:
        The JSON body as a dict.
    """
    body: dict[str, Any] = {}
    limit = request.limit or DEFAULT_SEARCH_LIMIT

    if not request.placeholder_search:
        body["q"] = request.query
    if request.filters:
        body["filters"] = request.filters
    if request.offset:
        body["offset"] = request.offset
    if limit != DEFAULT_SEARCH_LIMIT:
        body["limit"] = limit
    if request.crop_length:
        body["cropLength"] = request.crop_length
    if request.attributes_to_retrieve:
        body["attributesToRetrieve"] = request.attributes_to_retrieve
    if request.attributes_to_crop:
        body["attributesToCrop"] = request.attributes_to_crop
    if request.attributes_to_highlight:
        body["attributesToHighlight"] = request.attributes_to_highlight
    if request.matches:
        body["matches"] = True
    if request.facets_distribution:
        body["facetsDistribution"] = request.facets_distribution
    if request.facet_filters is not None:
        body["facetFilters"] = request.facet_filters
    return body


class SearchAPI:
    """Run search queries against one index."""

    API_NAME = "Search"

    def __init__(self, dispatcher: Dispatcher, index_uid: str) -> None:
        """Bind the API to the index ``index_uid``."""
        self._dispatcher = dispatcher
        self.index_uid = index_uid

    def search(self, request: SearchRequest | str) -> SearchResponse:
        """Search the index.

        Args:
            request: Search parameters, or just the query string.

        Returns:
            The hits and search metadata.
        """
        if isinstance(request, str):
            request = SearchRequest(query=request)

        response: SearchResponse = self._dispatcher.dispatch(
            RequestDescriptor.build(
                HTTPMethod.POST,
                f"/indexes/{self.index_uid}/search",
                function_name="Search",
                api_name=self.API_NAME,
                accepted=[HTTPStatus.OK],
                payload=build_search_body(request),
                response_type=SearchResponse,
            )
        )
        return response
