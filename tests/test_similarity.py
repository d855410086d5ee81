"""
Tests for the Similarity Service
"""

import pytest

from cineflow.core.exceptions import CatalogHTTPError
from cineflow.services.similarity import DETAIL_SIMILAR_LIMIT, SimilarityService


@pytest.fixture
def service(mock_catalog) -> SimilarityService:
    return SimilarityService(mock_catalog)


class TestFindSimilar:
    
    @pytest.mark.asyncio
    async def test_passes_through(self, service, mock_catalog, make_movie):
        similar = [make_movie("Interstellar")]
        mock_catalog.fetch_similar.return_value = similar
        
        assert await service.find_similar(27205) == similar
        mock_catalog.fetch_similar.assert_awaited_once_with(27205)
    
    @pytest.mark.asyncio
    async def test_no_external_id_makes_no_call(self, service, mock_catalog):
        assert await service.find_similar(None) == []
        mock_catalog.fetch_similar.assert_not_awaited()
    
    @pytest.mark.asyncio
    async def test_errors_propagate(self, service, mock_catalog):
        mock_catalog.fetch_similar.side_effect = CatalogHTTPError(404)
        
        with pytest.raises(CatalogHTTPError):
            await service.find_similar(1)


class TestPanels:
    
    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", " ", "a", " b  "])
    async def test_short_queries_do_not_search(self, service, mock_catalog, query):
        assert await service.search(query) == []
        mock_catalog.search_movies.assert_not_awaited()
    
    @pytest.mark.asyncio
    async def test_search_trims_query(self, service, mock_catalog):
        await service.search("  up ")
        mock_catalog.search_movies.assert_awaited_once_with("up")
    
    @pytest.mark.asyncio
    async def test_search_failure_is_empty(self, service, mock_catalog):
        mock_catalog.search_movies.side_effect = CatalogHTTPError(500)
        assert await service.search("alien") == []
    
    @pytest.mark.asyncio
    async def test_detail_strip_is_limited(self, service, mock_catalog, make_movie):
        mock_catalog.fetch_similar.return_value = [make_movie() for _ in range(20)]
        
        similar = await service.similar_for_detail(make_movie())
        
        assert len(similar) == DETAIL_SIMILAR_LIMIT
    
    @pytest.mark.asyncio
    async def test_similar_for_swallows_errors(self, service, mock_catalog, make_movie):
        mock_catalog.fetch_similar.side_effect = CatalogHTTPError(500)
        assert await service.similar_for(make_movie()) == []
