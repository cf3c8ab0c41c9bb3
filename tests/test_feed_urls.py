#!/usr/bin/env python
"""Feed URL selection - 单元测试"""

import sys
from datetime import date
from pathlib import Path
from urllib.parse import parse_qs, urlparse

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from paperfeed.core.dates import is_weekend, last_completed_workweek, trailing_window
from paperfeed.errors import InvalidRequest
from paperfeed.models import SearchQuery
from paperfeed.sources import ArxivSource, BiorxivSource, MedrxivSource

WEDNESDAY = date(2025, 3, 5)
SATURDAY = date(2025, 3, 8)
SUNDAY = date(2025, 3, 9)


class TestDates:
    """测试日期工具"""

    def test_weekend_detection(self):
        assert is_weekend(SATURDAY)
        assert is_weekend(SUNDAY)
        assert not is_weekend(WEDNESDAY)
        assert not is_weekend(date(2025, 3, 7))  # Friday

    def test_last_workweek_from_saturday(self):
        assert last_completed_workweek(SATURDAY) == (date(2025, 3, 3), date(2025, 3, 7))

    def test_last_workweek_from_sunday(self):
        assert last_completed_workweek(SUNDAY) == (date(2025, 3, 3), date(2025, 3, 7))

    def test_last_workweek_from_friday_is_previous_week(self):
        """周五当天本周未结束"""
        assert last_completed_workweek(date(2025, 3, 7)) == (date(2025, 2, 24), date(2025, 2, 28))

    def test_trailing_window(self):
        assert trailing_window(SATURDAY) == (date(2025, 3, 1), SATURDAY)


class TestArxivUrls:
    """测试 arXiv URL 构建"""

    def test_weekday_rss_joins_categories(self):
        query = SearchQuery(categories=["cs.AI", "cs.LG"])
        url = ArxivSource().build_url(query, WEDNESDAY)
        assert url == "https://rss.arxiv.org/rss/cs.AI+cs.LG"

    def test_subfield_applied(self):
        query = SearchQuery.from_params(categories="cs", subfield="AI")
        assert ArxivSource().build_url(query, WEDNESDAY) == "https://rss.arxiv.org/rss/cs.AI"

    @pytest.mark.parametrize("day", [SATURDAY, SUNDAY])
    def test_weekend_uses_search_api(self, day):
        query = SearchQuery(categories=["cs.AI", "cs.LG"])
        url = ArxivSource().build_url(query, day)

        parsed = urlparse(url)
        assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == "http://export.arxiv.org/api/query"
        params = parse_qs(parsed.query)
        assert params["search_query"] == [
            "(cat:cs.AI OR cat:cs.LG) AND submittedDate:[202503030600 TO 202503072359]"
        ]
        assert params["start"] == ["0"]
        assert params["max_results"] == ["500"]
        assert params["sortBy"] == ["submittedDate"]
        assert params["sortOrder"] == ["descending"]

    def test_page_size_configurable(self):
        url = ArxivSource(page_size=50).build_url(SearchQuery(categories=["cs.AI"]), SATURDAY)
        assert parse_qs(urlparse(url).query)["max_results"] == ["50"]

    def test_missing_categories_rejected(self):
        with pytest.raises(InvalidRequest, match="At least one category is required"):
            ArxivSource().build_url(SearchQuery(), WEDNESDAY)

    def test_detail_url(self):
        assert ArxivSource().build_detail_url("2503.02283v1") == (
            "http://export.arxiv.org/api/query?id_list=2503.02283v1"
        )


class TestRxivUrls:
    """测试 bioRxiv / medRxiv URL 构建"""

    def test_biorxiv_weekday_rss(self):
        url = BiorxivSource().build_url(SearchQuery(categories=["neuroscience"]), WEDNESDAY)
        assert url == "https://connect.biorxiv.org/biorxiv_xml.php?subject=neuroscience"

    def test_biorxiv_weekend_date_range(self):
        url = BiorxivSource().build_url(SearchQuery(categories=["neuroscience"]), SATURDAY)
        assert url == "https://api.biorxiv.org/details/biorxiv/2025-03-01/2025-03-08/0"

    @pytest.mark.parametrize("day", [WEDNESDAY, SATURDAY, SUNDAY])
    def test_medrxiv_always_rss(self, day):
        url = MedrxivSource().build_url(SearchQuery(categories=["epidemiology"]), day)
        assert url == "https://connect.medrxiv.org/medrxiv_xml.php?subject=epidemiology"

    def test_category_is_url_encoded(self):
        url = BiorxivSource().build_url(SearchQuery(categories=["cell biology"]), WEDNESDAY)
        assert url.endswith("subject=cell%20biology")

    def test_missing_category_rejected(self):
        with pytest.raises(InvalidRequest, match="A category is required"):
            MedrxivSource().build_url(SearchQuery(), WEDNESDAY)

    def test_detail_urls(self):
        assert BiorxivSource().build_detail_url("10.1101/2025.03.01.641017") == (
            "https://api.biorxiv.org/details/biorxiv/10.1101/2025.03.01.641017"
        )
        assert MedrxivSource().build_detail_url("10.1101/2025.03.01.25323200") == (
            "https://api.medrxiv.org/details/medrxiv/10.1101/2025.03.01.25323200"
        )
