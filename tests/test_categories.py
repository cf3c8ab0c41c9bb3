#!/usr/bin/env python
"""Category lists - 单元测试"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from paperfeed.categories import list_arxiv_categories, list_rxiv_categories

CATEGORIES_FILE = Path(__file__).parent.parent / "config" / "categories.yaml"


class TestRxivCategories:
    """测试 bioRxiv / medRxiv 分类"""

    def test_value_label_pairs(self):
        rows = list_rxiv_categories("biorxiv", CATEGORIES_FILE)
        assert {"value": "neuroscience", "label": "Neuroscience"} in rows

    def test_sorted_by_label(self):
        rows = list_rxiv_categories("medrxiv", CATEGORIES_FILE)
        labels = [r["label"].lower() for r in rows]
        assert labels == sorted(labels)

    def test_label_falls_back_to_value(self):
        rows = list_rxiv_categories("medrxiv", CATEGORIES_FILE)
        assert {"value": "addiction_medicine", "label": "addiction medicine"} in rows

    def test_unknown_server_empty(self):
        assert list_rxiv_categories("chemrxiv", CATEGORIES_FILE) == []

    def test_missing_file_empty(self, tmp_path):
        assert list_rxiv_categories("biorxiv", tmp_path / "missing.yaml") == []


class TestArxivCategories:
    """测试 arXiv 分类"""

    def test_all(self):
        rows = list_arxiv_categories(path=CATEGORIES_FILE)
        assert any(r["key"] == "cs.AI" for r in rows)
        assert set(rows[0]) == {"key", "field", "description"}

    def test_group_filter(self):
        rows = list_arxiv_categories("stat", CATEGORIES_FILE)
        assert [r["key"] for r in rows] == ["stat.ML"]

    def test_unknown_group_empty(self):
        assert list_arxiv_categories("nope", CATEGORIES_FILE) == []
