#!/usr/bin/env python
"""Credit ledger - 单元测试"""

import json
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from paperfeed.credits import CreditLedger


class TestCreditLedger:
    """测试额度读写"""

    def test_first_read_creates_record(self, tmp_path):
        path = tmp_path / "credits.json"
        ledger = CreditLedger(path, max_credits=5)
        assert ledger.get_credits("u1") == 5

        saved = json.loads(path.read_text(encoding="utf-8"))
        assert saved["u1"]["remaining_credits"] == 5
        assert "created_at" in saved["u1"]

    def test_has_credits_does_not_create(self, tmp_path):
        path = tmp_path / "credits.json"
        ledger = CreditLedger(path)
        assert not ledger.has_credits("ghost")
        assert not path.exists()

    def test_use_credit_decrements(self, tmp_path):
        ledger = CreditLedger(tmp_path / "credits.json", max_credits=2)
        ledger.get_credits("u1")
        assert ledger.use_credit("u1") == 1
        assert ledger.use_credit("u1") == 0
        assert ledger.use_credit("u1") is None
        assert not ledger.has_credits("u1")

    def test_use_credit_without_record(self, tmp_path):
        ledger = CreditLedger(tmp_path / "credits.json")
        assert ledger.use_credit("ghost") is None

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "credits.json"
        CreditLedger(path, max_credits=3).get_credits("u1")
        CreditLedger(path, max_credits=3).use_credit("u1")
        assert CreditLedger(path, max_credits=3).get_credits("u1") == 2

    def test_concurrent_use_never_negative(self, tmp_path):
        """并发扣减不会透支"""
        ledger = CreditLedger(tmp_path / "credits.json", max_credits=3)
        ledger.get_credits("u1")

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: ledger.use_credit("u1"), range(10)))

        assert sorted(r for r in results if r is not None) == [0, 1, 2]
        assert results.count(None) == 7
        assert ledger.get_credits("u1") == 0
