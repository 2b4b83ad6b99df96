"""Tests for JsonStore locking across threads and processes."""

import json
import multiprocessing
from pathlib import Path

import pytest
from filelock import FileLock, Timeout

from pos_inventory.domain.service.stock_ledger import StockLedger
from pos_inventory.infrastructure.persistence.json_stock_movement_repository import (
    JsonStockMovementRepository,
)
from pos_inventory.infrastructure.persistence.json_store import JsonStore


def _receive_soda(path: str, times: int) -> None:
    ledger = StockLedger(JsonStockMovementRepository(Path(path)))
    for _ in range(times):
        ledger.increase("acme", "soda", 1)


class TestJsonStore:

    def test_creates_file_and_persists(self, tmp_path):
        store = JsonStore(tmp_path / "nested" / "records.json")
        assert store.load() == []

        store.persist([{"id": "1"}, {"id": "7"}])

        assert json.loads((tmp_path / "nested" / "records.json").read_text()) == [
            {"id": "1"}, {"id": "7"},
        ]
        assert store.next_id() == "8"

    def test_locked_holds_sidecar_lock(self, tmp_path):
        store = JsonStore(tmp_path / "records.json")

        with store.locked():
            with pytest.raises(Timeout):
                FileLock(str(store.lock_path), timeout=0).acquire()

        other = FileLock(str(store.lock_path), timeout=0)
        other.acquire()
        other.release()

    @pytest.mark.skipif(
        "fork" not in multiprocessing.get_all_start_methods(), reason="needs fork"
    )
    def test_appends_from_separate_processes_are_not_lost(self, tmp_path):
        path = tmp_path / "moves.json"
        JsonStockMovementRepository(path)

        ctx = multiprocessing.get_context("fork")
        workers = [ctx.Process(target=_receive_soda, args=(str(path), 25)) for _ in range(4)]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join(timeout=120)
            assert worker.exitcode == 0

        repo = JsonStockMovementRepository(path)
        assert repo.current_quantity("acme", "soda") == 100
        assert len(repo.list_for_item("acme", "soda")) == 100
