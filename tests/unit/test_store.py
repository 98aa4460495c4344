"""
Ledger Persistence Unit Tests
Tests for airdrop/ledger/store.py
"""
import json
import threading

import pytest

from airdrop.crypto.hashing import to_hex
from airdrop.ledger import (
    LedgerState,
    TokenSupply,
    WhitelistMintLedger,
    load_ledger,
    lock_path_for,
    locked_ledger,
    save_ledger,
)
from airdrop.merkle import MerkleTreeBuilder
from airdrop.schemas.errors import AlreadyClaimedError, LedgerStateError
from fixtures.accounts import ALICE, BOB, CAROL, DAVE, OWNER


class TestSaveLoad:
    """Round trips through the state file."""

    def test_state_survives_reload(self, tmp_path, ledger, tree):
        ledger.verify_and_claim(ALICE, tree.proof_for(ALICE))
        path = save_ledger(ledger, tmp_path / "state.json")

        restored = load_ledger(path)

        assert restored.owner == OWNER
        assert restored.get_root() == tree.root
        assert restored.is_claimed(ALICE)
        assert not restored.is_claimed(BOB)
        assert restored.token.balance_of(ALICE) == ledger.token.balance_of(ALICE)
        assert restored.claim_amount == ledger.claim_amount

    def test_reloaded_ledger_refuses_replay(self, tmp_path, ledger, tree):
        ledger.verify_and_claim(ALICE, tree.proof_for(ALICE))
        restored = load_ledger(save_ledger(ledger, tmp_path / "state.json"))

        with pytest.raises(AlreadyClaimedError):
            restored.verify_and_claim(ALICE, tree.proof_for(ALICE))
        restored.verify_and_claim(BOB, tree.proof_for(BOB))

    def test_supply_cap_persisted(self, tmp_path, tree):
        ledger = WhitelistMintLedger.create(OWNER, tree.root, token=TokenSupply(max_supply=10**19))
        restored = load_ledger(save_ledger(ledger, tmp_path / "state.json"))
        assert restored.token.max_supply == 10**19

    def test_file_is_canonical(self, tmp_path, ledger, tree):
        ledger.verify_and_claim(ALICE, tree.proof_for(ALICE))
        first = save_ledger(ledger, tmp_path / "a.json").read_text()
        second = save_ledger(load_ledger(tmp_path / "a.json"), tmp_path / "b.json").read_text()

        assert first == second
        data = json.loads(first)
        assert data["root"] == to_hex(tree.root)
        assert data["claimed"] == [ALICE]

    def test_overwrite_leaves_no_temp_files(self, tmp_path, ledger):
        path = tmp_path / "state.json"
        save_ledger(ledger, path)
        save_ledger(ledger, path)
        assert [p.name for p in tmp_path.iterdir()] == ["state.json"]

    def test_creates_parent_directories(self, tmp_path, ledger):
        path = save_ledger(ledger, tmp_path / "nested" / "dir" / "state.json")
        assert path.exists()


class TestLockedLedger:
    """Read-modify-write cycles under the state file lock."""

    @pytest.fixture
    def path(self, tmp_path, ledger):
        return save_ledger(ledger, tmp_path / "state.json")

    def test_change_is_saved(self, path, tree):
        with locked_ledger(path) as ledger:
            ledger.verify_and_claim(ALICE, tree.proof_for(ALICE))

        assert load_ledger(path).is_claimed(ALICE)
        assert lock_path_for(path).exists()

    def test_failed_change_is_not_saved(self, path, tree):
        with pytest.raises(AlreadyClaimedError):
            with locked_ledger(path) as ledger:
                ledger.verify_and_claim(BOB, tree.proof_for(BOB))
                ledger.verify_and_claim(BOB, tree.proof_for(BOB))

        assert not load_ledger(path).is_claimed(BOB)

    def test_reads_changes_from_other_writers(self, path, tree):
        stale = load_ledger(path)
        other = load_ledger(path)
        other.verify_and_claim(ALICE, tree.proof_for(ALICE))
        save_ledger(other, path)

        with pytest.raises(AlreadyClaimedError):
            with locked_ledger(path) as ledger:
                ledger.verify_and_claim(ALICE, tree.proof_for(ALICE))
        assert not stale.is_claimed(ALICE)

    def test_missing_file(self, tmp_path):
        with pytest.raises(LedgerStateError):
            with locked_ledger(tmp_path / "missing.json"):
                pass

    def test_concurrent_writers_keep_every_claim(self, tmp_path):
        members = [ALICE, BOB, CAROL, DAVE]
        tree = MerkleTreeBuilder.build_tree(members)
        path = save_ledger(WhitelistMintLedger.create(OWNER, tree.root), tmp_path / "state.json")

        def claim(address):
            with locked_ledger(path) as ledger:
                ledger.verify_and_claim(address, tree.proof_for(address))

        threads = [threading.Thread(target=claim, args=(m,)) for m in members]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        restored = load_ledger(path)
        assert sorted(restored.claimed_addresses()) == sorted(members)
        assert restored.token.total_supply == 4 * restored.claim_amount


class TestLoadErrors:
    """Bad state files become LedgerStateError."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(LedgerStateError, match="not found"):
            load_ledger(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("{not json")
        with pytest.raises(LedgerStateError):
            load_ledger(path)

    def test_bad_root(self, tmp_path, ledger):
        path = save_ledger(ledger, tmp_path / "state.json")
        data = json.loads(path.read_text())
        data["root"] = "0x1234"
        path.write_text(json.dumps(data))
        with pytest.raises(LedgerStateError):
            load_ledger(path)

    def test_bad_claimed_address(self, tmp_path, ledger):
        path = save_ledger(ledger, tmp_path / "state.json")
        data = json.loads(path.read_text())
        data["claimed"] = ["not-an-address"]
        path.write_text(json.dumps(data))
        with pytest.raises(LedgerStateError):
            load_ledger(path)

    def test_unknown_field(self, tmp_path, ledger):
        path = save_ledger(ledger, tmp_path / "state.json")
        data = json.loads(path.read_text())
        data["surprise"] = True
        path.write_text(json.dumps(data))
        with pytest.raises(LedgerStateError):
            load_ledger(path)


class TestLedgerState:
    """Tests for the state model."""

    def test_restore_into_initialized_ledger_fails(self, ledger):
        state = LedgerState.from_ledger(ledger)
        with pytest.raises(LedgerStateError):
            ledger._restore(state.owner, state.root, state.claimed)

    def test_to_ledger(self):
        root = MerkleTreeBuilder.build([ALICE])
        ledger = WhitelistMintLedger.create(OWNER, root)
        state = LedgerState.from_ledger(ledger)

        rebuilt = state.to_ledger()
        assert rebuilt.get_root() == root
        assert rebuilt.claimed_addresses() == []
