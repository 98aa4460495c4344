"""
Whitelist and Snapshot IO Unit Tests
Tests for airdrop/merkle/io.py
"""
import json

import pytest

from airdrop.merkle import (
    MerkleTreeBuilder,
    WhitelistIOError,
    is_snapshot_file,
    load_snapshot,
    load_whitelist,
    save_snapshot,
)
from airdrop.schemas.whitelist import HASH_ALGORITHM, WhitelistSnapshot
from fixtures.accounts import ALICE, BOB, CAROL


class TestLoadWhitelist:
    """Tests for load_whitelist()."""

    def test_json_list(self, tmp_path):
        path = tmp_path / "wl.json"
        path.write_text(json.dumps([ALICE, BOB]))
        assert load_whitelist(path) == [ALICE, BOB]

    def test_json_rows(self, tmp_path):
        path = tmp_path / "wl.json"
        path.write_text(json.dumps([[ALICE], [BOB]]))
        assert load_whitelist(path) == [ALICE, BOB]

    def test_json_object(self, tmp_path):
        path = tmp_path / "wl.json"
        path.write_text(json.dumps({"addresses": [CAROL]}))
        assert load_whitelist(path) == [CAROL]

    def test_csv(self, tmp_path):
        path = tmp_path / "wl.csv"
        path.write_text(f"address,note\n{ALICE},first\n\n# comment\n\"{BOB}\",second\n")
        assert load_whitelist(path) == [ALICE, BOB]

    def test_text(self, tmp_path):
        path = tmp_path / "wl.txt"
        path.write_text(f"{ALICE}\n  {BOB}  \n")
        assert load_whitelist(path) == [ALICE, BOB]

    def test_entries_are_raw(self, tmp_path):
        path = tmp_path / "wl.txt"
        path.write_text(f"{ALICE.lower()}\n{ALICE}\n")
        assert load_whitelist(path) == [ALICE.lower(), ALICE]

    def test_missing_file(self, tmp_path):
        with pytest.raises(WhitelistIOError, match="not found"):
            load_whitelist(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "wl.json"
        path.write_text("[")
        with pytest.raises(WhitelistIOError, match="invalid JSON"):
            load_whitelist(path)

    @pytest.mark.parametrize("payload", [{"nope": 1}, [1, 2], [[ALICE, BOB]]])
    def test_wrong_shape(self, tmp_path, payload):
        path = tmp_path / "wl.json"
        path.write_text(json.dumps(payload))
        with pytest.raises(WhitelistIOError):
            load_whitelist(path)


class TestSnapshotFiles:
    """Tests for save_snapshot/load_snapshot."""

    def test_round_trip(self, tmp_path):
        snapshot = MerkleTreeBuilder.build_tree([ALICE, BOB, CAROL]).to_snapshot()
        path = save_snapshot(snapshot, tmp_path / "out" / "snapshot.json")

        loaded = load_snapshot(path)
        assert loaded == snapshot
        assert loaded.hash_algorithm == HASH_ALGORITHM
        assert is_snapshot_file(path)

    def test_whitelist_is_not_snapshot(self, tmp_path):
        path = tmp_path / "wl.json"
        path.write_text(json.dumps([ALICE]))
        assert not is_snapshot_file(path)
        assert not is_snapshot_file(tmp_path / "missing.json")

    def test_invalid_snapshot(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps({"root": "0x12", "proofs": {}}))
        with pytest.raises(WhitelistIOError, match="invalid snapshot"):
            load_snapshot(path)

    def test_missing_snapshot(self, tmp_path):
        with pytest.raises(WhitelistIOError):
            load_snapshot(tmp_path / "missing.json")

    def test_root_is_lowercased(self):
        snapshot = WhitelistSnapshot(
            root="0x" + "AB" * 32,
            leaf_count=1,
            depth=0,
            addresses=[ALICE],
            proofs={ALICE: []},
        )
        assert snapshot.root == "0x" + "ab" * 32
