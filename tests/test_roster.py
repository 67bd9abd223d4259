import json

from roster import RosterSnapshot, load_roster, parse_roster

ROSTER = {
    "contractors": [
        {
            "id": "c2",
            "name": "Ben",
            "services": ["Videographer"],
            "availability": {"MON": {"available": True, "start_time": "08:00", "end_time": "18:00"}},
        },
        {
            "id": "c1",
            "name": "Ava",
            "services": ["Photographer"],
            "availability": {"TUE": {"available": True, "start_time": "06:00", "end_time": "20:00"}},
        },
    ],
    "bookings": [
        {
            "contractor_id": "c1",
            "start_time": "2024-03-05T06:00:00+11:00",
            "end_time": "2024-03-05T08:00:00+11:00",
        }
    ],
}


class TestRoster:
    def setup_method(self, method):
        self.roster = json.loads(json.dumps(ROSTER))

    def test_parse_orders_contractors_by_id(self):
        snapshot = parse_roster(self.roster)
        assert [c.id for c in snapshot.contractors] == ["c1", "c2"]
        assert snapshot.contractors[0].availability["TUE"].available is True
        assert snapshot.bookings[0].contractor_id == "c1"
        assert snapshot.bookings[0].start_time.isoformat() == "2024-03-05T06:00:00+11:00"

    def test_snapshot_is_frozen(self):
        snapshot = parse_roster(self.roster)
        assert isinstance(snapshot.contractors, tuple)
        assert isinstance(snapshot.bookings, tuple)

    def test_load_from_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("ROSTER_JSON", raising=False)
        path = tmp_path / "roster.json"
        path.write_text(json.dumps(self.roster), encoding="utf-8")

        snapshot = load_roster(str(path))
        assert len(snapshot.contractors) == 2
        assert len(snapshot.bookings) == 1

    def test_env_var_takes_priority(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ROSTER_JSON", json.dumps({"contractors": [self.roster["contractors"][0]]}))
        snapshot = load_roster(str(tmp_path / "missing.json"))
        assert [c.id for c in snapshot.contractors] == ["c2"]
        assert snapshot.bookings == ()

    def test_missing_file_gives_empty_roster(self, tmp_path, monkeypatch):
        monkeypatch.delenv("ROSTER_JSON", raising=False)
        assert load_roster(str(tmp_path / "missing.json")) == RosterSnapshot()
