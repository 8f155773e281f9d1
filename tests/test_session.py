import json
from pathlib import Path
import tempfile
import threading
import unittest

from profile_saves.application import ProfileSession
from profile_saves.domain import ErrorCode, EventType

from tests.helpers import ControlledFileStore, EventRecorder


class SessionTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.store = ControlledFileStore()
        self.session = ProfileSession(file_store=self.store, user_root=self.root)
        self.recorder = EventRecorder()
        self.session.subscribe(self.recorder)

    def tearDown(self) -> None:
        self.store.release.set()
        self.session.shutdown()
        self._tmp.cleanup()

    @property
    def save_dir(self) -> Path:
        return self.root / "saves"


class TestSelection(SessionTestCase):
    def test_nothing_selected_initially(self) -> None:
        self.assertFalse(self.session.is_selected())
        self.assertEqual(self.session.selected_name, "")
        with self.assertLogs("profile_saves.application.session", level="WARNING"):
            self.assertIsNone(self.session.get_current_profile())
        self.assertEqual(self.session.last_error, ErrorCode.NO_PROFILE_SELECTED)

    def test_select_emits_profile_changed(self) -> None:
        self.session.create_profile("alpha")
        self.session.create_profile("beta")

        self.assertTrue(self.session.select_profile(" alpha "))
        self.assertTrue(self.session.select_profile("beta"))

        changes = self.recorder.of_type(EventType.PROFILE_CHANGED)
        self.assertEqual(
            [(e["old_name"], e["new_name"]) for e in changes],
            [("", "alpha"), ("alpha", "beta")],
        )

    def test_select_unknown_keeps_previous_profile(self) -> None:
        self.session.create_profile("alpha", {"level": 3})
        self.session.select_profile("alpha")

        with self.assertLogs("profile_saves.application.session", level="WARNING"):
            self.assertFalse(self.session.select_profile("ghost"))
        self.assertEqual(self.session.selected_name, "alpha")
        self.assertEqual(self.session.get_property("level"), 3)
        self.assertEqual(self.session.last_error, ErrorCode.FILE_NOT_FOUND)

    def test_read_failure_keeps_previous_profile(self) -> None:
        self.session.create_profile("alpha", {"level": 3})
        self.session.create_profile("beta", {"level": 9})
        self.session.select_profile("alpha")

        self.store.fail_reads = True
        with self.assertLogs("profile_saves.application.session", level="WARNING"):
            self.assertFalse(self.session.select_profile("beta"))
        self.assertEqual(self.session.selected_name, "alpha")
        self.assertEqual(self.session.get_current_profile(), {"level": 3})
        self.assertEqual(self.session.last_error, ErrorCode.CANT_OPEN)

    def test_empty_file_loads_empty_tree(self) -> None:
        self.save_dir.mkdir(parents=True)
        (self.save_dir / "blank.save").write_bytes(b"")
        self.assertTrue(self.session.select_profile("blank"))
        self.assertEqual(self.session.get_current_profile(), {})

    def test_corrupt_file_loads_empty_and_is_backed_up(self) -> None:
        self.save_dir.mkdir(parents=True)
        (self.save_dir / "broken.save").write_text("{not valid json", encoding="utf-8")

        with self.assertLogs("profile_saves.application.session", level="WARNING"):
            self.assertTrue(self.session.select_profile("broken"))
        self.assertEqual(self.session.get_current_profile(), {})
        self.assertEqual(self.session.last_error, ErrorCode.DECODE_ERROR)

        backups = sorted(self.save_dir.glob("broken.save.bak.*"))
        self.assertEqual(len(backups), 1)
        self.assertEqual(backups[0].read_text(encoding="utf-8"), "{not valid json")
        self.assertEqual(self.session.list_profiles(), ["broken"])

    def test_create_and_select_round_trip(self) -> None:
        data = {"app": {"name": "X", "tags": ["a", "b"], "ratio": 0.5, "on": True, "none": None}}
        self.assertEqual(self.session.create_profile("alpha", data), ErrorCode.OK)
        self.assertEqual(self.session.create_profile("alpha", {}), ErrorCode.ALREADY_EXISTS)
        self.assertEqual(self.session.last_error, ErrorCode.ALREADY_EXISTS)

        self.session.select_profile("alpha")
        self.assertEqual(self.session.get_current_profile(), data)

    def test_last_error_is_recorded_under_the_session_lock(self) -> None:
        self.session.last_error = None
        worker = threading.Thread(target=self.session.create_profile, args=("bad/name",))

        with self.session._lock:
            worker.start()
            worker.join(0.2)
            self.assertTrue(worker.is_alive())
            self.assertIsNone(self.session.last_error)

        worker.join(5.0)
        self.assertEqual(self.session.last_error, ErrorCode.INVALID_NAME)

    def test_delete_selected_profile_clears_selection(self) -> None:
        self.session.create_profile("alpha", {"level": 1})
        self.session.select_profile("alpha")

        self.assertEqual(self.session.delete_profile("alpha"), ErrorCode.OK)
        self.assertFalse(self.session.is_selected())
        self.assertEqual(self.session.list_profiles(), [])
        last_change = self.recorder.of_type(EventType.PROFILE_CHANGED)[-1]
        self.assertEqual((last_change["old_name"], last_change["new_name"]), ("alpha", ""))
        self.assertEqual(len(self.recorder.of_type(EventType.PROFILE_DELETED)), 1)


class TestProperties(SessionTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.session.create_profile("alpha", {"app": {"name": "X"}})
        self.session.select_profile("alpha")

    def test_set_then_get(self) -> None:
        for key, value in [
            ("volume", 0.8),
            ("app.name", "Y"),
            ("player.stats.hp", 10),
            ("player.inventory", ["sword", {"potion": 2}]),
            ("flags.seen_intro", False),
            ("flags.nothing", None),
        ]:
            self.assertEqual(self.session.set_property(key, value), value)
            self.assertEqual(self.session.get_property(key), value)

    def test_set_creates_intermediate_containers(self) -> None:
        self.session.set_property("world.map.zone", "north")
        self.assertEqual(self.session.get_property("world"), {"map": {"zone": "north"}})
        self.assertEqual(self.session.get_property("world.map"), {"zone": "north"})

    def test_set_emits_old_and_new_value(self) -> None:
        self.session.set_property("app.version", 2)
        self.session.set_property("app.version", 3)
        changes = self.recorder.of_type(EventType.SAVES_CHANGED)
        self.assertEqual(
            [(e["key"], e["old_value"], e["new_value"]) for e in changes],
            [("app.version", None, 2), ("app.version", 2, 3)],
        )

    def test_key_whitespace_is_normalized(self) -> None:
        self.session.set_property(" app . display name ", "Hero")
        self.assertEqual(self.session.get_property("app.display_name"), "Hero")

    def test_missing_path_reports_and_returns_none(self) -> None:
        with self.assertLogs("profile_saves.application.session", level="WARNING"):
            self.assertIsNone(self.session.get_property("app.missing"))
        self.assertEqual(self.session.last_error, ErrorCode.PATH_NOT_FOUND)

    def test_default_is_returned_silently(self) -> None:
        self.session.last_error = None
        self.assertEqual(self.session.get_property_or_default("app.missing", 7), 7)
        self.assertEqual(self.session.get_property_or_default("app.name", 7), "X")
        self.assertIsNone(self.session.last_error)

    def test_returned_containers_are_copies(self) -> None:
        app = self.session.get_property("app")
        app["name"] = "mutated"
        self.assertEqual(self.session.get_property("app.name"), "X")

        stored = {"hp": 1}
        self.session.set_property("stats", stored)
        stored["hp"] = 100
        self.assertEqual(self.session.get_property("stats.hp"), 1)


class TestUnselected(SessionTestCase):
    def test_mutations_require_selection(self) -> None:
        with self.assertLogs("profile_saves.application.session", level="WARNING"):
            self.assertIsNone(self.session.set_property("a", 1))
            self.assertIsNone(self.session.get_property("a"))
        self.assertEqual(self.session.last_error, ErrorCode.NO_PROFILE_SELECTED)
        self.assertEqual(self.recorder.of_type(EventType.SAVES_CHANGED), [])

    def test_default_when_unselected(self) -> None:
        self.assertEqual(self.session.get_property_or_default("a", "fallback"), "fallback")

    def test_save_requires_selection(self) -> None:
        with self.assertLogs("profile_saves.application.session", level="WARNING"):
            self.assertEqual(self.session.save(), ErrorCode.CANT_RESOLVE)
        self.assertEqual(self.recorder.events, [])
        self.assertFalse(self.session.is_saving)


class TestScenario(SessionTestCase):
    def test_create_select_edit_save(self) -> None:
        self.assertFalse(self.save_dir.exists())
        self.assertEqual(self.session.catalog.list_save_files(), [])
        self.assertTrue(self.save_dir.is_dir())

        self.assertEqual(self.session.create_profile("alpha", {"app": {"name": "X"}}), ErrorCode.OK)
        path = self.save_dir / "alpha.save"
        self.assertEqual(json.loads(path.read_text(encoding="utf-8")), {"app": {"name": "X"}})

        self.assertTrue(self.session.select_profile("alpha"))
        self.assertEqual(self.session.get_property("app.name"), "X")

        self.session.set_property("app.version", 2)
        change = self.recorder.of_type(EventType.SAVES_CHANGED)[-1]
        self.assertEqual((change["key"], change["old_value"], change["new_value"]), ("app.version", None, 2))
        self.assertEqual(self.session.get_property("app.version"), 2)

        self.assertEqual(self.session.save(), ErrorCode.OK)
        self.assertTrue(self.session.wait_for_saves(5.0))

        saved = self.recorder.of_type(EventType.PROFILE_SAVED)
        self.assertEqual(saved[-1]["name"], "alpha")
        self.assertEqual(
            json.loads(path.read_text(encoding="utf-8")),
            {"app": {"name": "X", "version": 2}},
        )

        types = [e["type"] for e in self.session.poll_events()]
        self.assertEqual(
            types,
            [
                EventType.PROFILE_CREATED,
                EventType.PROFILE_SAVED,
                EventType.PROFILE_CHANGED,
                EventType.SAVES_CHANGED,
                EventType.PROFILE_SAVE_START,
                EventType.PROFILE_SAVED,
            ],
        )


if __name__ == "__main__":
    unittest.main()
