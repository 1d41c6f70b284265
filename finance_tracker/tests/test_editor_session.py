import unittest

from ..models.editor import EditorMode, EditorSession


class TestEditorSession(unittest.TestCase):
    def test_closed_by_default(self):
        session = EditorSession.closed()
        self.assertEqual(session.mode, EditorMode.CLOSED)
        self.assertFalse(session.is_open)
        self.assertIsNone(session.row_id)
        self.assertEqual(dict(session.values), {})

    def test_creating_copies_defaults(self):
        defaults = {"name": "", "type": "expense"}
        session = EditorSession.creating(defaults)
        defaults["type"] = "income"

        self.assertTrue(session.is_open)
        self.assertFalse(session.is_editing)
        self.assertEqual(session.get("type"), "expense")

    def test_editing_requires_row_id(self):
        with self.assertRaises(ValueError):
            EditorSession.editing(None, {})

        session = EditorSession.editing(7, {"name": "Rent"})
        self.assertTrue(session.is_editing)
        self.assertEqual(session.row_id, 7)

    def test_with_value_returns_new_session(self):
        session = EditorSession.creating({"name": ""})
        changed = session.with_value("name", "Fuel")

        self.assertEqual(session.get("name"), "")
        self.assertEqual(changed.get("name"), "Fuel")
        self.assertEqual(changed.mode, EditorMode.CREATING)

    def test_with_values_keeps_row_id(self):
        session = EditorSession.editing(3, {"name": "Rent"}).with_values({"name": "Rent 2", "type": "income"})
        self.assertEqual(session.row_id, 3)
        self.assertEqual(session.get("type"), "income")

    def test_values_are_read_only(self):
        session = EditorSession.creating({"name": ""})
        with self.assertRaises(TypeError):
            session.values["name"] = "x"

    def test_closed_session_cannot_change(self):
        with self.assertRaises(ValueError):
            EditorSession.closed().with_value("name", "x")

    def test_get_default(self):
        self.assertEqual(EditorSession.creating().get("missing", "n/a"), "n/a")


if __name__ == "__main__":
    unittest.main()
