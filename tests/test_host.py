from __future__ import annotations

import unittest

from buffersticks.host import BufferList
from buffersticks.items import LabeledItem


def _item(buffer_id: int) -> LabeledItem:
    return LabeledItem(id=buffer_id, raw_name="", label="?")


class BufferListTests(unittest.TestCase):
    def test_first_path_is_current_by_default(self) -> None:
        buffers = BufferList(["src/a.py", "docs/b.md"])

        items = buffers.list_items()

        self.assertEqual([item.raw_name for item in items], ["src/a.py", "docs/b.md"])
        self.assertEqual([item.is_current for item in items], [True, False])
        self.assertEqual([item.kind for item in items], ["py", "md"])
        self.assertEqual(buffers.current_path, "src/a.py")

    def test_explicit_current_path(self) -> None:
        buffers = BufferList(["a.py", "b.py"], current="b.py")

        self.assertEqual(buffers.current_path, "b.py")

    def test_open_moves_previous_current_to_alternate(self) -> None:
        buffers = BufferList(["a.py", "b.py", "c.py"])

        buffers.open_item(_item(3))

        items = buffers.list_items()
        self.assertEqual(buffers.current_path, "c.py")
        self.assertTrue(items[0].is_alternate)
        self.assertEqual(buffers.opened, [3])

    def test_reopening_current_keeps_alternate(self) -> None:
        buffers = BufferList(["a.py", "b.py"])
        buffers.open_item(_item(2))

        buffers.open_item(_item(2))

        self.assertEqual(buffers.alternate_id, 1)
        self.assertEqual(buffers.opened, [2, 2])

    def test_closing_current_falls_back_to_alternate(self) -> None:
        buffers = BufferList(["a.py", "b.py", "c.py"])
        buffers.open_item(_item(2))

        buffers.close_item(_item(2))

        self.assertEqual(buffers.paths, ["a.py", "c.py"])
        self.assertEqual(buffers.current_path, "a.py")
        self.assertIsNone(buffers.alternate_id)

    def test_closing_current_without_alternate_uses_first_buffer(self) -> None:
        buffers = BufferList(["a.py", "b.py"])

        buffers.close_item(_item(1))

        self.assertEqual(buffers.current_path, "b.py")

    def test_closing_last_buffer_leaves_no_current(self) -> None:
        buffers = BufferList(["a.py"])

        buffers.close_item(_item(1))

        self.assertIsNone(buffers.current_path)
        self.assertEqual(buffers.list_items(), [])

    def test_mark_modified(self) -> None:
        buffers = BufferList(["a.py", "b.py"])

        buffers.mark_modified("b.py")
        buffers.mark_modified("missing.py")

        self.assertEqual([item.is_modified for item in buffers.list_items()], [False, True])

    def test_unknown_buffer_raises_key_error(self) -> None:
        with self.assertRaises(KeyError):
            BufferList(["a.py"]).close_item(_item(7))


if __name__ == "__main__":
    unittest.main()
