import unittest

from gdrivefs.controller import InMemoryDriveController
from gdrivefs.errors import InvalidArgumentError, NotFoundError
from gdrivefs.util.mime import FOLDER_MIME


class TestInMemoryDriveController(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryDriveController(page_size=2)

    def test_create_and_read_back(self) -> None:
        f = self.store.create("a.txt", "text/plain", "root", b"abc")
        self.assertEqual(f.size, 3)
        self.assertEqual(f.parents, ["root"])
        self.assertEqual(self.store.get_bytes(f.id), b"abc")

    def test_returned_objects_are_snapshots(self) -> None:
        f = self.store.create("a.txt", "text/plain", "root", b"")
        f.name = "changed"
        f.parents.append("elsewhere")
        again = self.store.get(f.id)
        self.assertEqual(again.name, "a.txt")
        self.assertEqual(again.parents, ["root"])

    def test_duplicate_names_listed_in_creation_order(self) -> None:
        first = self.store.create_folder("dup", "root")
        second = self.store.create_folder("dup", "root")
        found = self.store.find_children("root", name="dup", folders_only=True)
        self.assertEqual([f.id for f in found], [first.id, second.id])

    def test_paging(self) -> None:
        for i in range(5):
            self.store.create(f"f{i}", "text/plain", "root", b"")
        names = []
        token = None
        pages = 0
        while True:
            items, token = self.store.list_children_page("root", token)
            names.extend(i.name for i in items)
            pages += 1
            if not token:
                break
        self.assertEqual(names, ["f0", "f1", "f2", "f3", "f4"])
        self.assertEqual(pages, 3)

    def test_trashed_children_are_hidden(self) -> None:
        f = self.store.create("gone", "text/plain", "root", b"")
        self.store.trash(f.id)
        self.assertEqual(self.store.find_children("root", name="gone"), [])
        self.assertEqual(self.store.list_children_page("root")[0], [])

    def test_delete_cascades_and_missing_raises(self) -> None:
        d = self.store.create_folder("d", "root")
        f = self.store.create("x", "text/plain", d.id, b"")
        self.store.delete(d.id)
        with self.assertRaises(NotFoundError):
            self.store.get(f.id)
        with self.assertRaises(NotFoundError):
            self.store.delete(d.id)

    def test_update_replaces_parents(self) -> None:
        a = self.store.create_folder("a", "root")
        b = self.store.create_folder("b", "root")
        f = self.store.create("x", "text/plain", a.id, b"")
        moved = self.store.update(f.id, name="y", add_parents=[b.id], remove_parents=[a.id])
        self.assertEqual(moved.id, f.id)
        self.assertEqual(moved.name, "y")
        self.assertEqual(moved.parents, [b.id])

    def test_folder_rules(self) -> None:
        d = self.store.create_folder("d", "root")
        f = self.store.create("x", "text/plain", "root", b"")
        self.assertEqual(d.mime_type, FOLDER_MIME)
        with self.assertRaises(InvalidArgumentError):
            self.store.get_bytes(d.id)
        with self.assertRaises(InvalidArgumentError):
            self.store.create("y", "text/plain", f.id, b"")
        with self.assertRaises(InvalidArgumentError):
            self.store.copy(d.id, new_name="d2")


if __name__ == "__main__":
    unittest.main()
