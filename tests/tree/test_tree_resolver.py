import unittest

from gdrivefs.controller import InMemoryDriveController
from gdrivefs.errors import PathNotFoundError
from gdrivefs.tree import PathResolver


def _count(store: InMemoryDriveController, name: str) -> int:
    return sum(1 for call in store.calls if call[0] == name)


class TestPathResolver(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryDriveController()
        self.resolver = PathResolver(self.store, "root")

    def test_root_resolves_without_remote_calls(self) -> None:
        for raw in ("", "/", "./", "a/.."):
            obj = self.resolver.resolve(raw)
            self.assertEqual(obj.id, "root")
            self.assertTrue(obj.is_folder)
        self.assertEqual(self.store.calls, [])

    def test_missing_path_without_create(self) -> None:
        self.assertIsNone(self.resolver.resolve("a/b/c"))
        self.assertEqual(_count(self.store, "create"), 0)
        # The walk stops at the first missing segment.
        self.assertEqual(_count(self.store, "find_children"), 1)

    def test_create_missing_builds_intermediate_folders_only(self) -> None:
        leaf = self.resolver.resolve("a/b/c", create_missing=True)

        self.assertIsNone(leaf)
        creates = [c for c in self.store.calls if c[0] == "create"]
        self.assertEqual([c[1] for c in creates], ["a", "b"])

        b = self.resolver.resolve_directory("a/b")
        self.assertEqual(b.name, "b")
        a = self.resolver.resolve("a")
        self.assertEqual(b.parents, [a.id])

    def test_resolve_finds_file_under_folders(self) -> None:
        docs = self.store.create_folder("docs", "root")
        f = self.store.create("x.txt", "text/plain", docs.id, b"1")

        self.assertEqual(self.resolver.resolve("docs/x.txt").id, f.id)
        self.assertEqual(self.resolver.resolve_parent("docs/x.txt"), docs.id)

    def test_results_are_cached_by_normalized_path(self) -> None:
        docs = self.store.create_folder("docs", "root")
        self.store.create("x.txt", "text/plain", docs.id, b"1")

        self.resolver.resolve("docs/x.txt")
        lookups = _count(self.store, "find_children")
        self.resolver.resolve("/docs//./x.txt")
        self.resolver.resolve("docs\\x.txt")

        self.assertEqual(_count(self.store, "find_children"), lookups)

    def test_absence_is_cached(self) -> None:
        self.assertIsNone(self.resolver.resolve("missing.txt"))
        self.assertIsNone(self.resolver.resolve("missing.txt"))
        self.assertEqual(_count(self.store, "find_children"), 1)

    def test_invalidate_forces_lookup(self) -> None:
        self.assertIsNone(self.resolver.resolve("late.txt"))
        created = self.store.create("late.txt", "text/plain", "root", b"")
        self.assertIsNone(self.resolver.resolve("late.txt"))

        self.resolver.invalidate("late.txt")
        self.assertEqual(self.resolver.resolve("late.txt").id, created.id)

    def test_intermediate_file_does_not_resolve(self) -> None:
        self.store.create("f.txt", "text/plain", "root", b"")
        self.assertIsNone(self.resolver.resolve("f.txt/x"))

    def test_folder_preferred_over_cached_file_for_intermediate(self) -> None:
        self.store.create("a", "text/plain", "root", b"")
        folder = self.store.create_folder("a", "root")
        child = self.store.create("x", "text/plain", folder.id, b"")

        self.assertTrue(self.resolver.resolve("a").is_file)
        self.assertEqual(self.resolver.resolve("a/x").id, child.id)
        # The cached answer for "a" itself is unchanged.
        self.assertTrue(self.resolver.resolve("a").is_file)

    def test_folder_lookup_does_not_shadow_file_with_same_name(self) -> None:
        file_x = self.store.create("x", "text/plain", "root", b"")
        self.store.create_folder("x", "root")

        # Resolving below "x" looks up the folder first.
        self.assertIsNone(self.resolver.resolve("x/anything"))
        self.assertEqual(self.resolver.resolve("x").id, file_x.id)

        fresh = PathResolver(self.store, "root")
        self.assertEqual(fresh.resolve("x").id, file_x.id)

    def test_created_folder_does_not_replace_cached_file(self) -> None:
        file_a = self.store.create("a", "text/plain", "root", b"")
        self.assertEqual(self.resolver.resolve("a").id, file_a.id)

        folder = self.resolver.resolve_directory("a", create_missing=True)

        self.assertTrue(folder.is_folder)
        self.assertEqual(self.resolver.resolve("a").id, file_a.id)
        self.assertEqual(self.resolver.resolve_directory("a").id, folder.id)

    def test_created_folder_replaces_cached_absence(self) -> None:
        self.assertIsNone(self.resolver.resolve("new"))
        folder = self.resolver.resolve_directory("new", create_missing=True)

        lookups = _count(self.store, "find_children")
        self.assertEqual(self.resolver.resolve("new").id, folder.id)
        self.assertEqual(_count(self.store, "find_children"), lookups)

    def test_duplicate_names_first_match_wins(self) -> None:
        first = self.store.create_folder("dup", "root")
        self.store.create_folder("dup", "root")

        with self.assertLogs("gdrivefs.tree.resolver", level="WARNING") as logs:
            obj = self.resolver.resolve("dup")

        self.assertEqual(obj.id, first.id)
        self.assertIn("2 items named 'dup'", logs.output[0])

    def test_resolve_parent_without_create_raises(self) -> None:
        with self.assertRaises(PathNotFoundError) as ctx:
            self.resolver.resolve_parent("x/y/z.txt", create_missing=False)
        self.assertEqual(ctx.exception.path, "x/y")
        self.assertEqual(_count(self.store, "create"), 0)

    def test_resolve_parent_of_top_level_is_root(self) -> None:
        self.assertEqual(self.resolver.resolve_parent("top.txt"), "root")
        self.assertEqual(self.store.calls, [])

    def test_custom_root(self) -> None:
        base = self.store.create_folder("base", "root")
        resolver = PathResolver(self.store, base.id)
        resolver.resolve("inner/leaf", create_missing=True)

        inner = self.store.find_children(base.id, name="inner")
        self.assertEqual(len(inner), 1)
        self.assertEqual(self.store.find_children("root", name="inner"), [])


if __name__ == "__main__":
    unittest.main()
