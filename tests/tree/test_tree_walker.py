import unittest

from gdrivefs.controller import InMemoryDriveController
from gdrivefs.errors import NetworkError
from gdrivefs.models import DirectoryAttributes, FileAttributes
from gdrivefs.tree import PathResolver, TreeWalker


class TestTreeWalker(unittest.TestCase):
    def setUp(self) -> None:
        # root/ {f1, dir1/{f2, sub/{f4}, f3}}
        self.store = InMemoryDriveController(page_size=2)
        self.store.create("f1", "text/plain", "root", b"1")
        dir1 = self.store.create_folder("dir1", "root")
        self.store.create("f2", "text/plain", dir1.id, b"22")
        sub = self.store.create_folder("sub", dir1.id)
        self.store.create("f3", "text/plain", dir1.id, b"333")
        self.store.create("f4", "text/plain", sub.id, b"4444")

        self.resolver = PathResolver(self.store, "root")
        self.walker = TreeWalker(self.store, self.resolver)

    def test_shallow_listing(self) -> None:
        paths = [p for p, _ in self.walker.walk("/")]
        self.assertEqual(paths, ["f1", "dir1"])

    def test_deep_listing_is_depth_first(self) -> None:
        paths = [p for p, _ in self.walker.walk("", deep=True)]
        self.assertEqual(
            paths,
            ["f1", "dir1", "dir1/f2", "dir1/sub", "dir1/sub/f4", "dir1/f3"],
        )

    def test_listing_a_subdirectory_prefixes_paths(self) -> None:
        paths = [p for p, _ in self.walker.walk("/dir1/", deep=True)]
        self.assertEqual(paths, ["dir1/f2", "dir1/sub", "dir1/sub/f4", "dir1/f3"])

    def test_missing_path_and_file_yield_nothing(self) -> None:
        self.assertEqual(list(self.walker.walk("nope", deep=True)), [])
        self.assertEqual(list(self.walker.walk("f1")), [])

    def test_attributes(self) -> None:
        items = {a.path: a for a in self.walker.list_contents("dir1", visibility="public")}
        self.assertIsInstance(items["dir1/sub"], DirectoryAttributes)
        f2 = items["dir1/f2"]
        self.assertIsInstance(f2, FileAttributes)
        self.assertEqual(f2.file_size, 2)
        self.assertEqual(f2.visibility, "public")
        self.assertIsNotNone(f2.last_modified)
        self.assertIn("id", f2.extra_metadata)

    def test_trashed_children_are_skipped(self) -> None:
        trashed = self.store.find_children("root", name="f1")[0]
        self.store.trash(trashed.id)
        self.assertEqual([p for p, _ in self.walker.walk("")], ["dir1"])

    def test_listing_warms_the_cache(self) -> None:
        list(self.walker.walk("", deep=True))
        before = len(self.store.calls)
        self.assertEqual(self.resolver.resolve("dir1/sub/f4").name, "f4")
        self.assertEqual(len(self.store.calls), before)

    def test_name_with_slash_is_listed_but_not_cached(self) -> None:
        self.store.create("a/b", "text/plain", "root", b"")

        with self.assertLogs("gdrivefs.tree.walker", level="WARNING") as logs:
            paths = [p for p, _ in self.walker.walk("")]

        self.assertEqual(paths, ["f1", "dir1", "a/b"])
        self.assertIn("'a/b'", logs.output[0])
        self.assertNotIn("a/b", self.resolver.cache)

    def test_failure_after_partial_results(self) -> None:
        original = self.store.list_children_page

        def flaky(parent_id, page_token=None):
            if page_token:
                raise NetworkError("connection reset")
            return original(parent_id, page_token)

        self.store.list_children_page = flaky  # type: ignore[assignment]

        seen = []
        with self.assertRaises(NetworkError):
            for path, _ in self.walker.walk("dir1"):
                seen.append(path)
        self.assertEqual(seen, ["dir1/f2", "dir1/sub"])

    def test_each_walk_restarts(self) -> None:
        first = [p for p, _ in self.walker.walk("", deep=True)]
        second = [p for p, _ in self.walker.walk("", deep=True)]
        self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
