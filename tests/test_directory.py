import unittest

from gopherstream.directory import DirectoryCursor, make_entry, parse_listing
from gopherstream.errors import MalformedListingError
from gopherstream.url import normalize_selector


class MakeEntryTests(unittest.TestCase):
    def test_type_and_selector_form_the_path(self):
        self.assertEqual(make_entry("0", "/about.txt"), "/0/about.txt")
        self.assertEqual(make_entry("h", "/2011/post"), "/h/2011/post")

    def test_selector_already_carrying_its_type_is_kept(self):
        self.assertEqual(make_entry("1", "/1/article1"), "/1/article1")

    def test_relative_selector_gets_a_separator(self):
        self.assertEqual(make_entry("0", "notes.txt"), "/0/notes.txt")
        self.assertEqual(make_entry("1", ""), "/1/")

    def test_entry_normalizes_back_to_a_request(self):
        self.assertEqual(normalize_selector(make_entry("0", "notes.txt")), "notes.txt")
        self.assertEqual(normalize_selector(make_entry("1", "")), "")


class ParseListingTests(unittest.TestCase):
    def test_two_article_menu(self):
        lines = [
            b"1Article One\t/1/article1\texample.com\t70\r\n",
            b"1Article Two\t/1/article2\texample.com\t70\r\n",
        ]
        self.assertEqual(parse_listing(lines), ("/1/article1", "/1/article2"))

    def test_bare_lf_and_blank_lines_are_tolerated(self):
        lines = ["0About\t/about.txt\n", "\n", "   \r\n", "1Docs\t/docs\thost\t70\n"]
        self.assertEqual(parse_listing(lines), ("/0/about.txt", "/1/docs"))

    def test_duplicates_are_preserved(self):
        line = "0Same\t/same.txt\thost\t70\r\n"
        self.assertEqual(parse_listing([line, line]), ("/0/same.txt", "/0/same.txt"))

    def test_line_without_tab_fails_the_listing(self):
        lines = ["0Good\t/good.txt\n", "garbage line\n", "0Later\t/later.txt\n"]
        with self.assertRaises(MalformedListingError):
            parse_listing(lines)

    def test_dot_terminator_ends_the_listing(self):
        lines = ["0One\t/one\n", ".\r\n", "not parsed\n"]
        self.assertEqual(parse_listing(lines), ("/0/one",))

    def test_empty_response(self):
        self.assertEqual(parse_listing([]), ())

    def test_undecodable_bytes_are_replaced(self):
        listing = parse_listing([b"0Caf\xe9\t/caf\xe9\n"])
        self.assertEqual(listing, ("/0/caf�",))


class DirectoryCursorTests(unittest.TestCase):
    def test_read_advance_and_rewind(self):
        cursor = DirectoryCursor(("/0/a", "/0/b"))
        self.assertEqual(cursor.read_next(), "/0/a")
        self.assertEqual(cursor.read_next(), "/0/b")
        self.assertIsNone(cursor.read_next())
        self.assertIsNone(cursor.read_next())
        cursor.rewind()
        self.assertEqual(cursor.read_next(), "/0/a")

    def test_empty_listing(self):
        cursor = DirectoryCursor(())
        cursor.rewind()
        self.assertIsNone(cursor.read_next())

    def test_invalidated_cursor_reads_nothing(self):
        cursor = DirectoryCursor(("/0/a",))
        cursor.invalidate()
        self.assertFalse(cursor.valid)
        self.assertIsNone(cursor.read_next())


if __name__ == "__main__":
    unittest.main()
