import unittest

import hmux.accept
import hmux.mime

C = hmux.accept.AcceptClause
T = hmux.mime.Type

class TestAcceptClause(unittest.TestCase):
    def test_parse_default_quality(self):
        self.assertEqual(C.parse("text/html"), C("text", "html", q=1.0))

    def test_parse_quality(self):
        clause = C.parse(" application/xml ; q=0.5")
        self.assertEqual(clause.type, "application")
        self.assertEqual(clause.subtype, "xml")
        self.assertEqual(clause.q, 0.5)

    def test_parse_drops_other_parameters(self):
        self.assertEqual(C.parse("text/html;level=1;q=0.7"),
                         C("text", "html", q=0.7))

    def test_parse_rejects_bad_quality(self):
        for s in ["text/html;q=abc", "text/html;q=1.5", "text/html;q=-0.1",
                  "text/html;q=nan"]:
            with self.subTest(s=s):
                self.assertRaises(ValueError, C.parse, s)

    def test_parse_rejects_bad_media_range(self):
        for s in ["text", "text/", "*", "a/b/c", "text/html;q"]:
            with self.subTest(s=s):
                self.assertRaises(ValueError, C.parse, s)

    def test_matches_exact(self):
        clause = C("application", "json")
        self.assertTrue(clause.matches(T("application", "json")))
        self.assertFalse(clause.matches(T("application", "xml")))

    def test_matches_subtype_wildcard(self):
        clause = C("image", "*")
        self.assertTrue(clause.matches(T("image", "png")))
        self.assertTrue(clause.matches(T("image", "*")))
        self.assertFalse(clause.matches(T("text", "png")))

    def test_matches_full_wildcard(self):
        clause = C("*", "*")
        self.assertTrue(clause.matches(T("text", "plain")))
        self.assertTrue(clause.matches(T("*", "*")))

    def test_concrete_clause_does_not_match_wildcard_route(self):
        self.assertFalse(C("image", "png").matches(T("image", "*")))
        self.assertFalse(C("text", "html").matches(T("*", "*")))

class TestAcceptClauseList(unittest.TestCase):
    def test_parsing(self):
        header = """text/plain; q=0.5, text/html,
                    text/x-dvi; q=0.8, text/x-c"""
        l = hmux.accept.AcceptClauseList.from_header(header)
        self.assertSequenceEqual(
            list(l),
            [
                C("text", "plain", q=0.5),
                C("text", "html", q=1.0),
                C("text", "x-dvi", q=0.8),
                C("text", "x-c", q=1.0),
            ]
        )

    def test_empty_headers(self):
        for header in [None, "", "   ", ",,"]:
            with self.subTest(header=header):
                self.assertEqual(
                    len(hmux.accept.AcceptClauseList.from_header(header)),
                    0)

    def test_malformed_segments_are_dropped(self):
        with self.assertLogs("hmux.accept", level="WARNING") as ctx:
            l = hmux.accept.AcceptClauseList.from_header(
                "garbage, text/html;q=zz, application/json;q=0.3")
        self.assertSequenceEqual(list(l), [C("application", "json", q=0.3)])
        self.assertEqual(len(ctx.output), 2)

    def test_only_malformed_segments(self):
        with self.assertLogs("hmux.accept", level="WARNING"):
            l = hmux.accept.AcceptClauseList.from_header("foo, bar/baz/qux")
        self.assertEqual(len(l), 0)
        self.assertIsNone(l.best_match([T("text", "html")]))

    def test_sorted_by_quality(self):
        l = hmux.accept.AcceptClauseList.from_header(
            "application/xml;q=0.5,application/json;q=0.8")
        self.assertSequenceEqual(
            l.get_sorted_by_preference(),
            [
                C("application", "json", q=0.8),
                C("application", "xml", q=0.5),
            ])

    def test_sorted_by_specificity(self):
        l = hmux.accept.AcceptClauseList.from_header(
            "*/*, text/*, */html, text/html")
        self.assertSequenceEqual(
            l.get_sorted_by_preference(),
            [
                C("text", "html"),
                C("text", "*"),
                C("*", "html"),
                C("*", "*"),
            ])

    def test_sorting_is_stable(self):
        l = hmux.accept.AcceptClauseList.from_header(
            "text/plain;q=0.5, image/png;q=0.5, application/json;q=0.5")
        self.assertSequenceEqual(
            [clause.media_type.essence
             for clause in l.get_sorted_by_preference()],
            ["text/plain", "image/png", "application/json"])

    def test_best_match(self):
        l = hmux.accept.AcceptClauseList.from_header(
            "image/png;q=0.9, text/plain;q=1.0")
        self.assertEqual(
            l.best_match([T("image", "png"), T("text", "plain")]),
            T("text", "plain"))

    def test_best_match_wildcard_subtype(self):
        l = hmux.accept.AcceptClauseList.from_header(
            "image/*;q=1.0, text/html;q=0.9")
        self.assertEqual(
            l.best_match([T("text", "html"), T("image", "gif")]),
            T("image", "gif"))

    def test_best_match_none(self):
        l = hmux.accept.AcceptClauseList.from_header("text/html")
        self.assertIsNone(l.best_match([T("application", "json")]))
