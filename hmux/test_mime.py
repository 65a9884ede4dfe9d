import unittest

import hmux.mime

class TestType(unittest.TestCase):
    def test_stringification(self):
        mt = hmux.mime.Type("text", "plain")
        self.assertEqual(str(mt), "text/plain")

        mt = hmux.mime.Type("text", "plain", parameters={"charset": "utf-8"})
        self.assertEqual(str(mt), "text/plain; charset=utf-8")

    def test_normalization(self):
        mt = hmux.mime.Type(" Application", "JSON ")
        self.assertEqual(mt.type, "application")
        self.assertEqual(mt.subtype, "json")
        self.assertEqual(mt, hmux.mime.Type("application", "json"))

    def test_reject_empty_components(self):
        self.assertRaises(ValueError, hmux.mime.Type, "", "plain")
        self.assertRaises(ValueError, hmux.mime.Type, "text", "  ")

    def test_wildcards(self):
        mt = hmux.mime.Type("*", "*")
        self.assertTrue(mt.is_wildcard_type)
        self.assertTrue(mt.is_wildcard_subtype)
        self.assertEqual(mt.wildcards, 2)
        self.assertEqual(mt, hmux.mime.Type.any)

        mt = hmux.mime.Type("image", "*")
        self.assertFalse(mt.is_wildcard_type)
        self.assertTrue(mt.is_wildcard_subtype)
        self.assertEqual(mt.wildcards, 1)

    def test_hashable(self):
        d = {hmux.mime.Type("text", "html"): 1}
        self.assertEqual(d[hmux.mime.Type("TEXT", "Html")], 1)

    def test_not_equal_to_strings(self):
        self.assertNotEqual(hmux.mime.Type("text", "html"), "text/html")

class TestParse(unittest.TestCase):
    def test_plain(self):
        mt = hmux.mime.Type.parse("application/json")
        self.assertEqual(mt.type, "application")
        self.assertEqual(mt.subtype, "json")
        self.assertEqual(mt.parameters, {})

    def test_parameters(self):
        mt = hmux.mime.parse_media_type(
            "multipart/form-data; Boundary=X-abc ; charset=utf-8")
        self.assertEqual(mt.essence, "multipart/form-data")
        self.assertEqual(mt.parameters,
                         {"boundary": "X-abc", "charset": "utf-8"})
        self.assertEqual(mt.without_parameters(),
                         hmux.mime.Type("multipart", "form-data"))

    def test_trailing_semicolon(self):
        mt = hmux.mime.Type.parse("text/plain;")
        self.assertEqual(mt, hmux.mime.Type.text_plain)

    def test_case_insensitive(self):
        self.assertEqual(hmux.mime.Type.parse("Text/HTML"),
                         hmux.mime.Type("text", "html"))

    def test_malformed(self):
        for s in ["", "text", "text/", "/html", "a/b/c", " / ",
                  "text/plain; charset", "text/plain; =utf-8"]:
            with self.subTest(s=s):
                self.assertRaises(ValueError, hmux.mime.Type.parse, s)

    def test_non_string(self):
        self.assertRaises(ValueError, hmux.mime.Type.parse, None)

    def test_lenient_parameters(self):
        mt = hmux.mime.Type.parse("text/html; charset; level=1; =x",
                                  strict=False)
        self.assertEqual(mt.essence, "text/html")
        self.assertEqual(mt.parameters, {"level": "1"})

    def test_lenient_still_rejects_bad_media_type(self):
        for s in ["text", "a/b/c; charset", "/html; x=y"]:
            with self.subTest(s=s):
                self.assertRaises(ValueError, hmux.mime.Type.parse, s,
                                  strict=False)

    def test_with_parameters(self):
        mt = hmux.mime.Type.text_plain.with_parameters(charset="latin1")
        self.assertEqual(str(mt), "text/plain; charset=latin1")
        self.assertEqual(hmux.mime.Type.text_plain.parameters, {})

class TestCaseFoldedDict(unittest.TestCase):
    def test_construct_from_dict(self):
        d = {"A": "a", "B": "b"}
        cfd = hmux.mime.CaseFoldedDict(d)
        self.assertEqual(cfd["a"], d["A"])
        self.assertEqual(cfd["B"], d["B"])

    def test_construct_with_kwargs(self):
        seq = [("A", "1"), ("a", "2"), ("B", "3")]
        cfd = hmux.mime.CaseFoldedDict(seq, B="4")
        self.assertEqual(cfd["A"], "2")
        self.assertEqual(cfd["b"], "4")

    def test_contains(self):
        cfd = hmux.mime.CaseFoldedDict({"Content-Type": "text/plain"})
        self.assertIn("content-type", cfd)
        self.assertIn("CONTENT-TYPE", cfd)
        self.assertNotIn("Accept", cfd)

    def test_update_and_pop(self):
        cfd = hmux.mime.CaseFoldedDict()
        cfd["a"] = "2"
        cfd.update({"A": "1"})
        self.assertEqual(cfd["a"], "1")
        self.assertEqual(cfd.pop("A"), "1")
        self.assertRaises(KeyError, cfd.pop, "a")

    def test_get(self):
        cfd = hmux.mime.CaseFoldedDict()
        cfd["Accept"] = "*/*"
        self.assertEqual(cfd.get("ACCEPT"), "*/*")
        self.assertIsNone(cfd.get("Content-Type"))
