import unittest

from aws_logs_tui.formatting import clamp, display_width, pad_to_width, truncate_to_width, wrap_text


class TestFormatting(unittest.TestCase):
    def test_clamp(self) -> None:
        self.assertEqual(clamp(5, 0, 3), 3)
        self.assertEqual(clamp(-1, 0, 3), 0)
        self.assertEqual(clamp(2, 0, -1), 0)

    def test_display_width_counts_wide_chars(self) -> None:
        self.assertEqual(display_width("abc"), 3)
        self.assertEqual(display_width("中文"), 4)

    def test_truncate_never_splits_wide_char(self) -> None:
        self.assertEqual(truncate_to_width("中文", 3), "中")
        self.assertEqual(truncate_to_width("abc", 0), "")

    def test_pad_to_width(self) -> None:
        self.assertEqual(pad_to_width("ab", 4), "ab  ")
        self.assertEqual(pad_to_width("中文", 3), "中 ")
        self.assertEqual(pad_to_width("abcdef", 3), "abc")

    def test_wrap_text(self) -> None:
        self.assertEqual(wrap_text("abcdef", 4), ["abcd", "ef"])
        self.assertEqual(wrap_text("a\n\nb", 4), ["a", "", "b"])
        self.assertEqual(wrap_text("", 4), [""])
        self.assertEqual(wrap_text("abc", 0), [])


if __name__ == "__main__":
    unittest.main()
