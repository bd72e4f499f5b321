import unittest

from crust.lang.lexical import LeftParen, NumberToken, RightParen, SymbolToken, classify, separate, tokenize, untokenize


class SeparateTestCase(unittest.TestCase):

    def test_separate(self):
        cases = {
            "apa": ["apa"],
            "(": ["("],
            "()": ["(", ")"],
            "(apa)": ["(", "apa", ")"],
            "((+": ["(", "(", "+"],
            "x)))": ["x", ")", ")", ")"],
            "a(b)c": ["a", "(", "b", ")", "c"],
            "": [],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, separate(case), case)


class TokenizeTestCase(unittest.TestCase):

    def test_classify(self):
        cases = {
            "(": LeftParen(),
            ")": RightParen(),
            "5": NumberToken(5),
            "+5": NumberToken(5),
            "+": SymbolToken("+"),
            "-5": SymbolToken("-5"),
            "define": SymbolToken("define"),
            "18446744073709551616": SymbolToken("18446744073709551616"),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, classify(case), case)

    def test_tokenize(self):
        cases = {
            "apa": [SymbolToken("apa")],
            "(": [LeftParen()],
            "()": [LeftParen(), RightParen()],
            "(apa)": [LeftParen(), SymbolToken("apa"), RightParen()],
            "(+ 1 2)": [LeftParen(), SymbolToken("+"), NumberToken(1), NumberToken(2), RightParen()],
            "  (*\t2\n(x))  ": [LeftParen(), SymbolToken("*"), NumberToken(2), LeftParen(), SymbolToken("x"),
                                RightParen(), RightParen()],
            "": [],
            " \n\t ": [],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, tokenize(case), case)

    def test_whitespace(self):
        should_split = ["\xa0", "\u2003", "\u3000", "\x85", "\x0b", "\u2028"]
        for case in should_split:
            self.assertEqual([SymbolToken("a"), SymbolToken("b")], tokenize(f"a{case}b"), repr(case))

        should_not_split = ["\x1c", "\x1d", "\x1e", "\x1f", "\u200b"]
        for case in should_not_split:
            self.assertEqual([SymbolToken(f"a{case}b")], tokenize(f"a{case}b"), repr(case))

    def test_long_digit_runs(self):
        cases = {
            "1" * 5000: [SymbolToken("1" * 5000)],
            "0" * 5000 + "7": [NumberToken(7)],
            "(+ " + "0" * 5000 + "7 1)": [LeftParen(), SymbolToken("+"), NumberToken(7), NumberToken(1), RightParen()],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, tokenize(case), case[:20])

    def test_deterministic(self):
        source = "(define x (+ 1 2)) (* x x)"
        self.assertEqual(tokenize(source), tokenize(source))

    def test_untokenize(self):
        cases = {
            "(+ 1 2)": "( + 1 2 )",
            "(apa)": "( apa )",
            "+07": "7",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, untokenize(tokenize(case)), case)

    def test_str(self):
        self.assertEqual("(", str(LeftParen()))
        self.assertEqual(")", str(RightParen()))
        self.assertEqual("12", str(NumberToken(12)))
        self.assertEqual("apa", str(SymbolToken("apa")))


if __name__ == '__main__':
    unittest.main()
