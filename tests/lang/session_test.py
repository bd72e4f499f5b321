import io
import unittest
from contextlib import redirect_stdout

from crust.lang.error import ArithmeticFault, ParseError, UnresolvedSymbol
from crust.lang.session import Session, evaluate
from crust.lang.syntax import Application, Number, Symbol


class EvaluateTestCase(unittest.TestCase):

    def test_evaluate(self):
        cases = {
            "": 0,
            "(+ 1 2 3)": 6,
            "(define x 5) (+ x x)": 10,
            "(define x 5)\n(define y (* x 2))\n(- y x)": (0 - 10 - 5) % 2 ** 64,
            "1 2 3": 3,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, evaluate(case), case)

    def test_silent(self):
        out = io.StringIO()
        with redirect_stdout(out):
            evaluate("(define x 5) (- x)")
        self.assertEqual("", out.getvalue())

    def test_fresh_environment(self):
        evaluate("(define x 5)")
        self.assertRaises(UnresolvedSymbol, evaluate, "x")


class SessionTestCase(unittest.TestCase):

    def test_trace(self):
        out = io.StringIO()
        with redirect_stdout(out):
            sess = Session()
            sess.add("(define x 5) (+ x x)")
            self.assertEqual(10, sess.run())

        expected = ["root: (define x 5)", "result: 0", "root: (+ x x)", "result: 10"]
        self.assertEqual(expected, out.getvalue().splitlines())

    def test_no_trace(self):
        out = io.StringIO()
        with redirect_stdout(out):
            sess = Session(trace=False)
            sess.add("(* 2 3)")
            self.assertEqual(6, sess.run())
        self.assertEqual("", out.getvalue())

    def test_add(self):
        sess = Session(trace=False)
        roots = sess.add("(define x 5) x")
        self.assertEqual([Application("define", (Symbol("x"), Number(5))), Symbol("x")], roots)
        self.assertEqual(roots, sess.to_eval)
        self.assertEqual([], sess.results)

    def test_shared_environment(self):
        sess = Session(trace=False)
        sess.add("(define x 5)")
        self.assertEqual(0, sess.run())
        sess.add("(* x 3)")
        self.assertEqual(15, sess.run())
        self.assertEqual([(Application("define", (Symbol("x"), Number(5))), 0),
                          (Application("*", (Symbol("x"), Number(3))), 15)], sess.results)

    def test_result(self):
        sess = Session(trace=False)
        self.assertEqual(0, sess.result)
        self.assertEqual(0, sess.run())
        sess.add("4 (+ 4 4)")
        sess.run()
        self.assertEqual(8, sess.result)

    def test_error_aborts_run(self):
        out = io.StringIO()
        with redirect_stdout(out):
            sess = Session()
            sess.add("(+ 1 1) (/ 1 0) (define x 1)")
            self.assertRaises(ArithmeticFault, sess.run)

        self.assertEqual(["root: (+ 1 1)", "result: 2", "root: (/ 1 0)"], out.getvalue().splitlines())
        self.assertEqual([], sess.to_eval)
        self.assertNotIn("x", sess.env)
        self.assertEqual(2, sess.result)

    def test_parse_error_evaluates_nothing(self):
        sess = Session(trace=False)
        self.assertRaises(ParseError, sess.add, "(define x 1) (+ x")
        self.assertEqual([], sess.to_eval)
        self.assertEqual(0, sess.run())


if __name__ == '__main__':
    unittest.main()
