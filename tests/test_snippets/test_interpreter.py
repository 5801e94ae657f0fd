"""Tests for the sandboxed snippet interpreter."""

import pytest

from tablestyle.model.sexp import Keyword, Symbol
from tablestyle.parser import read_forms
from tablestyle.snippets import EvaluationError, evaluate
from tablestyle.snippets.interpreter import truthy


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _eval(source: str, row: int = 1, column: int = 1, text: str = ""):
    (form,) = read_forms(source)
    return evaluate(form, {"row": row, "column": column, "text": text})


# ---------------------------------------------------------------------------
# Values and variables
# ---------------------------------------------------------------------------


class TestLiterals:
    def test_self_evaluating(self):
        assert _eval('"red"') == "red"
        assert _eval("7") == 7
        assert _eval(":weight") == Keyword("weight")

    def test_constants(self):
        assert _eval("t") is True
        assert _eval("nil") is None
        assert _eval("()") is None

    def test_variables(self):
        assert _eval("row", row=3) == 3
        assert _eval("column", column=5) == 5
        assert _eval("text", text="abc") == "abc"

    def test_unbound_variable(self):
        with pytest.raises(EvaluationError, match="unbound variable: cell"):
            _eval("cell")

    def test_plist_literal_is_data(self):
        assert _eval("(:slant italic)") == [Keyword("slant"), Symbol("italic")]

    def test_plist_list_values_are_evaluated(self):
        source = '(:background (if (= row 2) "red" "blue") :slant italic)'
        assert _eval(source, row=2) == [Keyword("background"), "red", Keyword("slant"), Symbol("italic")]
        assert _eval(source, row=3)[1] == "blue"

    def test_plist_quoted_value_stays_data(self):
        assert _eval("(:family '(a b))") == [Keyword("family"), [Symbol("a"), Symbol("b")]]

    def test_plist_value_error_propagates(self):
        with pytest.raises(EvaluationError, match="unknown function"):
            _eval("(:background (colour-of row))")

    def test_quote(self):
        assert _eval("'(a b)") == [Symbol("a"), Symbol("b")]


class TestTruthiness:
    @pytest.mark.parametrize("value", [None, False, []])
    def test_false_values(self, value):
        assert truthy(value) is False

    @pytest.mark.parametrize("value", [0, "", True, [1], "x"])
    def test_true_values(self, value):
        assert truthy(value) is True


# ---------------------------------------------------------------------------
# Special forms
# ---------------------------------------------------------------------------


class TestSpecialForms:
    def test_if(self):
        assert _eval('(if (= row 2) "even" "odd")', row=2) == "even"
        assert _eval('(if (= row 2) "even" "odd")', row=3) == "odd"

    def test_if_without_else(self):
        assert _eval('(if (= row 2) "even")', row=3) is None

    def test_when_unless(self):
        assert _eval("(when (> row 1) (:weight bold))", row=2) == [Keyword("weight"), Symbol("bold")]
        assert _eval("(when (> row 1) (:weight bold))", row=1) is None
        assert _eval('(unless (string= text "") 1)', text="x") == 1

    def test_cond(self):
        source = '(cond ((< row 2) "first") ((< row 4) "middle") (t "last"))'
        assert _eval(source, row=1) == "first"
        assert _eval(source, row=3) == "middle"
        assert _eval(source, row=9) == "last"

    def test_and_or(self):
        assert _eval("(and (> row 1) (< row 5))", row=3) is True
        assert _eval("(and (> row 1) (< row 5))", row=7) is None
        assert _eval('(or nil "fallback")') == "fallback"

    def test_let(self):
        assert _eval("(let ((n (* row 2))) (+ n 1))", row=4) == 9

    def test_let_cannot_bind_constants(self):
        with pytest.raises(EvaluationError):
            _eval("(let ((t 1)) t)")

    def test_let_does_not_leak(self):
        with pytest.raises(EvaluationError):
            _eval("(progn (let ((n 1)) n) n)")


# ---------------------------------------------------------------------------
# Functions
# ---------------------------------------------------------------------------


class TestFunctions:
    def test_arithmetic(self):
        assert _eval("(+ row column 1)", row=2, column=3) == 6
        assert _eval("(- 10 row)", row=3) == 7
        assert _eval("(- row)", row=3) == -3
        assert _eval("(* 2 3 4)") == 24
        assert _eval("(/ 7 2)") == 3
        assert _eval("(/ -7 2)") == -3
        assert _eval("(/ 7.0 2)") == 3.5
        assert _eval("(% row 2)", row=5) == 1

    def test_comparisons(self):
        assert _eval("(= 1 1 1)") is True
        assert _eval("(< 1 2 3)") is True
        assert _eval("(< 1 3 2)") is None
        assert _eval("(/= 1 2)") is True

    def test_parity_predicates(self):
        assert _eval("(evenp row)", row=4) is True
        assert _eval("(oddp row)", row=4) is None

    def test_string_functions(self):
        assert _eval('(string-match "b+" text)', text="abbc") == 1
        assert _eval('(string-match "z" text)', text="abc") is None
        assert _eval("(length text)", text="abcd") == 4
        assert _eval('(concat "row-" (number-to-string row))', row=2) == "row-2"
        assert _eval("(string-to-number text)", text="12") == 12
        assert _eval("(string-to-number text)", text="1.5") == 1.5
        assert _eval("(string-to-number text)", text="n/a") == 0
        assert _eval("(upcase text)", text="ab") == "AB"
        assert _eval('(string-prefix-p "TODO" text)', text="TODO: x") is True

    def test_list(self):
        assert _eval('(list :background (if (> row 1) "red" "blue"))', row=2) == [
            Keyword("background"),
            "red",
        ]

    def test_numeric_threshold_on_cell_text(self):
        source = "(when (> (string-to-number text) 100) (:foreground red))"
        assert _eval(source, text="250") == [Keyword("foreground"), Symbol("red")]
        assert _eval(source, text="50") is None


class TestEvaluationErrors:
    def test_unknown_function(self):
        with pytest.raises(EvaluationError, match="unknown function: shell-command"):
            _eval('(shell-command "rm -rf /")')

    def test_type_mismatch(self):
        with pytest.raises(EvaluationError, match="expected a number"):
            _eval("(+ text 1)", text="abc")

    def test_division_by_zero(self):
        with pytest.raises(EvaluationError, match="division by zero"):
            _eval("(% row 0)")

    def test_wrong_arity(self):
        with pytest.raises(EvaluationError):
            _eval('(string-match "x")')

    def test_non_symbol_head(self):
        with pytest.raises(EvaluationError, match="not a function"):
            _eval("(1 2)")

    def test_invalid_regexp(self):
        with pytest.raises(EvaluationError, match="invalid regular expression"):
            _eval('(string-match "[" text)', text="x")
