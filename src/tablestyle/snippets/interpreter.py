"""Sandboxed interpreter for computed-snippet expressions.

Snippets are s-expressions evaluated against the variables ``row``,
``column`` and ``text``.  Only the special forms and functions listed here
are available; there is no access to Python objects, no assignment and no
looping, so every evaluation terminates.

Grammar (after reading):
    Expr    = Literal | Variable | PList | SpecialForm | Call
    Literal = string | number | :keyword | t | nil | 'datum
    PList   = ( :key value ... )          -- keys and atom values are literal,
                                             list values are evaluated
    Call    = ( function Expr* )

Special forms: quote, if, when, unless, cond, and, or, let, progn.
"""

from __future__ import annotations

import re
from typing import Any, Callable

from tablestyle.errors import TableStyleError
from tablestyle.model.sexp import NIL, T, Keyword, Symbol, to_source

__all__ = ["EvaluationError", "FUNCTIONS", "SPECIAL_FORMS", "evaluate", "truthy"]


class EvaluationError(TableStyleError):
    """Raised when a snippet expression cannot be evaluated."""


def truthy(value: Any) -> bool:
    """Lisp truthiness: only nil, false and the empty list are false."""
    return not (value is None or value is False or (isinstance(value, list) and not value))


def _lisp_bool(value: bool) -> Any:
    return True if value else None


def _numbers(name: str, args: tuple) -> tuple:
    for arg in args:
        if isinstance(arg, bool) or not isinstance(arg, (int, float)):
            raise EvaluationError(f"{name}: expected a number, got {to_source(arg)}")
    return args


def _strings(name: str, args: tuple) -> tuple:
    for arg in args:
        if not isinstance(arg, str):
            raise EvaluationError(f"{name}: expected a string, got {to_source(arg)}")
    return args


def _arity(name: str, args: tuple, low: int, high: int | None = None) -> None:
    if len(args) < low or (high is not None and len(args) > high):
        expected = str(low) if high == low else f"{low}..{'' if high is None else high}"
        raise EvaluationError(f"{name}: expected {expected} argument(s), got {len(args)}")


# ---------------------------------------------------------------------------
# Built-in functions
# ---------------------------------------------------------------------------


def _add(*args):
    return sum(_numbers("+", args))


def _sub(*args):
    _arity("-", args, 1)
    first, *rest = _numbers("-", args)
    if not rest:
        return -first
    for value in rest:
        first -= value
    return first


def _mul(*args):
    result = 1
    for value in _numbers("*", args):
        result *= value
    return result


def _div(*args):
    _arity("/", args, 2)
    first, *rest = _numbers("/", args)
    for value in rest:
        if value == 0:
            raise EvaluationError("/: division by zero")
        if isinstance(first, int) and isinstance(value, int):
            # Integer division truncates toward zero.
            first = abs(first) // abs(value) * (1 if (first >= 0) == (value > 0) else -1)
        else:
            first = first / value
    return first


def _mod(a, b):
    _numbers("%", (a, b))
    if b == 0:
        raise EvaluationError("%: division by zero")
    return a % b


def _compare(name: str, op: Callable[[Any, Any], bool]) -> Callable[..., Any]:
    def compare(*args):
        _arity(name, args, 1)
        _numbers(name, args)
        return _lisp_bool(all(op(a, b) for a, b in zip(args, args[1:])))

    return compare


def _not_equal(a, b):
    _numbers("/=", (a, b))
    return _lisp_bool(a != b)


def _equal(a, b):
    return _lisp_bool(a == b)


def _string_equal(a, b):
    _strings("string=", (a, b))
    return _lisp_bool(a == b)


def _string_match(pattern, string):
    _strings("string-match", (pattern, string))
    try:
        match = re.search(pattern, string)
    except re.error as exc:
        raise EvaluationError(f"string-match: invalid regular expression {pattern!r}: {exc}") from exc
    return match.start() if match else None


def _string_prefix_p(prefix, string):
    _strings("string-prefix-p", (prefix, string))
    return _lisp_bool(string.startswith(prefix))


def _string_suffix_p(suffix, string):
    _strings("string-suffix-p", (suffix, string))
    return _lisp_bool(string.endswith(suffix))


def _string_empty_p(string):
    _strings("string-empty-p", (string,))
    return _lisp_bool(string == "")


def _length(value):
    if isinstance(value, (str, list)):
        return len(value)
    if value is None:
        return 0
    raise EvaluationError(f"length: expected a string or list, got {to_source(value)}")


def _concat(*args):
    return "".join(_strings("concat", args))


def _string_to_number(string):
    _strings("string-to-number", (string,))
    text = string.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return 0


def _number_to_string(number):
    _numbers("number-to-string", (number,))
    return str(number)


def _int_predicate(name: str, test: Callable[[int], bool]) -> Callable[[Any], Any]:
    def predicate(value):
        _numbers(name, (value,))
        return _lisp_bool(test(value))

    return predicate


def _min(*args):
    _arity("min", args, 1)
    return min(_numbers("min", args))


def _max(*args):
    _arity("max", args, 1)
    return max(_numbers("max", args))


FUNCTIONS: dict[str, Callable[..., Any]] = {
    "+": _add,
    "-": _sub,
    "*": _mul,
    "/": _div,
    "%": _mod,
    "mod": _mod,
    "=": _compare("=", lambda a, b: a == b),
    "<": _compare("<", lambda a, b: a < b),
    ">": _compare(">", lambda a, b: a > b),
    "<=": _compare("<=", lambda a, b: a <= b),
    ">=": _compare(">=", lambda a, b: a >= b),
    "/=": _not_equal,
    "not": lambda value: _lisp_bool(not truthy(value)),
    "null": lambda value: _lisp_bool(not truthy(value)),
    "equal": _equal,
    "string=": _string_equal,
    "string-match": _string_match,
    "string-match-p": _string_match,
    "string-prefix-p": _string_prefix_p,
    "string-suffix-p": _string_suffix_p,
    "string-empty-p": _string_empty_p,
    "length": _length,
    "concat": _concat,
    "upcase": lambda s: _strings("upcase", (s,))[0].upper(),
    "downcase": lambda s: _strings("downcase", (s,))[0].lower(),
    "string-trim": lambda s: _strings("string-trim", (s,))[0].strip(),
    "string-to-number": _string_to_number,
    "number-to-string": _number_to_string,
    "evenp": _int_predicate("evenp", lambda n: n % 2 == 0),
    "oddp": _int_predicate("oddp", lambda n: n % 2 == 1),
    "zerop": _int_predicate("zerop", lambda n: n == 0),
    "abs": lambda n: abs(_numbers("abs", (n,))[0]),
    "min": _min,
    "max": _max,
    "list": lambda *args: list(args),
}


# ---------------------------------------------------------------------------
# Special forms
# ---------------------------------------------------------------------------


def _progn(body: list, env: dict[str, Any]) -> Any:
    result = None
    for form in body:
        result = evaluate(form, env)
    return result


def _quote(args: list, env: dict[str, Any]) -> Any:
    _arity("quote", tuple(args), 1, 1)
    return args[0]


def _if(args: list, env: dict[str, Any]) -> Any:
    _arity("if", tuple(args), 2)
    if truthy(evaluate(args[0], env)):
        return evaluate(args[1], env)
    return _progn(args[2:], env)


def _when(args: list, env: dict[str, Any]) -> Any:
    _arity("when", tuple(args), 1)
    if truthy(evaluate(args[0], env)):
        return _progn(args[1:], env)
    return None


def _unless(args: list, env: dict[str, Any]) -> Any:
    _arity("unless", tuple(args), 1)
    if not truthy(evaluate(args[0], env)):
        return _progn(args[1:], env)
    return None


def _cond(args: list, env: dict[str, Any]) -> Any:
    for clause in args:
        if not isinstance(clause, list) or not clause:
            raise EvaluationError(f"cond: malformed clause {to_source(clause)}")
        test = evaluate(clause[0], env)
        if truthy(test):
            return _progn(clause[1:], env) if len(clause) > 1 else test
    return None


def _and(args: list, env: dict[str, Any]) -> Any:
    result: Any = True
    for form in args:
        result = evaluate(form, env)
        if not truthy(result):
            return None
    return result


def _or(args: list, env: dict[str, Any]) -> Any:
    for form in args:
        result = evaluate(form, env)
        if truthy(result):
            return result
    return None


def _let(args: list, env: dict[str, Any]) -> Any:
    _arity("let", tuple(args), 1)
    bindings = args[0]
    if bindings == NIL:
        bindings = []
    if not isinstance(bindings, list):
        raise EvaluationError(f"let: malformed bindings {to_source(bindings)}")
    scope = dict(env)
    for binding in bindings:
        if isinstance(binding, Symbol):
            name, value = binding, None
        elif isinstance(binding, list) and len(binding) in (1, 2) and isinstance(binding[0], Symbol):
            name = binding[0]
            value = evaluate(binding[1], env) if len(binding) == 2 else None
        else:
            raise EvaluationError(f"let: malformed binding {to_source(binding)}")
        if name in (T, NIL):
            raise EvaluationError(f"let: cannot bind constant {name}")
        scope[name.name] = value
    return _progn(args[1:], scope)


SPECIAL_FORMS: dict[str, Callable[[list, dict[str, Any]], Any]] = {
    "quote": _quote,
    "if": _if,
    "when": _when,
    "unless": _unless,
    "cond": _cond,
    "and": _and,
    "or": _or,
    "let": _let,
    "progn": _progn,
}


def _plist(form: list, env: dict[str, Any]) -> list:
    return [
        evaluate(item, env) if i % 2 and isinstance(item, list) else item
        for i, item in enumerate(form)
    ]


def evaluate(form: Any, env: dict[str, Any]) -> Any:
    """Evaluate a read form in *env* (a mapping of variable names to values)."""
    if isinstance(form, (str, int, float, Keyword)):
        return form
    if isinstance(form, Symbol):
        if form == T:
            return True
        if form == NIL:
            return None
        if form.name in env:
            return env[form.name]
        raise EvaluationError(f"unbound variable: {form.name}")
    if isinstance(form, list):
        if not form:
            return None
        head, args = form[0], form[1:]
        if isinstance(head, Keyword):
            return _plist(form, env)
        if not isinstance(head, Symbol):
            raise EvaluationError(f"not a function: {to_source(head)}")
        special = SPECIAL_FORMS.get(head.name)
        if special is not None:
            return special(args, env)
        function = FUNCTIONS.get(head.name)
        if function is None:
            raise EvaluationError(f"unknown function: {head.name}")
        values = [evaluate(arg, env) for arg in args]
        try:
            return function(*values)
        except TypeError as exc:
            raise EvaluationError(f"{head.name}: {exc}") from exc
    raise EvaluationError(f"cannot evaluate {form!r}")
