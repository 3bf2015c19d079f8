import math
import pickle
import pytest
import numpy as np
from core.evaluation_types import EvalError, Number
from symbolic.expressions import CompiledEvaluator, compile_expr, unresolved_names

VALID_EXPRESSIONS = [
    "sin(t)+x",
    "PI*x",
    "i%4-y%4",
    "(t*10)&(1<<x)&&y==8",
    "sin(t-sqrt((x-7.5)**2+(y-6)**2))",
    "x>y?1:-1",
    "hypot(x-7.5, y-7.5)/10 - 0.5",
    "-(x**2) + .5e1",
    "0xFF >>> y",
]

@pytest.mark.parametrize("source", VALID_EXPRESSIONS)
def test_valid_expressions_compile(source):
    evaluator = compile_expr(source)
    assert isinstance(evaluator, CompiledEvaluator)
    assert evaluator.source == source

@pytest.mark.parametrize("source", ["t+", "", "   ", "sin(", "(x", "x)", "1 2", "x ? y", "t @ 2", "2x", "f(a,)"])
def test_invalid_expressions_return_none(source):
    assert compile_expr(source) is None

def test_non_string_source_returns_none():
    assert compile_expr(None) is None
    assert compile_expr(42) is None

def test_deep_nesting_does_not_raise():
    assert compile_expr("(" * 5000 + "x" + ")" * 5000) is None

def test_sin_t_plus_x_at_origin():
    result = compile_expr("sin(t)+x")(0, 0, 0, 0)
    assert result == Number(0.0)

def test_pi_times_x():
    result = compile_expr("PI*x")(0, 0, 2, 0)
    assert isinstance(result, Number)
    np.testing.assert_allclose(result.value, math.pi * 2, rtol=1e-12)

def test_undefined_name_returns_error_value():
    evaluator = compile_expr("undefinedName")
    assert evaluator is not None
    result = evaluator(0, 0, 0, 0)
    assert isinstance(result, EvalError)
    assert not isinstance(result, Number)
    assert result.kind == "UnresolvedNameError"
    assert "undefinedName" in result.message
    assert not result.ok

def test_result_is_always_float():
    result = compile_expr("x>y")(0, 0, 3, 1)
    assert result == Number(1.0)
    assert type(result.value) is float
    assert result.ok

def test_bare_function_is_not_a_number():
    result = compile_expr("sin")(0, 0, 0, 0)
    assert isinstance(result, EvalError)
    assert result.kind == "TypeError"

@pytest.mark.parametrize("source,kind", [
    ("1/x", "ZeroDivisionError"),
    ("x%0", "ValueError"),
    ("sqrt(-1-x)", "ValueError"),
    ("log(x)", "ValueError"),
    ("exp(1000)", "OverflowError"),
    ("10**400", "OverflowError"),
    ("PI(2)", "NotCallableError"),
    ("sin(1, 2)", "TypeError"),
    ("sin+1", "TypeError"),
])
def test_runtime_failures_are_returned(source, kind):
    result = compile_expr(source)(0, 0, 0, 0)
    assert isinstance(result, EvalError)
    assert result.kind == kind

def test_errors_depend_on_parameters():
    evaluator = compile_expr("1/(x-y)")
    assert isinstance(evaluator(0, 0, 2, 2), EvalError)
    assert evaluator(0, 0, 3, 2) == Number(1.0)

def test_determinism():
    evaluator = compile_expr("sin(t*x)+cos(i)*y")
    assert evaluator(1.5, 7, 3, 2) == evaluator(1.5, 7, 3, 2)
    broken = compile_expr("nope(1)")
    assert broken(0, 0, 0, 0) == broken(0, 0, 0, 0)

def test_independence():
    a = compile_expr("x*y-t")
    b = compile_expr("x*y-t")
    assert a is not b
    for args in [(0, 0, 0, 0), (1.25, 5, 2, 3), (-4, 9, 15, 15)]:
        assert a(*args) == b(*args)

def test_evaluator_is_immutable():
    evaluator = compile_expr("x")
    with pytest.raises(AttributeError):
        evaluator.source = "y"

def test_evaluator_survives_pickling():
    evaluator = pickle.loads(pickle.dumps(compile_expr("x+y*t")))
    assert evaluator(2, 0, 1, 3) == Number(7.0)

def test_parameters_shadow_namespace():
    evaluator = compile_expr("E")
    assert evaluator(0, 0, 0, 0) == Number(math.e)
    assert compile_expr("x")(0, 0, 5, 0) == Number(5.0)

def test_unresolved_names():
    evaluator = compile_expr("foo + sin(t) * bar - foo + PI")
    assert unresolved_names(evaluator) == ["foo", "bar"]
    assert unresolved_names(compile_expr("sin(t)*x")) == []

def test_oversized_hex_literal_compiles():
    evaluator = compile_expr("0x" + "F" * 300)
    assert evaluator is not None
    assert evaluator(0, 0, 0, 0) == Number(math.inf)

def test_non_ascii_digits_do_not_compile():
    assert compile_expr("٣+x") is None

@pytest.mark.parametrize("source", ["1e200*1e200", "1e308+1e308", "-1e308-1e308", "1e308/1e-10", "x*1e308*10"])
def test_arithmetic_overflow_is_an_error(source):
    result = compile_expr(source)(0, 0, 1, 0)
    assert isinstance(result, EvalError)
    assert result.kind == "OverflowError"

def test_infinite_operands_follow_ieee():
    assert compile_expr("1e400*2")(0, 0, 0, 0) == Number(math.inf)
    assert compile_expr("t-1")(math.inf, 0, 0, 0) == Number(math.inf)
