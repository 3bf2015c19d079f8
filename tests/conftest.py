import pytest
from inout.config import RenderConfig
from symbolic.expressions import compile_expr

@pytest.fixture
def ripple():
    # classic tixy ripple centred on the grid
    evaluator = compile_expr("sin(t-sqrt((x-7.5)**2+(y-6)**2))")
    assert evaluator is not None
    return evaluator

@pytest.fixture
def broken_evaluator():
    evaluator = compile_expr("undefinedName")
    assert evaluator is not None
    return evaluator

@pytest.fixture
def small_config():
    return RenderConfig(size=4, start=0.0, fps=2.0, frames=3)

@pytest.fixture
def dummy_logger(caplog):
    caplog.set_level("DEBUG")
    return caplog
