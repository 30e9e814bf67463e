# tests/test_rewriter.py

from annomath.core.catalog import get_rule
from annomath.core.rewriter import DefinitionRewriter, find_eval_node

from conftest import make_statement, make_value

# --- Test Cases ---

def test_value_body_shape():
    """Value functions get one definition block whose value slot is the evaluator."""
    entity = make_value("f", "@min 1,5,3@", params=("pa", "pb"))
    body = DefinitionRewriter().synthesize(entity, get_rule("min"))

    assert len(body) == 1 and len(body[0]) == 1
    definition = body[0][0]
    assert definition["type"] == "function_create_value"
    assert (definition["x"], definition["y"]) == (40, 40)
    assert definition["params"][:3] == ["pa", None, None] # arity 1 keeps slot 0 only
    assert definition["params"][3] == {"type": "eval_value", "params": ["min(list(p[0]))"], "program": "list.min"}
    assert definition["statements"] == [[{"type": "empty_block"}]]

def test_two_argument_rule_keeps_second_slot():
    entity = make_value("f", "@a 와 b 의 내적@", params=("pa", "pb"))
    definition = DefinitionRewriter().synthesize(entity, get_rule("dot"))[0][0]
    assert definition["params"][:2] == ["pa", "pb"]

def test_missing_formal_params_become_none():
    entity = make_value("f", "@파이값@", params=())
    definition = DefinitionRewriter().synthesize(entity, get_rule("pi"))[0][0]
    assert definition["params"][:3] == [None, None, None]

def test_statement_body_shape():
    """Statement functions get a definition block followed by an evaluator block."""
    entity = make_statement("s", "@m 을/를 알람으로 띄우기@", params=("ps",))
    body = DefinitionRewriter().synthesize(entity, get_rule("alert"))

    assert len(body) == 1 and len(body[0]) == 2
    definition, eval_block = body[0]
    assert definition == {"type": "function_create", "x": 40, "y": 40, "params": ["ps", None]}
    assert eval_block == {"type": "eval_block", "params": ["alert(sanitize(p[0]))"], "program": "alert.param"}

def test_synthesize_does_not_mutate_entity():
    entity = make_value("f", "@min 1@")
    before = entity.get_body()
    DefinitionRewriter().synthesize(entity, get_rule("min"))
    assert entity.get_body() == before

def test_find_eval_node():
    value = DefinitionRewriter().synthesize(make_value("f", ""), get_rule("exp"))
    statement = DefinitionRewriter().synthesize(make_statement("s", ""), get_rule("test"))
    assert find_eval_node(value)["program"] == "scalar.exp"
    assert find_eval_node(statement)["program"] == "alert.test"

def test_find_eval_node_absent():
    entity = make_value("f", "")
    assert find_eval_node(entity.get_body()) is None
    assert find_eval_node([]) is None
    assert find_eval_node(None) is None
