# annomath/core/rewriter.py

"""
Synthesizes replacement bodies for matched functions.

A rewritten function body is a single thread whose definition block keeps the
function's original formal parameter slots and forwards to an evaluator node
carrying the rule's operation tag and canonical template:

Value function:
    [[{"type": "function_create_value", "x": 40, "y": 40,
       "params": [slot0, slot1, None, {"type": "eval_value", "params": [template], "program": tag}],
       "statements": [[{"type": "empty_block"}]]}]]

Statement function:
    [[{"type": "function_create", "x": 40, "y": 40, "params": [slot0, slot1]},
      {"type": "eval_block", "params": [template], "program": tag}]]
"""

import copy
import logging
from typing import Any, Dict, List, Optional

from .catalog import PatternRule
from ..host.api import FunctionEntity, FunctionKind, SerializedBody

logger = logging.getLogger(__name__)

# --- Block type names ---
VALUE_DEFINITION = "function_create_value"
STATEMENT_DEFINITION = "function_create"
EVAL_VALUE = "eval_value"
EVAL_BLOCK = "eval_block"
EMPTY_BLOCK = "empty_block"
EVAL_NODE_TYPES = (EVAL_VALUE, EVAL_BLOCK)

_ORIGIN = {"x": 40, "y": 40}


class DefinitionRewriter:
    """Builds the evaluator-forwarding body for a (function, rule) pair."""

    def synthesize(self, entity: FunctionEntity, rule: PatternRule) -> SerializedBody:
        """
        Returns the replacement body for `entity` under `rule`.

        Formal slot 0 is always preserved; slot 1 only for two-argument rules.
        The entity itself is not modified.
        """
        slots = self._formal_slots(entity, rule.arity)
        eval_node = {
            "type": EVAL_VALUE if entity.kind == FunctionKind.VALUE else EVAL_BLOCK,
            "params": [rule.template],
            "program": rule.operation.value,
        }

        if entity.kind == FunctionKind.VALUE:
            definition = {
                "type": VALUE_DEFINITION,
                **_ORIGIN,
                "params": slots + [None, eval_node],
                "statements": [[{"type": EMPTY_BLOCK}]],
            }
            body = [[definition]]
        else:
            definition = {"type": STATEMENT_DEFINITION, **_ORIGIN, "params": slots}
            body = [[definition, eval_node]]

        logger.debug(f"Synthesized {rule.operation.value} body for function '{entity.id}' (rule '{rule.name}')")
        return body

    @staticmethod
    def _formal_slots(entity: FunctionEntity, arity: int) -> List[Any]:
        formal = entity.formal_params
        first = copy.deepcopy(formal[0]) if formal else None
        second = copy.deepcopy(formal[1]) if arity >= 2 and len(formal) > 1 else None
        return [first, second]


def find_eval_node(body: SerializedBody) -> Optional[Dict[str, Any]]:
    """
    Locates the evaluator node of a synthesized body.

    Searches depth-first through nested lists and block dictionaries and
    returns the first `eval_value` or `eval_block` node, or None.
    """
    if isinstance(body, dict):
        if body.get("type") in EVAL_NODE_TYPES:
            return body
        children = list(body.get("params") or []) + list(body.get("statements") or [])
        return find_eval_node(children)
    if isinstance(body, list):
        for item in body:
            found = find_eval_node(item)
            if found is not None:
                return found
    return None
