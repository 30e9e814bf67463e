# annomath/core/transactions.py

"""
Reversible rewriting of function definitions.

`RewriteEngine` owns an explicit `EngineState` (the replaced flag and the
per-function snapshots) and exposes two idempotent transitions:

- apply(): snapshot and rewrite every function whose annotation matches a
  catalog rule; a no-op while the state is already replaced.
- undo(): write every snapshot back and clear the state; a no-op unless the
  state is replaced and holds snapshots.

Both run synchronously on the host's thread; no locking is done.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .catalog import match_rules
from .dispatch import ExpressionDispatcher
from .rewriter import DefinitionRewriter, find_eval_node
from ..host.api import (
    EVENT_BEFORE_STOP,
    EVENT_RUN,
    EVENT_STOP,
    HostError,
    HostRuntime,
    SerializedBody,
)

logger = logging.getLogger(__name__)

# --- State and Results ---

@dataclass
class EngineState:
    """Replaced flag plus function id -> body snapshot taken before the first rewrite."""
    is_replaced: bool = False
    backups: Dict[str, SerializedBody] = field(default_factory=dict)


@dataclass
class RewriteResult:
    skipped: bool = False
    rewritten: List[Tuple[str, str]] = field(default_factory=list) # (function id, rule name)
    failed: List[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.rewritten)


@dataclass
class UndoResult:
    skipped: bool = False
    restored: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

# --- Engine ---

class RewriteEngine:
    """
    Applies and reverts catalog rewrites against a host runtime.

    Args:
        host: The host runtime holding the functions.
        dispatcher: Executes rewritten functions; built from the host's
                    notifier when omitted.
        state: Existing engine state to continue from (e.g. loaded backups).
        disabled_rules: Catalog rule names to ignore.
    """

    def __init__(
        self,
        host: HostRuntime,
        dispatcher: Optional[ExpressionDispatcher] = None,
        state: Optional[EngineState] = None,
        disabled_rules: Iterable[str] = (),
    ):
        self.host = host
        self.dispatcher = dispatcher if dispatcher is not None else ExpressionDispatcher(host.notifier)
        self.state = state if state is not None else EngineState()
        self.disabled_rules = frozenset(disabled_rules)
        self.rewriter = DefinitionRewriter()

    # --- Transitions ---

    def apply(self) -> RewriteResult:
        """Rewrites every matching function. Returns what was rewritten."""
        if self.state.is_replaced:
            logger.info("Functions are already rewritten; skipping rewrite pass.")
            return RewriteResult(skipped=True)

        result = RewriteResult()
        for entity in self.host.functions():
            for rule in match_rules(entity.annotation, entity.kind, self.disabled_rules):
                previous = entity.get_body()
                created_snapshot = entity.id not in self.state.backups
                if created_snapshot:
                    self.state.backups[entity.id] = copy.deepcopy(previous)
                entity.set_body(self.rewriter.synthesize(entity, rule))
                try:
                    self.host.commit(entity)
                except HostError as e:
                    logger.error(f"Could not commit rewrite of function '{entity.id}' ({rule.name}): {e}")
                    # Back to the last committed body
                    entity.set_body(previous)
                    if created_snapshot:
                        del self.state.backups[entity.id]
                    result.failed.append(entity.id)
                    break
                result.rewritten.append((entity.id, rule.name))
                logger.debug(f"Rewrote function '{entity.id}' with rule '{rule.name}'")

        if result.count > 0:
            self.state.is_replaced = True
            logger.info(f"Rewrote {result.count} function definition(s).")
        else:
            logger.info("No functions to rewrite.")
        return result

    def undo(self) -> UndoResult:
        """Restores every snapshot and clears the state."""
        if not self.state.is_replaced or not self.state.backups:
            return UndoResult(skipped=True)

        result = UndoResult()
        for function_id, snapshot in self.state.backups.items():
            entity = self.host.get_function(function_id)
            if entity is None:
                logger.warning(f"Function '{function_id}' no longer exists; skipping restore.")
                result.missing.append(function_id)
                continue
            try:
                entity.set_body(copy.deepcopy(snapshot))
                self.host.commit(entity)
            except HostError as e:
                logger.error(f"Could not restore function '{function_id}': {e}")
                result.failed.append(function_id)
                continue
            result.restored.append(function_id)

        self.state.backups.clear()
        self.state.is_replaced = False
        logger.info(f"Restored {len(result.restored)} function definition(s).")
        return result

    # --- Host integration ---

    def attach(self) -> None:
        """Subscribes apply to the run event and undo to beforeStop and stop."""
        self.host.add_event_listener(EVENT_RUN, self.apply)
        self.host.add_event_listener(EVENT_BEFORE_STOP, self.undo)
        self.host.add_event_listener(EVENT_STOP, self.undo)

    def call(self, function_id: str, args: Optional[Sequence[Any]] = None) -> Any:
        """
        Runs a rewritten function with call-site arguments.

        Raises:
            HostError: If the function does not exist or has no evaluator node.
        """
        entity = self.host.get_function(function_id)
        if entity is None:
            raise HostError(f"Unknown function '{function_id}'")
        node = find_eval_node(entity.get_body())
        if node is None:
            raise HostError(f"Function '{function_id}' has not been rewritten")
        program = node.get("program") or (node.get("params") or [""])[0]
        return self.dispatcher.execute(program, list(args or []))
