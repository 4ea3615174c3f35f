"""CST adapter layer: parse tree -> normalized IR -> complexity signals.

Walks a tree-sitter parse tree once, depth first, using the profile's
``CstAdapter`` table to recognise loops, function definitions, and
sort/library calls. Nodes only need ``type``, ``text``, ``children`` and
``child_by_field_name``, which is what tree-sitter's ``Node`` provides.
"""

from __future__ import annotations

from typing import Iterator, Protocol, Sequence

from asymptote.analysis.bounds import (
    DEFAULT_BOUND,
    classify_bound,
    extract_loop_bound,
    has_log_progression,
)
from asymptote.analysis.recursion import classify_recursion, count_calls, function_name
from asymptote.analysis.types import (
    BoundKind,
    ComplexitySignals,
    LoopKind,
    LoopObservation,
    NormalizedIR,
)
from asymptote.constants import DEFAULT_SNIPPET_MAX_LENGTH
from asymptote.profiles import LanguageProfile


class SyntaxNode(Protocol):
    """The subset of tree-sitter's ``Node`` the adapter layer uses."""

    @property
    def type(self) -> str: ...

    @property
    def text(self) -> bytes | None: ...

    @property
    def children(self) -> Sequence[SyntaxNode]: ...

    def child_by_field_name(self, name: str) -> SyntaxNode | None: ...


def node_text(node: SyntaxNode) -> str:
    if not node.text:
        return ""
    return node.text.decode("utf-8", errors="replace")


def _tokens(node: SyntaxNode, skip_types: dict[str, str]) -> Iterator[str]:
    """Leaf texts under node, not descending into nodes of ``skip_types``."""
    if not node.children:
        yield node_text(node)
        return
    for child in node.children:
        if child.type in skip_types:
            continue
        yield from _tokens(child, skip_types)


def observe_loop(
    node: SyntaxNode,
    kind: LoopKind,
    depth: int,
    profile: LanguageProfile,
) -> LoopObservation:
    """Classify a loop node by its own header and body, nested loops excluded.

    Progression in the loop's own text makes it logarithmic; otherwise the
    header bound decides, so ``range(log(n))`` is logarithmic without being
    reported as a progression.
    """
    loop_nodes = profile.cst.loop_nodes
    body = node.child_by_field_name("body")

    header_parts: list[str] = []
    body_parts: list[str] = []
    for child in node.children:
        target = body_parts if body is not None and child == body else header_parts
        if child.type not in loop_nodes:
            target.extend(_tokens(child, loop_nodes))
    header = " ".join(header_parts)

    progression = has_log_progression(" ".join(header_parts + body_parts))
    if progression:
        hint: BoundKind = "log n"
    else:
        hint = classify_bound(extract_loop_bound(header, profile) or DEFAULT_BOUND)
    return LoopObservation(kind=kind, depth=depth, bound_hint=hint, log_progression=progression)


def declared_name(node: SyntaxNode, profile: LanguageProfile) -> str:
    """Name of a function node from its ``name`` field or declarator chain.

    Python and Java expose ``name`` directly; C nests the identifier under
    ``declarator`` fields. Falls back to the profile's signature patterns.
    """
    named = node.child_by_field_name("name")
    if named is not None:
        return node_text(named)
    declarator = node.child_by_field_name("declarator")
    while declarator is not None:
        if declarator.type == "identifier":
            return node_text(declarator)
        declarator = declarator.child_by_field_name("declarator")
    return function_name(node_text(node), profile)


def _matches_innermost(node: SyntaxNode, text: str, patterns) -> bool:
    """True if text matches and no child's text does."""
    if not any(p.search(text) for p in patterns):
        return False
    return not any(
        any(p.search(node_text(child)) for p in patterns) for child in node.children
    )


def build_normalized_ir(
    root: SyntaxNode,
    profile: LanguageProfile,
    snippet_max_length: int = DEFAULT_SNIPPET_MAX_LENGTH,
) -> NormalizedIR:
    """Walk the tree once and collect loops, recursion, sorts, and library ops."""
    adapter = profile.cst
    ir = NormalizedIR(language=profile.name)
    sorting_calls: dict[str, None] = {}
    library_ops: dict[str, None] = {}

    stack: list[tuple[SyntaxNode, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        text = node_text(node)

        loop_kind = adapter.loop_nodes.get(node.type)
        child_depth = depth + 1 if loop_kind else depth
        if loop_kind:
            ir.loops.append(observe_loop(node, loop_kind, child_depth, profile))

        if _matches_innermost(node, text, adapter.sort_patterns):
            sorting_calls.setdefault(text.strip()[:snippet_max_length], None)
        if _matches_innermost(node, text, adapter.library_op_patterns):
            library_ops.setdefault(text.strip()[:snippet_max_length], None)

        if node.type in adapter.function_node_types:
            name = declared_name(node, profile)
            signal = classify_recursion(name, count_calls(name, text), text)
            if signal is not None:
                ir.recursion.append(signal)

        # Reversed so children pop in source order.
        for child in reversed(node.children):
            stack.append((child, child_depth))

    ir.sorting_calls = list(sorting_calls)
    ir.library_ops = list(library_ops)
    return ir


def deepest_chain(loops: list[LoopObservation]) -> list[LoopObservation]:
    """First-seen deepest ancestor chain from a pre-order loop list."""
    stack: list[LoopObservation] = []
    best: list[LoopObservation] = []
    for observation in loops:
        del stack[observation.depth - 1 :]
        stack.append(observation)
        if len(stack) > len(best):
            best = list(stack)
    return best


def signals_from_ir(ir: NormalizedIR) -> ComplexitySignals:
    """Project an IR onto the signal shape shared with the lexical path."""
    chain = deepest_chain(ir.loops)
    return ComplexitySignals(
        language=ir.language,
        loop_count=len(ir.loops),
        max_depth=max((loop.depth for loop in ir.loops), default=0),
        chain_bounds=[f"{loop.kind} ({loop.bound_hint})" for loop in chain],
        chain_factors=[loop.bound_hint for loop in chain],
        has_log_progression=any(loop.log_progression for loop in ir.loops),
        sorting_calls=list(ir.sorting_calls),
        library_ops=list(ir.library_ops),
        recursion=list(ir.recursion),
    )
