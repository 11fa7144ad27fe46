"""Namespace-aware element paths for ElementTree documents.

A path is a chain of ``/``-separated steps, each selecting the k-th child
(1-indexed) that matches a tag:

* ``div[2]`` matches children in a default namespace (no namespace or XHTML)
  with local name ``div``.
* ``*[local-name()='rect'][1]`` is used for elements in any other namespace
  (embedded SVG, MathML, ...) and matches children with that local name in
  any namespace, as in XPath 1.0.

Paths computed against an ``ElementTree`` (the document) are absolute and
start with ``/`` followed by the document element's step. Paths computed
against an ``Element`` are relative to it and carry no leading slash.
"""

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Iterable, Iterator

from .constants import DEFAULT_NAMESPACES

Root = ET.ElementTree | ET.Element

_STEP_RE = re.compile(
    r"(?:\*\[local-name\(\)=(?P<quote>['\"])(?P<local>[^'\"]+)(?P=quote)\]"
    r"|(?P<tag>[^\W\d][\w.\-]*))"
    r"\[(?P<rank>[1-9]\d*)\]"
)


@dataclass(frozen=True)
class PathStep:
    """One step of an element path."""

    local_name: str
    rank: int
    namespaced: bool = False

    def __str__(self) -> str:
        if self.namespaced:
            return f"*[local-name()='{self.local_name}'][{self.rank}]"
        return f"{self.local_name}[{self.rank}]"

    def matches(self, element: ET.Element, default_namespaces: frozenset[str]) -> bool:
        split = _split_tag(element)
        if split is None:
            return False
        namespace, local_name = split
        if local_name != self.local_name:
            return False
        return self.namespaced or namespace in default_namespaces


def get_expression(
    node: object,
    root: Root,
    *,
    default_namespaces: Iterable[str] = DEFAULT_NAMESPACES,
) -> str | None:
    """
    Compute the path of ``node`` relative to ``root``.

    Args:
        node: Element to address
        root: Document (absolute path) or ancestor element (relative path)
        default_namespaces: Namespaces encoded as bare tag names

    Returns:
        Path string, or None when ``node`` is not an element below ``root``
    """
    if not isinstance(node, ET.Element) or _split_tag(node) is None:
        return None
    defaults = frozenset(default_namespaces)

    if isinstance(root, ET.ElementTree):
        document_element = root.getroot()
        if document_element is None:
            return None
        chain = _ancestry(document_element, node)
        if chain is None:
            return None
        steps = [_step_for(document_element, [document_element], defaults)]
        steps.extend(
            _step_for(child, list(parent), defaults) for parent, child in zip(chain, chain[1:])
        )
        return "/" + "/".join(str(step) for step in steps)

    if not isinstance(root, ET.Element) or node is root:
        return None
    chain = _ancestry(root, node)
    if chain is None:
        return None
    return "/".join(
        str(_step_for(child, list(parent), defaults)) for parent, child in zip(chain, chain[1:])
    )


def get_element(
    expression: object,
    root: Root,
    *,
    default_namespaces: Iterable[str] = DEFAULT_NAMESPACES,
) -> ET.Element | None:
    """
    Resolve a path produced by ``get_expression`` back to an element.

    Never raises: malformed expressions, out-of-range ranks and absolute
    paths against an element root all resolve to None.
    """
    if not isinstance(expression, str):
        return None
    absolute = expression.startswith("/")
    steps = parse_expression(expression)
    if steps is None:
        return None
    defaults = frozenset(default_namespaces)

    if isinstance(root, ET.ElementTree):
        document_element = root.getroot()
        if document_element is None:
            return None
        candidates: list[ET.Element] = [document_element]
    elif isinstance(root, ET.Element) and not absolute:
        candidates = list(root)
    else:
        return None

    current: ET.Element | None = None
    for step in steps:
        current = _select(candidates, step, defaults)
        if current is None:
            return None
        candidates = list(current)
    return current


def parse_expression(expression: str) -> list[PathStep] | None:
    """Split a path into steps; None when any step is malformed."""
    body = expression[1:] if expression.startswith("/") else expression
    if not body:
        return None

    steps: list[PathStep] = []
    for part in _split_steps(body):
        match = _STEP_RE.fullmatch(part)
        if match is None:
            return None
        if match.group("local") is not None:
            steps.append(PathStep(match.group("local"), int(match.group("rank")), namespaced=True))
        else:
            steps.append(PathStep(match.group("tag"), int(match.group("rank"))))
    return steps


def _split_steps(body: str) -> Iterator[str]:
    # local-name() predicates are quoted, so only split on slashes outside quotes.
    start = 0
    quote: str | None = None
    for index, char in enumerate(body):
        if quote is not None:
            if char == quote:
                quote = None
        elif char in "'\"":
            quote = char
        elif char == "/":
            yield body[start:index]
            start = index + 1
    yield body[start:]


def _select(
    candidates: list[ET.Element], step: PathStep, defaults: frozenset[str]
) -> ET.Element | None:
    seen = 0
    for candidate in candidates:
        if step.matches(candidate, defaults):
            seen += 1
            if seen == step.rank:
                return candidate
    return None


def _step_for(
    element: ET.Element, siblings: list[ET.Element], defaults: frozenset[str]
) -> PathStep:
    split = _split_tag(element)
    if split is None:
        raise ValueError(f"Not an element: {element.tag!r}")
    namespace, local_name = split
    step = PathStep(local_name, 1, namespaced=namespace not in defaults)
    rank = 0
    for sibling in siblings:
        if step.matches(sibling, defaults):
            rank += 1
        if sibling is element:
            break
    return PathStep(local_name, rank, namespaced=step.namespaced)


def _ancestry(top: ET.Element, node: ET.Element) -> list[ET.Element] | None:
    """Return elements from ``top`` down to ``node``, or None if unreachable."""
    stack: list[tuple[ET.Element, list[ET.Element]]] = [(top, [top])]
    while stack:
        element, chain = stack.pop()
        if element is node:
            return chain
        for child in reversed(list(element)):
            if isinstance(child.tag, str):
                stack.append((child, chain + [child]))
    return None


def _split_tag(element: ET.Element) -> tuple[str, str] | None:
    tag = element.tag
    if not isinstance(tag, str):
        # Comments and processing instructions
        return None
    if tag.startswith("{"):
        namespace, _, local_name = tag[1:].partition("}")
        return namespace, local_name
    return "", tag
