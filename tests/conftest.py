"""Shared document fixtures."""

import xml.etree.ElementTree as ET
from dataclasses import dataclass

import pytest

from dom_keyframes.constants import SVG_NAMESPACE, XHTML_NAMESPACE

X = f"{{{XHTML_NAMESPACE}}}"
S = f"{{{SVG_NAMESPACE}}}"


@dataclass
class PostDocument:
    document: ET.ElementTree
    container: ET.Element
    post1: ET.Element
    post2: ET.Element
    svg: ET.Element
    rect: ET.Element

    def find_class(self, scope: ET.Element, class_name: str) -> ET.Element:
        for element in scope.iter():
            if element.get("class") == class_name:
                return element
        raise LookupError(class_name)


def _post(parent: ET.Element) -> ET.Element:
    """div.post > div.entry > div.post-meta > span.post-date, span.post-args"""
    post = ET.SubElement(parent, f"{X}div", {"class": "post"})
    entry = ET.SubElement(post, f"{X}div", {"class": "entry"})
    meta = ET.SubElement(entry, f"{X}div", {"class": "post-meta"})
    ET.SubElement(meta, f"{X}span", {"class": "post-date"}).text = "2024-01-01"
    ET.SubElement(meta, f"{X}span", {"class": "post-args"}).text = "args"
    return post


def build_post_document() -> PostDocument:
    html = ET.Element(f"{X}html")
    ET.SubElement(html, f"{X}head")
    body = ET.SubElement(html, f"{X}body")
    container = ET.SubElement(body, f"{X}div", {"id": "container"})
    post1 = _post(container)
    post2 = _post(container)

    entry = post1.find(f"{X}div")
    assert entry is not None
    svg = ET.SubElement(entry, f"{S}svg", {"width": "100", "height": "100"})
    group = ET.SubElement(svg, f"{S}g")
    rect = ET.SubElement(group, f"{S}rect", {"width": "10", "height": "10"})

    return PostDocument(
        document=ET.ElementTree(html),
        container=container,
        post1=post1,
        post2=post2,
        svg=svg,
        rect=rect,
    )


@pytest.fixture
def posts() -> PostDocument:
    return build_post_document()


@pytest.fixture
def make_posts():
    """Factory for independent copies of the post document (simulated reloads)."""
    return build_post_document
