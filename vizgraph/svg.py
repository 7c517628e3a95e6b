"""Helpers for working with Graphviz SVG output."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", XLINK_NS)

# Outline primitives of a node or edge decoration, in lookup order. Only the
# first kind present in an element is styled.
SHAPE_KINDS = ("polygon", "ellipse")

_NUMBER = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
_TRANSLATE_RE = re.compile(rf"translate\(\s*({_NUMBER})(?:[\s,]+({_NUMBER}))?\s*\)")
_SCALE_RE = re.compile(rf"scale\(\s*({_NUMBER})(?:[\s,]+({_NUMBER}))?\s*\)")

ViewBox = tuple[float, float, float, float]


def _tag(name: str) -> str:
    return f"{{{SVG_NS}}}{name}"


def parse_svg(text: str) -> ET.Element:
    """Parse SVG text; raises ValueError if it is not an <svg> document."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise ValueError(f"Invalid SVG: {e}") from e
    if root.tag not in (_tag("svg"), "svg"):
        raise ValueError(f"Expected an <svg> root element, got <{root.tag}>")
    return root


def to_string(root: ET.Element) -> str:
    return ET.tostring(root, encoding="unicode")


def index_ids(root: ET.Element) -> dict[str, ET.Element]:
    """Map every `id` attribute in the document to its element."""
    return {el.get("id"): el for el in root.iter() if el.get("id")}


def descendants(element: ET.Element, kind: str) -> list[ET.Element]:
    """All descendants of `element` with the given SVG tag name."""
    return [el for el in element.iter() if el is not element and el.tag in (_tag(kind), kind)]


def shape_parts(element: ET.Element) -> list[ET.Element]:
    for kind in SHAPE_KINDS:
        parts = descendants(element, kind)
        if parts:
            return parts
    return []


def text_parts(element: ET.Element) -> list[ET.Element]:
    return descendants(element, "text")


def path_parts(element: ET.Element) -> list[ET.Element]:
    return descendants(element, "path")


# -- inline style ------------------------------------------------------------


def parse_style(style: str | None) -> dict[str, str]:
    """Parse a `style` attribute ("a: 1; b: 2") into an ordered dict."""
    out: dict[str, str] = {}
    for decl in (style or "").split(";"):
        name, sep, value = decl.partition(":")
        if sep and name.strip():
            out[name.strip()] = value.strip()
    return out


def format_style(props: dict[str, str]) -> str:
    return "; ".join(f"{name}: {value}" for name, value in props.items())


def set_style(element: ET.Element, prop: str, value: str) -> None:
    props = parse_style(element.get("style"))
    props[prop] = value
    element.set("style", format_style(props))


def unset_style(element: ET.Element, prop: str) -> None:
    props = parse_style(element.get("style"))
    if props.pop(prop, None) is None:
        return
    if props:
        element.set("style", format_style(props))
    else:
        element.attrib.pop("style", None)


def get_style(element: ET.Element, prop: str) -> str | None:
    return parse_style(element.get("style")).get(prop)


# -- geometry ----------------------------------------------------------------


def get_view_box(root: ET.Element) -> ViewBox | None:
    raw = root.get("viewBox")
    if not raw:
        return None
    parts = raw.replace(",", " ").split()
    if len(parts) != 4:
        return None
    try:
        x, y, w, h = (float(p) for p in parts)
    except ValueError:
        return None
    return x, y, w, h


def set_view_box(root: ET.Element, box: ViewBox) -> None:
    root.set("viewBox", " ".join(f"{v:.2f}" for v in box))


def graph_transform(root: ET.Element) -> tuple[float, float, float, float]:
    """Return (scale_x, scale_y, translate_x, translate_y) of the top-level graph group.

    Graphviz draws in a coordinate space with negative y and moves it into
    view with a `scale(..) rotate(0) translate(..)` transform on that group.
    """
    group = next((el for el in root if el.tag in (_tag("g"), "g")), None)
    transform = group.get("transform", "") if group is not None else ""

    sx = sy = 1.0
    tx = ty = 0.0
    m = _SCALE_RE.search(transform)
    if m:
        sx = float(m.group(1))
        sy = float(m.group(2)) if m.group(2) else sx
    m = _TRANSLATE_RE.search(transform)
    if m:
        tx = float(m.group(1))
        ty = float(m.group(2)) if m.group(2) else 0.0
    return sx, sy, tx, ty


def shape_center(element: ET.Element) -> tuple[float, float] | None:
    """Centre of the element's outline in graph coordinates, or None."""
    points: list[tuple[float, float]] = []
    for part in shape_parts(element):
        if part.tag.endswith("ellipse"):
            points.append((float(part.get("cx", 0)), float(part.get("cy", 0))))
        else:
            coords = [float(v) for v in re.findall(_NUMBER, part.get("points", ""))]
            points.extend(zip(coords[0::2], coords[1::2]))
    if not points:
        return None
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return (min(xs) + max(xs)) / 2, (min(ys) + max(ys)) / 2


def to_document_coords(root: ET.Element, point: tuple[float, float]) -> tuple[float, float]:
    sx, sy, tx, ty = graph_transform(root)
    return (point[0] + tx) * sx, (point[1] + ty) * sy
