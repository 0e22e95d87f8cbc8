"""Text-level rewriting of path geometry and root size attributes.

The document is never parsed as XML: start tags are located with regular
expressions and only the targeted attribute values are replaced, so all other
markup (comments, whitespace, attribute order, namespaces) is kept verbatim.
"""

import re

from .geometry import ScaleTransform, TargetFrame
from .path import transform_path_data
from .utils import attribute_pattern, find_root_tag

# Attributes describing the canvas size on the root element
SIZE_ATTRIBUTES = ("width", "height", "viewBox")

PATH_TAG_RE = re.compile(r"<path(?=[\s/>])[^>]*>", re.IGNORECASE)
D_ATTRIBUTE_RE = attribute_pattern("d")


def rewrite_paths(document: str, transform: ScaleTransform) -> str:
    """Replace the d attribute of every path element.

    Args:
        document: Full SVG text.
        transform: Transform applied to every path.

    Returns:
        Document with transformed path data. Paths without a d attribute,
        or with an empty one, are left as they are.

    Raises:
        PathDataError: If any path data is malformed.
    """

    def _replace(match: re.Match[str]) -> str:
        tag = match.group(0)
        d_match = D_ATTRIBUTE_RE.search(tag)
        if d_match is None or not d_match.group("value").strip():
            return tag

        new_d = transform_path_data(d_match.group("value"), transform)
        return tag[: d_match.start("value")] + new_d + tag[d_match.end("value") :]

    return PATH_TAG_RE.sub(_replace, document)


def rewrite_root(document: str, target: TargetFrame) -> str:
    """Normalize the size attributes of the root svg element.

    Removes any width, height and viewBox attributes from the root start tag
    and appends canonical ones for the target canvas. Other elements keep
    their width/height.

    Args:
        document: Full SVG text.
        target: Output canvas.

    Returns:
        Document with a canonical root start tag (unchanged if there is no
        root svg element).
    """
    root = find_root_tag(document)
    if root is None:
        return document

    attributes = root.attributes
    for name in SIZE_ATTRIBUTES:
        attributes = attribute_pattern(name).sub("", attributes)

    size = target.size_text
    closing = "/>" if root.self_closing else ">"
    tag = (
        f'<svg{attributes} width="{size}" height="{size}" '
        f'viewBox="{target.view_box}"{closing}'
    )
    return document[: root.start] + tag + document[root.end :]


def rewrite_document(
    document: str, transform: ScaleTransform, target: TargetFrame
) -> str:
    """Rewrite path geometry and root size attributes.

    Args:
        document: Full SVG text.
        transform: Transform from the detected source frame.
        target: Output canvas.

    Returns:
        Rewritten document.

    Raises:
        PathDataError: If any path data is malformed.
    """
    return rewrite_root(rewrite_paths(document, transform), target)
