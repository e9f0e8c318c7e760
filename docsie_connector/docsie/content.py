"""
Docsie content converter.

Converts Docsie article documents (Draft.js blocks, some of which hold a
nested ProseMirror tree) to Markdown for ingestion into Maven.

Block types seen in real data include figure, unstyled, header-step,
unordered-list-item, header-two, ordered-list-item, header-three, content,
banner, tiles, video, embedd, gist-block and chart.
"""

from typing import Callable, Dict, List, Optional

from ..models import DocBlock, DocContent, ProseMirrorNode

ORDERED_LIST_ITEM = "ordered-list-item"


def doc_to_markdown(doc: Optional[DocContent]) -> str:
    """
    Convert an article's block list to Markdown.

    Args:
        doc: The article document, may be None

    Returns:
        Markdown text, blocks separated by a blank line
    """
    if doc is None or not doc.blocks:
        return ""

    parts: List[str] = []
    ordered_index = 0

    for block in doc.blocks:
        if block.type == ORDERED_LIST_ITEM:
            ordered_index += 1
            line = f"{ordered_index}. {block.text or ''}"
        else:
            ordered_index = 0
            line = convert_block(block)

        if line:
            parts.append(line)

    return "\n\n".join(parts).strip()


def convert_block(block: DocBlock) -> Optional[str]:
    """
    Convert a single top-level block.

    Returns None for blocks that have no textual representation.
    Unknown block types fall back to their plain text.
    """
    converter = _BLOCK_CONVERTERS.get(block.type)
    if converter is None:
        return block.text or None
    return converter(block)


def _text(block: DocBlock) -> str:
    return block.text or ""


def _heading(level: int) -> Callable[[DocBlock], str]:
    prefix = "#" * level
    return lambda block: f"{prefix} {_text(block)}"


def _src(block: DocBlock) -> str:
    return str(block.data.get("src") or "")


def _label(block: DocBlock) -> str:
    return str(block.data.get("label") or "")


def _figure(block: DocBlock) -> str:
    src = _src(block)
    if not src:
        return ""
    return f"![{_label(block)}]({src})"


def _video(block: DocBlock) -> str:
    src = _src(block)
    if not src:
        return ""
    return f"[{_label(block) or 'Video'}]({src})"


def _embed(block: DocBlock) -> str:
    src = _src(block)
    if not src:
        return ""
    return f"[Embedded content]({src})"


def _gist(block: DocBlock) -> str:
    src = _src(block)
    if not src:
        return _text(block)
    return f"[Code Gist]({src})"


def _container(block: DocBlock) -> str:
    """banner and content blocks: each nested node becomes a paragraph."""
    if not block.content:
        return _text(block)
    return _join_paragraphs(extract_node_text(node) for node in block.content)


def _tiles(block: DocBlock) -> str:
    """tiles blocks hold one nested document per tile."""
    texts = []
    for tile in block.content:
        for inner in tile.content:
            texts.append(extract_node_text(inner))
    return _join_paragraphs(texts)


def _join_paragraphs(texts) -> str:
    return "\n\n".join(text for text in texts if text)


_BLOCK_CONVERTERS: Dict[str, Callable[[DocBlock], Optional[str]]] = {
    "unstyled": _text,
    "header-one": _heading(1),
    "header-two": _heading(2),
    "header-three": _heading(3),
    "header-step": lambda block: f"**{_text(block)}**",
    "unordered-list-item": lambda block: f"- {_text(block)}",
    "figure": _figure,
    "video": _video,
    "embedd": _embed,
    "gist-block": _gist,
    "banner": _container,
    "content": _container,
    "tiles": _tiles,
    "chart": lambda block: None,
}


def extract_node_text(node: ProseMirrorNode) -> str:
    """
    Recursively render a ProseMirror node as Markdown.

    Args:
        node: Node from a container block's nested tree

    Returns:
        Markdown text for the node and its children
    """
    if node.type == "text":
        return node.text or ""

    if not node.content:
        return node.text or ""

    child_texts = [text for text in (extract_node_text(child) for child in node.content) if text]
    joined = "".join(child_texts)

    if node.type == "heading":
        return f"{'#' * _heading_level(node)} {joined}"

    if node.type in ("bulletList", "bullet_list"):
        return "\n".join(f"- {text}" for text in child_texts)

    if node.type in ("orderedList", "ordered_list"):
        return "\n".join(f"{i}. {text}" for i, text in enumerate(child_texts, 1))

    if node.type == "blockquote":
        return "\n".join(f"> {line}" for text in child_texts for line in text.split("\n"))

    if node.type in ("codeBlock", "code_block"):
        return f"```\n{joined}\n```"

    if node.type == "doc":
        return "\n\n".join(child_texts)

    # paragraph, listItem and unknown types
    return joined


def _heading_level(node: ProseMirrorNode) -> int:
    """Heading level from the node attrs; anything but a positive int means 2."""
    level = node.attrs.get("level")
    if isinstance(level, str) and level.isdigit():
        level = int(level)
    if isinstance(level, bool) or not isinstance(level, int) or level < 1:
        return 2
    return level
