from bs4 import BeautifulSoup, Tag

# Tags whose entire subtree is page chrome or scripting, never readable content
BOILERPLATE_TAGS = ("nav", "header", "footer", "form", "script", "style")


def strip_boilerplate(node: BeautifulSoup | Tag) -> BeautifulSoup | Tag:
    """Remove navigation, header, footer, form, script and style subtrees from *node*.

    The node is modified in place and returned for convenience.  Nested
    boilerplate (e.g. a ``<nav>`` inside a ``<header>``) disappears together
    with its ancestor.
    """
    for tag in node.find_all(BOILERPLATE_TAGS):
        # Already gone if an enclosing boilerplate tag was decomposed first
        if tag.decomposed:
            continue
        tag.decompose()
    return node
