"""RSS/XML feed parser implementation.

Converts any RSS-like document into the generic element list. Nothing is
feed-specific except the choice of container: the ``channel`` element when
present, the document root otherwise.

Quirks kept for compatibility with existing consumers:

* an item that carries attributes is recorded as its attribute map only,
  its own text is dropped;
* same-named entries overwrite each other, last write wins, and namespaced
  items are merged after the un-namespaced pass, so ``media:content`` can
  replace a plain ``content`` in the same element;
* namespaced children of the container itself are not walked.
"""

import structlog

from feedjson.exceptions import ParseError
from feedjson.models.parsed import WELL_KNOWN_PROPERTIES, Element, ItemValue, ParsedFeed
from feedjson.parsers.tree import XmlDocument, XmlNode, build_document

logger = structlog.get_logger()


class RssParser:
    """Parser for RSS/XML feeds."""

    format = "rss"

    def __init__(self) -> None:
        self._contents: bytes | str | None = None
        self._properties: dict[str, str] = {}

    def set_contents(self, contents: bytes | str) -> "RssParser":
        """Replace the contents to parse and forget previous properties."""
        self._contents = contents
        self._properties = {}
        return self

    def get_contents(self) -> bytes | str | None:
        return self._contents

    @property
    def properties(self) -> dict[str, str]:
        return dict(self._properties)

    def get_property(self, name: str) -> str | None:
        return self._properties.get(name)

    def process(self) -> ParsedFeed:
        """Parse the current contents into the generic element list.

        Returns:
            One element per direct child of the feed container.

        Raises:
            ParseError: When no contents were set or the markup is malformed.
        """
        if self._contents is None:
            raise ParseError("No contents set")

        document = build_document(self._contents)
        container = self._select_container(document.root)

        elements: ParsedFeed = []
        properties: dict[str, str] = {}
        # Extension elements on the channel (atom:link, itunes:*) are skipped
        for child in container.children_in(container.namespace):
            elements.append(self._process_element(child, document, container.namespace))
            if not child.has_children() and child.name in WELL_KNOWN_PROPERTIES:
                properties[child.name] = child.text.strip()

        self._properties = properties
        logger.debug(
            "Feed parsed",
            elements=len(elements),
            namespaces=list(document.namespaces),
            ttl=properties.get("ttl"),
        )
        return elements

    def _select_container(self, root: XmlNode) -> XmlNode:
        if root.name == "channel":
            return root
        channel = root.first_child("channel")
        return channel if channel is not None else root

    def _process_element(
        self,
        node: XmlNode,
        document: XmlDocument,
        own_namespace: str | None,
    ) -> Element:
        if not node.has_children():
            return {node.name: node.text}

        items: dict[str, ItemValue] = {}
        for item in node.children_in(own_namespace):
            if not item.attributes:
                items[item.name] = item.text
            else:
                self._merge_attributes(items, item)

        # Namespaced items go second so they win on name clashes
        for uri in document.namespaces.values():
            if uri == own_namespace:
                continue
            for item in node.children_in(uri):
                if item.attributes:
                    self._merge_attributes(items, item)

        element: Element = {}
        if items:
            element["item"] = items
        return element

    def _merge_attributes(self, items: dict[str, ItemValue], item: XmlNode) -> None:
        current = items.get(item.name)
        if not isinstance(current, dict):
            current = {}
            items[item.name] = current
        current.update(item.attributes)
