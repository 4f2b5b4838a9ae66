"""Typed XML tree model.

Feed markup is loaded with lxml and converted once into plain ``XmlNode``
objects. Feed traversal works on these nodes only and never touches lxml
elements directly.
"""

from dataclasses import dataclass, field

from lxml import etree

from feedjson.exceptions import ParseError

# Entities are not resolved and nothing is fetched over the network.
_XML_PARSER = etree.XMLParser(
    resolve_entities=False,
    no_network=True,
    remove_comments=True,
    remove_pis=True,
    huge_tree=False,
)


@dataclass
class XmlNode:
    """A single element of a parsed document.

    Attributes:
        name: Local name, without namespace prefix.
        namespace: Namespace URI, or None for un-namespaced elements.
        prefix: Prefix used in the document, if any.
        text: Character data directly inside the element (CDATA included,
            descendants' text excluded).
        attributes: Un-namespaced attributes in document order.
        namespaced_attributes: Namespaced attributes keyed ``{uri}name``.
        children: Child elements in document order.
    """

    name: str
    namespace: str | None = None
    prefix: str | None = None
    text: str = ""
    attributes: dict[str, str] = field(default_factory=dict)
    namespaced_attributes: dict[str, str] = field(default_factory=dict)
    children: list["XmlNode"] = field(default_factory=list)

    def has_children(self) -> bool:
        return bool(self.children)

    def children_in(self, namespace: str | None) -> list["XmlNode"]:
        """Children whose namespace URI equals ``namespace``."""
        return [child for child in self.children if child.namespace == namespace]

    def first_child(self, name: str) -> "XmlNode | None":
        for child in self.children:
            if child.name == name:
                return child
        return None


@dataclass
class XmlDocument:
    """Root node plus every namespace used in the document.

    ``namespaces`` maps prefix to URI in order of first appearance; the
    default namespace, when declared, is stored under the empty prefix.
    """

    root: XmlNode
    namespaces: dict[str, str] = field(default_factory=dict)


def build_document(raw: bytes | str) -> XmlDocument:
    """Parse markup into an ``XmlDocument``.

    Args:
        raw: Raw feed bytes (or text).

    Returns:
        The typed document tree.

    Raises:
        ParseError: When the content is empty or not well-formed XML.
    """
    if isinstance(raw, str):
        raw = raw.encode("utf-8")
    if not raw or not raw.strip():
        raise ParseError("Empty document")

    try:
        root = etree.fromstring(raw, parser=_XML_PARSER)
    except etree.XMLSyntaxError as e:
        raise ParseError(str(e)) from e
    except ValueError as e:
        # lxml refuses some inputs (e.g. str with an encoding declaration)
        raise ParseError(str(e)) from e

    namespaces: dict[str, str] = {}
    return XmlDocument(root=_convert(root, namespaces), namespaces=namespaces)


def _convert(element: etree._Element, namespaces: dict[str, str]) -> XmlNode:
    qname = etree.QName(element)
    uri = qname.namespace
    if uri is not None:
        _register(namespaces, element.prefix or "", uri)

    attributes: dict[str, str] = {}
    namespaced_attributes: dict[str, str] = {}
    for key, value in element.attrib.items():
        attr_name = etree.QName(key)
        if attr_name.namespace is None:
            attributes[attr_name.localname] = value
        else:
            namespaced_attributes[key] = value
            _register(
                namespaces,
                _prefix_for(element, attr_name.namespace),
                attr_name.namespace,
            )

    children: list[XmlNode] = []
    text_parts = [element.text or ""]
    for child in element:
        if not isinstance(child.tag, str):
            # Entity references and similar non-element nodes
            text_parts.append(child.tail or "")
            continue
        children.append(_convert(child, namespaces))
        text_parts.append(child.tail or "")

    return XmlNode(
        name=qname.localname,
        namespace=uri,
        prefix=element.prefix,
        text="".join(text_parts),
        attributes=attributes,
        namespaced_attributes=namespaced_attributes,
        children=children,
    )


def _register(namespaces: dict[str, str], prefix: str, uri: str) -> None:
    if uri in namespaces.values():
        return
    # The same prefix may be bound to different URIs in different scopes
    key = prefix
    counter = 1
    while key in namespaces:
        key = f"{prefix}{counter}"
        counter += 1
    namespaces[key] = uri


def _prefix_for(element: etree._Element, uri: str) -> str:
    for prefix, ns_uri in element.nsmap.items():
        if ns_uri == uri:
            return prefix or ""
    # xml:lang and friends use the implicit xml prefix
    return "xml" if uri == "http://www.w3.org/XML/1998/namespace" else ""
