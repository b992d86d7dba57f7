#    figgis/tree.py - the node operations figgis needs from an XML tree.
#    Copyright (C) 2009 Shawn Sulma <genosha@470th.org>
#
#    This program is free software: you can redistribute it and/or modify
#    it under the terms of the GNU General Public License as published by
#    the Free Software Foundation, either version 3 of the License, or
#    (at your option) any later version.
#
#    This program is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU General Public License for more details.
#
#    You should have received a copy of the GNU General Public License
#    along with this program.  If not, see <http://www.gnu.org/licenses/>.
r"""figgis/tree.py adapts :mod:`lxml.etree` to the small set of node operations the
cursors use, so that the cursors never touch lxml directly.

Two kinds of node appear:

    - lxml elements (and the comments and processing instructions between them)
    - :class:`Document`, which plays the part of the DOM document node.  It owns
      at most one root element, is named ``#document``, has no attributes and no
      parent.  lxml does not know about it, so :func:`get_parent` only reports a
      :class:`Document` as the parent of its root when it is handed the document.

Attribute names prefixed ``xml:`` (in practice only ``xml:lang``) are stored in
the XML namespace; no other namespace handling is done.
"""
from lxml import etree

from figgis import InvalidState

__all__ = [ 'Document', 'is_node', 'supports_attributes', 'create_node', 'create_text_node', 'append_child'
    , 'set_attribute', 'has_attribute', 'get_attribute', 'get_parent', 'get_children', 'get_name'
    , 'get_text', 'set_text' ]

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
DOCUMENT_NAME = "#document"
COMMENT_NAME = "#comment"
PI_NAME = "#processing-instruction"

class Document ( object ) :
    r"""A document node: the container of a single root element."""
    __slots__ = ( 'root', )

    def __init__ ( self, root = None ) :
        self.root = root

    @classmethod
    def from_tree ( cls, tree ) :
        r"""Wrap an lxml ``ElementTree`` (or the root element of one)."""
        return cls( tree.getroot() if hasattr( tree, 'getroot' ) else tree )

    def set_root ( self, element ) :
        if self.root is not None :
            raise InvalidState( "Document already has a root element <%s>" % self.root.tag )
        self.root = element

    @property
    def tree ( self ) :
        r"""The lxml ``ElementTree`` of this document (``None`` while it is empty)."""
        return None if self.root is None else etree.ElementTree( self.root )

    def tostring ( self, encoding = "UTF-8", pretty_print = False, xml_declaration = True ) :
        if self.root is None :
            raise InvalidState( "Cannot serialize an empty document" )
        if encoding in ( str, "unicode" ) :
            return etree.tostring( self.root, encoding = "unicode", pretty_print = pretty_print )
        return etree.tostring( self.root, encoding = encoding, pretty_print = pretty_print, xml_declaration = xml_declaration )

    def __repr__ ( self ) :
        return "<Document: root=%s>" % ( None if self.root is None else self.root.tag )

def _attribute_name ( name ) :
    if name.startswith( "xml:" ) :
        return "{%s}%s" % ( XML_NAMESPACE, name[4:] )
    return name

def is_node ( node ) :
    return isinstance( node, ( Document, etree._Element ) )

def supports_attributes ( node ) :
    r"""True for real elements; False for documents, comments and processing instructions."""
    return isinstance( node, etree._Element ) and isinstance( node.tag, str )

def _require_attributes ( node ) :
    if not supports_attributes( node ) :
        raise InvalidState( "Invalid state: %s does not support attributes." % get_name( node ) )

def create_node ( name, text = None ) :
    element = etree.Element( name )
    if text is not None :
        element.text = text
    return element

def create_text_node ( text, cdata = False ) :
    r"""lxml has no free-standing text nodes; this returns the object to assign to
    an element's ``text``.  With ``cdata`` the text is written as a CDATA section."""
    return etree.CDATA( text ) if cdata else text

def append_child ( parent, child ) :
    if isinstance( parent, Document ) :
        parent.set_root( child )
    else :
        parent.append( child )

def set_attribute ( node, name, value ) :
    _require_attributes( node )
    node.set( _attribute_name( name ), value )

def has_attribute ( node, name ) :
    _require_attributes( node )
    return _attribute_name( name ) in node.attrib

def get_attribute ( node, name ) :
    r"""Return the attribute's value, or ``None`` if it is not set."""
    _require_attributes( node )
    return node.get( _attribute_name( name ) )

def get_parent ( node, document = None ) :
    r"""The parent of ``node``.  A root element's parent is ``document`` when
    ``node`` is that document's root, otherwise ``None``."""
    if isinstance( node, Document ) :
        return None
    parent = node.getparent()
    if parent is None and document is not None and document.root is node :
        return document
    return parent

def get_children ( node ) :
    if isinstance( node, Document ) :
        return [] if node.root is None else [ node.root ]
    return list( node )

def get_name ( node ) :
    if isinstance( node, Document ) :
        return DOCUMENT_NAME
    if isinstance( node, etree._Comment ) :
        return COMMENT_NAME
    if isinstance( node, etree._ProcessingInstruction ) :
        return PI_NAME
    return node.tag

def get_text ( node ) :
    r"""The string-value of ``node``: all descendant text, concatenated."""
    if isinstance( node, Document ) :
        return "" if node.root is None else get_text( node.root )
    if not isinstance( node.tag, str ) :
        return node.text or ""
    return str( node.xpath( "string()" ) )

def set_text ( node, text ) :
    r"""Append ``text`` after the last child of ``node`` (to its ``text`` when it has
    no children).  Returns the element now carrying the text."""
    if isinstance( node, Document ) :
        raise InvalidState( "Cannot add text directly to a document" )
    children = list( node )
    if children :
        last = children[-1]
        last.tail = ( last.tail or "" ) + text
        return last
    node.text = ( node.text or "" ) + text
    return node
