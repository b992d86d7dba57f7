#    figgis/parser.py - reading domain objects back out of XML trees.
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
r"""figgis/parser.py provides :class:`XmlParser`, the cursor used to read a tree.

The parser is the mirror image of :class:`figgis.putter.XmlPutter`.  It keeps the
node it was created on (the root, for :meth:`XmlParser.reset`) and a current
node, and domain classes pull their fields from the current node::

    @classmethod
    def parse ( cls, parser ) :
        product = cls( parser.parse_required_attribute( 'product-id' ) )
        product.name = parser.parse_single_required_string( 'name' )
        product.online = parser.parse_single_optional_boolean( 'online', False )
        product.variants = parser.parse_multiple_objects( 'variant', Variant )
        return product

Only direct children are ever considered.  Single-child reads insist on at most
one match: zero matches is a :data:`figgis.NOT_FOUND` mismatch (which the
``optional`` reads turn into their default) and more than one is a
:data:`figgis.MULTIPLE_FOUND` mismatch, which is never defaulted.

Handlers for nested objects are either callables taking ``( parser, *args )``
or objects (usually classes) exposing ``entry_point`` (``parse`` unless told
otherwise).  Whatever a handler does, the cursor is back on the node it was
on before the call once the call returns or raises.
"""
from figgis import InvalidArgument, StructureMismatch, LANGUAGE_UNDEFINED, LANGUAGE_ATTRIBUTE
from figgis import GENERIC, NOT_FOUND, MULTIPLE_FOUND, ROOT_MISMATCH
from figgis import convert, tree
from figgis.tree import Document

__version__ = "0.2"
__author__ = "Shawn Sulma <genosha@470th.org>"
__all__ = [ 'XmlParser', 'resolve_handler' ]

# marks "no child found" where None is a legitimate default.
_MISSING = object()

def resolve_handler ( handler, entry_point ) :
    method = getattr( handler, entry_point, None ) if entry_point else None
    if callable( method ) :
        return method
    if callable( handler ) and not isinstance( handler, type ) :
        return handler
    raise InvalidArgument( "Handler %r has no callable entry point %r." % ( handler, entry_point ) )

class XmlParser ( object ) :
    r"""Cursor over an existing tree.

    ``node`` is an element, a :class:`figgis.tree.Document` or an lxml
    ``ElementTree`` (whose root is used).  If ``name`` is given the node must be
    called that, otherwise a :data:`figgis.ROOT_MISMATCH` error is raised.
    ``document`` lets :meth:`return_to_parent` climb from the root element to
    its document; it is found automatically when ``node`` is a document or
    tree."""

    def __init__ ( self, node, name = None, document = None ) :
        if node is None :
            raise InvalidArgument( "Base node of a parser cannot be None." )
        if hasattr( node, 'getroot' ) :
            document = Document.from_tree( node )
            node = document.root
        elif isinstance( node, Document ) :
            document = node
        if not tree.is_node( node ) :
            raise InvalidArgument( "Base node of a parser must be a node, got %r." % ( node, ) )
        self.document = document
        self.current = node
        if name is not None :
            self.check_node_name( name )
        self._root = node

    def check_node_name ( self, name, graceful = False ) :
        r"""True if the current node is called ``name``.  Otherwise raise a
        :data:`figgis.ROOT_MISMATCH` error, or return False if ``graceful``."""
        observed = tree.get_name( self.current )
        if observed != name :
            if graceful :
                return False
            self.raise_error( 'Expected root node "%s", observed "%s"' % ( name, observed ), ROOT_MISMATCH )
        return True

    def raise_error ( self, message, code = GENERIC ) :
        raise StructureMismatch( self.current, message, code )

    # -- cursor movement --------------------------------------------------

    def get_root_node ( self ) :
        return self._root

    def get_current_node ( self ) :
        return self.current

    def set_current ( self, node ) :
        if not tree.is_node( node ) :
            raise InvalidArgument( "Cannot move the cursor to %r: not a node." % ( node, ) )
        self.current = node

    def reset ( self ) :
        self.current = self._root

    def return_to_parent ( self ) :
        r"""Move to the parent of the current node; stay put if there is none."""
        parent = tree.get_parent( self.current, self.document )
        if parent is not None :
            self.current = parent

    def _invoke ( self, node, handler, extra_args, entry_point ) :
        method = resolve_handler( handler, entry_point )
        previous = self.current
        self.current = node
        try :
            return method( self, *extra_args )
        except StructureMismatch as e :
            e.nested = True
            raise
        finally :
            self.current = previous

    # -- children ---------------------------------------------------------

    def child_exists ( self, name ) :
        return len( self.get_child_nodes( name ) ) > 0

    def get_child_nodes ( self, name ) :
        r"""The direct children of the current node called ``name``, in document order."""
        return [ child for child in tree.get_children( self.current ) if tree.get_name( child ) == name ]

    def get_single_child ( self, name ) :
        r"""The one direct child called ``name``.  Raises :data:`figgis.NOT_FOUND`
        when there is none and :data:`figgis.MULTIPLE_FOUND` when there are more,
        both carrying the current node."""
        children = self.get_child_nodes( name )
        if not children :
            self.raise_error( "Child node not found: " + name, NOT_FOUND )
        if len( children ) > 1 :
            self.raise_error( "Multiple child nodes found: " + name, MULTIPLE_FOUND )
        return children[0]

    def proceed_to_single_child ( self, name ) :
        self.current = self.get_single_child( name )

    def get_child_count ( self ) :
        return len( tree.get_children( self.current ) )

    def get_child_node_by_position ( self, index, advance = False ) :
        r"""The ``index``-th child of the current node (comments included), moving
        onto it if ``advance``.  An index out of range is a
        :data:`figgis.NOT_FOUND` error and leaves the cursor where it is."""
        children = tree.get_children( self.current )
        if not 0 <= index < len( children ) :
            self.raise_error( "No child node at position %d (of %d)" % ( index, len( children ) ), NOT_FOUND )
        if advance :
            self.current = children[index]
        return children[index]

    # -- text values ------------------------------------------------------

    def parse_text ( self ) :
        return tree.get_text( self.current )

    def parse_single_optional_string ( self, name, default = None ) :
        r"""Text of the single child ``name``, or ``default`` when there is no such
        child.  Several such children is still an error."""
        try :
            child = self.get_single_child( name )
        except StructureMismatch as e :
            if not e.absent :
                raise
            return default
        return tree.get_text( child )

    def parse_single_required_string ( self, name ) :
        return tree.get_text( self.get_single_child( name ) )

    # Deprecated.  Floats are read back as text; converting them is the caller's job.
    parse_single_optional_float = parse_single_optional_string
    parse_single_required_float = parse_single_required_string

    def parse_single_optional_boolean ( self, name, default = None ) :
        text = self.parse_single_optional_string( name, _MISSING )
        if text is _MISSING :
            return default
        value = convert.text_to_boolean( text )
        return default if value is None else value

    def parse_single_required_boolean ( self, name ) :
        value = self.parse_single_optional_boolean( name )
        if value is None :
            self.raise_error( "Missing required child node: " + name, NOT_FOUND )
        return value

    def parse_single_optional_date ( self, name, default = None ) :
        text = self.parse_single_optional_string( name, _MISSING )
        if text is _MISSING :
            return default
        return convert.text_to_epoch( text )

    def parse_single_required_date ( self, name ) :
        return convert.text_to_epoch( self.parse_single_required_string( name ) )

    def parse_single_optional_time ( self, name, default = None ) :
        text = self.parse_single_optional_string( name, _MISSING )
        if text is _MISSING :
            return default
        return convert.text_to_time( text )

    def parse_single_required_time ( self, name ) :
        return convert.text_to_time( self.parse_single_required_string( name ) )

    def parse_multiple_strings ( self, name ) :
        return [ tree.get_text( child ) for child in self.get_child_nodes( name ) ]

    def parse_multiple_attribute_strings ( self, name, attribute_name ) :
        r"""``attribute_name`` of every ``name`` child, in document order (``None``
        where a child lacks it)."""
        return [ tree.get_attribute( child, attribute_name ) for child in self.get_child_nodes( name )
            if tree.supports_attributes( child ) ]

    def parse_multiple_strings_by_language ( self, name ) :
        r"""``{ language : text }`` over the ``name`` children.  Children without
        ``xml:lang`` are keyed by :data:`figgis.LANGUAGE_UNDEFINED`; a repeated
        language keeps the last text."""
        values = {}
        for child in self.get_child_nodes( name ) :
            if tree.supports_attributes( child ) :
                values[self._language_of( child )] = tree.get_text( child )
        return values

    # -- nested objects ---------------------------------------------------

    def parse_single_optional_object ( self, name, handler, extra_args = (), default = None, entry_point = 'parse' ) :
        r"""Run ``handler`` on the single child ``name`` and return its result, or
        ``default`` if there is no such child.

        Only the absence of ``name`` itself is defaulted.  A :data:`figgis.NOT_FOUND`
        raised from inside the handler (a required field of the child missing) is
        marked ``nested`` and propagates."""
        try :
            child = self.get_single_child( name )
        except StructureMismatch as e :
            if not e.absent :
                raise
            return default
        return self._invoke( child, handler, extra_args, entry_point )

    def parse_single_required_object ( self, name, handler, extra_args = (), entry_point = 'parse' ) :
        value = self.parse_single_optional_object( name, handler, extra_args, None, entry_point )
        if value is None :
            self.raise_error( "Missing required child node: " + name, NOT_FOUND )
        return value

    def parse_multiple_objects ( self, name, handler, extra_args = (), entry_point = 'parse' ) :
        return [ self._invoke( child, handler, extra_args, entry_point ) for child in self.get_child_nodes( name ) ]

    def parse_multiple_objects_by_attribute ( self, name, attribute_name, handler, extra_args = (), entry_point = 'parse' ) :
        r"""``{ attribute value : parsed object }`` over the ``name`` children.  A
        repeated attribute value keeps the last object."""
        objects = {}
        for child in self.get_child_nodes( name ) :
            if tree.supports_attributes( child ) :
                objects[tree.get_attribute( child, attribute_name )] = self._invoke( child, handler, extra_args, entry_point )
        return objects

    def parse_multiple_objects_by_language ( self, name, handler, extra_args = (), entry_point = 'parse' ) :
        objects = {}
        for child in self.get_child_nodes( name ) :
            if tree.supports_attributes( child ) :
                objects[self._language_of( child )] = self._invoke( child, handler, extra_args, entry_point )
        return objects

    # -- attributes -------------------------------------------------------

    def attribute_exists ( self, name ) :
        return tree.supports_attributes( self.current ) and tree.has_attribute( self.current, name )

    def parse_optional_attribute ( self, name, default = None ) :
        r"""Attribute ``name`` of the current node or ``default``.  Raises
        :class:`figgis.InvalidState` if the current node cannot have attributes."""
        value = tree.get_attribute( self.current, name )
        return default if value is None else value

    def parse_required_attribute ( self, name ) :
        value = tree.get_attribute( self.current, name )
        if value is None :
            self.raise_error( "Missing required attribute: " + name, NOT_FOUND )
        return value

    def parse_optional_boolean_attribute ( self, name, default = None ) :
        value = convert.text_to_boolean( tree.get_attribute( self.current, name ) )
        return default if value is None else value

    def parse_required_boolean_attribute ( self, name ) :
        r"""Boolean value of attribute ``name``.  A missing or empty attribute is a
        :data:`figgis.NOT_FOUND` error."""
        value = convert.text_to_boolean( tree.get_attribute( self.current, name ) )
        if value is None :
            self.raise_error( "Missing boolean attribute: " + name, NOT_FOUND )
        return value

    def _language_of ( self, node ) :
        language = tree.get_attribute( node, LANGUAGE_ATTRIBUTE )
        return LANGUAGE_UNDEFINED if language is None else language

    def parse_language ( self ) :
        return self._language_of( self.current )
