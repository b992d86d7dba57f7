#    figgis/putter.py - building XML trees from domain objects.
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
r"""figgis/putter.py provides :class:`XmlPutter`, the cursor used to write a tree.

A putter remembers three nodes:

    ``document``    the :class:`figgis.tree.Document` being written.  Fixed.
    ``base``        the node the putter was created for; :meth:`XmlPutter.reset`
                    returns here.
    ``current``     where the next element will be appended.

Domain objects write themselves through it, typically::

    def produce ( self, putter ) :
        node = putter.create_sub_element( 'product', { 'product-id' : self.id } )
        putter.output_required_string( 'name', self.name )
        putter.output_optional_boolean( 'online', self.online )
        putter.output_multiple_objects( self.variants )
        putter.ascend()
        return node

Value outputs (strings, booleans, dates, times) never move the cursor: the
child is created, filled and the cursor is back where it started.
:meth:`XmlPutter.create_sub_element` moves into the new element unless told
otherwise, and it is up to the caller to :meth:`XmlPutter.ascend` again.

``required`` outputs refuse ``None`` with :class:`figgis.InvalidArgument`;
``optional`` outputs write nothing and return ``None``; ``nullable`` outputs
always write the element, empty if need be.
"""
from figgis import InvalidArgument, InvalidInput, InvalidState, LANGUAGE_UNDEFINED, LANGUAGE_ATTRIBUTE
from figgis import convert, tree
from figgis.tree import Document

__version__ = "0.2"
__author__ = "Shawn Sulma <genosha@470th.org>"
__all__ = [ 'XmlPutter', 'is_cdata_required' ]

def is_cdata_required ( text ) :
    r"""True if ``text`` holds ``&``, ``<`` or ``>``.

    Some producers of the documents we exchange export these characters without
    escaping them, so already-escaped entities such as ``&amp;`` count too.  This
    is a substring check, not validation."""
    return '&' in text or '<' in text or '>' in text

def _text ( value ) :
    return value if isinstance( value, str ) else str( value )

def _language_attributes ( language ) :
    if language == LANGUAGE_UNDEFINED :
        return {}
    return { LANGUAGE_ATTRIBUTE : language }

class XmlPutter ( object ) :
    r"""Cursor over a tree under construction.

    ``document`` is an existing :class:`figgis.tree.Document` (or an lxml
    ``ElementTree``), or ``None`` to start a new one.  ``base`` is either a node
    already in that document, a tag name, or ``None``.  A tag name creates the
    base element (with ``value`` as its text if given), which becomes the
    document's root when the document is still empty and is otherwise left
    detached for the caller to attach.  ``None`` uses the document itself as the
    base, so the first element created becomes the root.

    ``cdata_hook`` replaces :func:`is_cdata_required` when deciding whether a
    value is written as a CDATA section."""

    def __init__ ( self, document = None, base = None, value = None, cdata_hook = None ) :
        if document is None :
            document = Document()
        elif not isinstance( document, Document ) :
            if not hasattr( document, 'getroot' ) :
                raise InvalidArgument( "Expecting document to be a Document, an ElementTree or None." )
            document = Document.from_tree( document )
        self.document = document
        self.cdata_hook = cdata_hook or is_cdata_required
        if base is None :
            self._base = document
        elif isinstance( base, str ) :
            self._base = tree.create_node( base, _text( value ) if value not in ( None, "" ) else None )
            if document.root is None :
                document.set_root( self._base )
        elif tree.is_node( base ) :
            self._base = base
        else :
            raise InvalidArgument( "Expecting base tag to be a node, string or None." )
        self.current = self._base

    @property
    def base ( self ) :
        return self._base

    def get_base_node ( self ) :
        return self._base

    def get_current_node ( self ) :
        return self.current

    # -- cursor movement --------------------------------------------------

    def descend ( self, node ) :
        r"""Make ``node`` the current node.  Whether ``node`` belongs under the base
        is the caller's business."""
        if not tree.is_node( node ) :
            raise InvalidArgument( "Cannot move the cursor to %r: not a node." % ( node, ) )
        self.current = node

    def ascend ( self ) :
        r"""Move to the parent of the current node.  Raises
        :class:`figgis.InvalidState` at the document, which has no parent."""
        parent = tree.get_parent( self.current, self.document )
        if parent is None :
            raise InvalidState( "Cannot ascend from %s: it has no parent." % tree.get_name( self.current ) )
        self.current = parent

    def reset ( self ) :
        self.current = self._base

    # -- attributes and raw content ---------------------------------------

    def set_attributes ( self, attributes = None ) :
        r"""Set each attribute on the current node, replacing existing values.
        ``None`` values are skipped; they never remove an attribute."""
        for key, value in ( attributes or {} ).items() :
            if value is None :
                continue
            tree.set_attribute( self.current, key, _text( value ) )

    def set_boolean_attributes ( self, attributes = None ) :
        r"""As :meth:`set_attributes`, writing each value as ``true``/``false``."""
        for key, value in ( attributes or {} ).items() :
            text = convert.boolean_to_text( value )
            if text is None :
                continue
            tree.set_attribute( self.current, key, text )

    def output_language ( self, language ) :
        r"""Tag the current node with ``language``; the undefined language writes nothing."""
        self.set_attributes( _language_attributes( language ) )

    def append_subtree ( self, subtree ) :
        r"""Attach a separately built element (or a document's root) as the last
        child of the current node.  The cursor does not move."""
        if isinstance( subtree, Document ) :
            subtree = subtree.root
        if not tree.is_node( subtree ) :
            raise InvalidArgument( "Cannot append %r: not a node." % ( subtree, ) )
        tree.append_child( self.current, subtree )

    def output_text ( self, text ) :
        r"""Append literal text to the current node, after any existing children.
        Returns the element that now carries the text."""
        return tree.set_text( self.current, _text( text ) )

    # -- elements ---------------------------------------------------------

    def create_sub_element ( self, name, attributes = None, descend = True ) :
        r"""Create element ``name`` under the current node and return it.  The cursor
        is left on the new element unless ``descend`` is false."""
        previous = self.current
        element = tree.create_node( name )
        tree.append_child( previous, element )
        self.current = element
        try :
            self.set_attributes( attributes )
        finally :
            if not descend :
                self.current = previous
        return element

    def output_nullable_string ( self, name, value, attributes = None ) :
        r"""Create element ``name`` holding ``value`` whether or not there is a value;
        ``None`` gives an empty element."""
        text = "" if value is None else _text( value )
        cdata = bool( text ) and self.cdata_hook( text ) and ']]>' not in text
        child = tree.create_node( name )
        if text :
            try :
                child.text = tree.create_text_node( text, cdata = cdata )
            except ValueError as e :
                raise InvalidInput( "Element %s cannot hold %r: %s" % ( name, text, e ) ) from e
        tree.append_child( self.current, child )
        if attributes :
            previous = self.current
            self.current = child
            try :
                self.set_attributes( attributes )
            finally :
                self.current = previous
        return child

    def output_optional_string ( self, name, value, attributes = None ) :
        if value is None :
            return None
        return self.output_nullable_string( name, value, attributes )

    def output_required_string ( self, name, value, attributes = None ) :
        if value is None :
            if tree.supports_attributes( self._base ) :
                raise InvalidArgument( "Element %s in %s cannot be None." % ( name, tree.get_name( self._base ) ) )
            raise InvalidArgument( "Element %s cannot be None." % name )
        return self.output_nullable_string( name, value, attributes )

    def output_nullable_boolean ( self, name, value, attributes = None ) :
        return self.output_nullable_string( name, convert.boolean_to_text( value ), attributes )

    def output_optional_boolean ( self, name, value, attributes = None ) :
        return self.output_optional_string( name, convert.boolean_to_text( value ), attributes )

    def output_required_boolean ( self, name, value, attributes = None ) :
        return self.output_required_string( name, convert.boolean_to_text( value ), attributes )

    def output_nullable_date ( self, name, value, attributes = None ) :
        return self.output_nullable_string( name, convert.epoch_to_date_text( value ), attributes )

    def output_optional_date ( self, name, value, attributes = None ) :
        return self.output_optional_string( name, convert.epoch_to_date_text( value ), attributes )

    def output_required_date ( self, name, value, attributes = None ) :
        return self.output_required_string( name, convert.epoch_to_date_text( value ), attributes )

    def output_optional_date_only ( self, name, value, attributes = None ) :
        return self.output_optional_string( name, convert.epoch_to_date_only_text( value ), attributes )

    def output_required_date_only ( self, name, value, attributes = None ) :
        return self.output_required_string( name, convert.epoch_to_date_only_text( value ), attributes )

    def output_nullable_time ( self, name, value, attributes = None ) :
        return self.output_nullable_string( name, convert.epoch_to_time_text( value ), attributes )

    def output_optional_time ( self, name, value, attributes = None ) :
        return self.output_optional_string( name, convert.epoch_to_time_text( value ), attributes )

    def output_required_time ( self, name, value, attributes = None ) :
        return self.output_required_string( name, convert.epoch_to_time_text( value ), attributes )

    # Deprecated.  Floats are written as their string form; format them before calling.
    output_nullable_float = output_nullable_string
    output_optional_float = output_optional_string
    output_required_float = output_required_string

    # -- repeated elements ------------------------------------------------

    def output_multiple_strings ( self, name, values ) :
        r"""One ``name`` element per value, in order; ``None`` values are skipped.
        ``values`` may be a sequence or a dict (its values are used)."""
        if isinstance( values, dict ) :
            values = values.values()
        elements = []
        for value in values or () :
            element = self.output_optional_string( name, value )
            if element is not None :
                elements.append( element )
        return elements

    def output_multiple_attribute_strings ( self, name, attribute_name, values ) :
        r"""One empty ``name`` element per value, carrying the value in ``attribute_name``."""
        if isinstance( values, dict ) :
            values = values.values()
        return [ self.create_sub_element( name, { attribute_name : value }, descend = False ) for value in values or () ]

    def output_multiple_strings_by_language ( self, name, values ) :
        r"""One ``name`` element per ``language -> value`` entry, in the dict's own
        order, each tagged with ``xml:lang`` unless the language is undefined."""
        elements = []
        for language, value in ( values or {} ).items() :
            element = self.output_optional_string( name, value, _language_attributes( language ) )
            if element is not None :
                elements.append( element )
        return elements

    # -- nested objects ---------------------------------------------------

    def output_optional_object ( self, obj ) :
        r"""Let ``obj`` write itself under the current node and return what its
        ``produce`` returned.  ``None`` writes nothing.  Raises
        :class:`figgis.InvalidArgument` if ``obj`` has no ``produce``.  If
        ``produce`` fails the cursor is put back before the error propagates."""
        if obj is None :
            return None
        produce = getattr( obj, 'produce', None )
        if not callable( produce ) :
            raise InvalidArgument( "%s does not implement the Serializable contract." % type( obj ).__name__ )
        previous = self.current
        try :
            return produce( self )
        except Exception :
            self.current = previous
            raise

    def output_required_object ( self, obj ) :
        if obj is None :
            raise InvalidArgument( "Provided object must not be None." )
        previous = self.current
        node = self.output_optional_object( obj )
        if node is None :
            self.current = previous
            raise InvalidArgument( "Requested object is required, but its XML representation is empty." )
        return node

    def output_multiple_objects ( self, objects ) :
        elements = []
        for obj in objects or () :
            element = self.output_optional_object( obj )
            if element is not None :
                elements.append( element )
        return elements

    def output_objects_by_language ( self, objects ) :
        r"""Write each ``language -> object`` entry and tag the node each object
        produced (not the current node) with its language."""
        elements = []
        for language, obj in ( objects or {} ).items() :
            previous = self.current
            element = self.output_optional_object( obj )
            self.current = previous
            if element is None :
                continue
            for key, value in _language_attributes( language ).items() :
                tree.set_attribute( element, key, value )
            elements.append( element )
        return elements
