#    figgis/__init__.py - cursor-based mapping between objects and markup trees
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
# dinsdale? crelm? figgis!
r"""FIGGIS is a small library for mapping domain objects to and from XML trees
without committing to any particular schema.

Where :mod:`pickle` (or genosha) decides the shape of the output for you, figgis
leaves the shape entirely to the domain classes.  It supplies two symmetric
cursors which keep track of "the element currently being written" or "the element
currently being read":

    - :class:`figgis.putter.XmlPutter` builds a tree.  Domain objects call its
      structural operations (create a sub-element, output a value, output a nested
      object) and the putter takes care of where in the tree the result lands.
    - :class:`figgis.parser.XmlParser` walks an existing tree.  Domain classes
      call its structural operations (descend to a child, read a value, read a
      nested object) to reconstruct themselves.

A domain type participates by implementing the :class:`Serializable` contract:
an instance method ``produce( putter )`` returning the node it created (or
``None`` for an intentionally empty representation), and a classmethod
``parse( parser, *args )`` returning a new instance built from the parser's
current position.

Primitive values have one canonical text encoding each, handled by
:mod:`figgis.convert`:

    - booleans are ``true``/``false`` (``1``/``0`` and any case accepted on read)
    - dates are ``YYYY-MM-DDTHH:MM:SS.000Z`` in UTC
    - times are ``HH:MM:SS.000Z`` in UTC

Language-tagged values are dicts keyed by language.  The reserved key
:data:`LANGUAGE_UNDEFINED` means "no language" and is written as the absence
of the ``xml:lang`` attribute.

Whole documents are loaded and saved through :mod:`figgis.XML`, which offers
the familiar ``dump``/``dumps``/``load``/``loads`` interface.
"""

__version__ = "0.2"
__author__ = "Shawn Sulma <genosha@470th.org>"
__all__ = [ 'FiggisError', 'InvalidArgument', 'InvalidInput', 'InvalidState', 'StructureMismatch'
    , 'MULTIPLE_FOUND', 'NOT_FOUND', 'ROOT_MISMATCH', 'GENERIC'
    , 'LANGUAGE_UNDEFINED', 'LANGUAGE_ATTRIBUTE', 'Serializable' ]

# reserved language meaning "no xml:lang attribute".  Never written out.
LANGUAGE_UNDEFINED = "und"
LANGUAGE_ATTRIBUTE = "xml:lang"

# StructureMismatch codes.
GENERIC = -1
MULTIPLE_FOUND = 1
NOT_FOUND = 2
ROOT_MISMATCH = 17

class FiggisError ( Exception ) :
    r"""Base class of every error raised by figgis."""

class InvalidArgument ( FiggisError, ValueError ) :
    r"""The caller broke an operation's contract: a required value or object was
    ``None``, an object does not implement :class:`Serializable`, a cursor was
    constructed from something that is not a node."""

class InvalidInput ( FiggisError, ValueError ) :
    r"""A value could not be encoded to or decoded from its canonical text form."""

class InvalidState ( FiggisError, RuntimeError ) :
    r"""The operation is not supported by the node the cursor is on (attributes of
    a document node, the parent of a document)."""

class StructureMismatch ( FiggisError ) :
    r"""The tree does not have the shape the caller expected.

    ``element`` is the node the cursor was on when the mismatch was detected (it
    may be ``None`` when there was no tree at all), ``code`` is one of
    :data:`NOT_FOUND`, :data:`MULTIPLE_FOUND`, :data:`ROOT_MISMATCH` or
    :data:`GENERIC`.  ``nested`` is false while the error is still at the level
    where it was raised and becomes true once it escapes a handler invoked by the
    parser, so that "the child I asked for is missing" can be told apart from
    "something inside the child is missing"."""
    def __init__ ( self, element, message = "Unknown parser error", code = GENERIC ) :
        FiggisError.__init__( self, message )
        self.element = element
        self.message = message
        self.code = code
        self.nested = False

    @property
    def absent ( self ) :
        r"""True if this error only says that the immediate target was not found."""
        return self.code == NOT_FOUND and not self.nested

    def __repr__ ( self ) :
        return "<StructureMismatch: code=%d nested=%s message=%r>" % ( self.code, self.nested, self.message )

class Serializable ( object ) :
    r"""The contract a domain type implements to be written by a putter and read by
    a parser.  Subclassing is optional; the putter only requires a callable
    ``produce`` attribute and the parser only requires the handler it is given."""

    # the element name this type is normally written as.  Informational.
    tag_name = None

    def produce ( self, putter ) :
        r"""Build this object's representation under ``putter``'s current node and
        return the node created, or ``None`` if there is nothing to write."""
        raise NotImplementedError( "%s does not implement produce()" % type( self ).__name__ )

    @classmethod
    def parse ( cls, parser, *args ) :
        r"""Return a new instance read from ``parser``'s current node."""
        raise NotImplementedError( "%s does not implement parse()" % cls.__name__ )

    def as_xml ( self, pretty_print = False ) :
        r"""Render this object alone as an XML document string."""
        from figgis.XML import dumps
        return dumps( self, pretty_print = pretty_print )
