#    figgis/XML.py - loading and saving whole XML documents with figgis.
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
r"""figgis/XML.py is the thin driver between documents on disk (or in strings) and
the figgis cursors.  The interface follows :mod:`pickle` and :mod:`json`:

    ``dumps( obj )`` / ``dump( obj, f )``
        write ``obj`` (anything with ``produce``) as the root of a new document.

    ``loads( s, connector )`` / ``load( f, connector )``
        parse the markup, look at the root element's tag, ask ``connector`` for the
        handler registered for that tag and return what the handler parses.

A connector is a :class:`Connector`, a plain dict of ``tag -> handler``, or any
object with a ``handler_for_root( tag )`` method.  Handlers are the same as
everywhere else in figgis: classes exposing ``parse`` or plain callables.

Markup that cannot be parsed at all, and root tags nobody registered, are
reported as :class:`figgis.StructureMismatch`.
"""
import logging

from lxml import etree

from figgis import StructureMismatch
from figgis.parser import XmlParser, resolve_handler
from figgis.putter import XmlPutter
from figgis.tree import Document

__version__ = "0.2"
__author__ = "Shawn Sulma <genosha@470th.org>"
__all__ = [ 'Connector', 'marshal', 'unmarshal', 'dumps', 'dump', 'loads', 'load' ]

log = logging.getLogger( __name__ )

ENCODING = "UTF-8"

def xml_parser ( encoding = None ) :
    r"""The lxml parser used for loading.  Whitespace-only text between elements is
    dropped and neither external entities nor the network are touched.  ``encoding``
    overrides whatever the document declares."""
    return etree.XMLParser( remove_blank_text = True, resolve_entities = False, no_network = True, encoding = encoding )

class Connector ( object ) :
    r"""Maps root element names to the handler that parses documents with that root."""
    def __init__ ( self, handlers = None ) :
        self.handlers = dict( handlers or {} )

    def register ( self, name, handler = None ) :
        r"""Register ``handler`` for root ``name``.  Without ``handler`` this returns a
        decorator, so a class can register itself::

            @connector.register( 'catalog' )
            class Catalog ( Serializable ) : ...
        """
        if handler is None :
            return lambda handler : self.register( name, handler )
        self.handlers[name] = handler
        return handler

    def handler_for_root ( self, name ) :
        return self.handlers.get( name )

    def __repr__ ( self ) :
        return "<Connector: %s>" % ", ".join( sorted( self.handlers ) )

def _handler_for_root ( connector, name ) :
    if hasattr( connector, 'handler_for_root' ) :
        return connector.handler_for_root( name )
    return connector.get( name )

def marshal ( obj ) :
    r"""Write ``obj`` into a new :class:`figgis.tree.Document` and return it."""
    putter = XmlPutter()
    putter.output_required_object( obj )
    return putter.document

def unmarshal ( document, connector ) :
    r"""Parse an already-loaded ``document`` (a :class:`figgis.tree.Document`, an lxml
    ``ElementTree`` or a root element) with the handler ``connector`` gives for its
    root tag."""
    if not isinstance( document, Document ) :
        document = Document.from_tree( document )
    root = document.root
    if root is None :
        raise StructureMismatch( None, "The document has no root element." )
    handler = _handler_for_root( connector, root.tag )
    if handler is None :
        raise StructureMismatch( root, "Entity collection class not mapped for root node: %s" % root.tag )
    log.debug( "dispatching <%s> to %r", root.tag, handler )
    parser = XmlParser( root, document = document )
    return resolve_handler( handler, 'parse' )( parser )

def dumps ( obj, pretty_print = False ) :
    r"""Return ``obj`` written as an XML document string."""
    return marshal( obj ).tostring( encoding = str, pretty_print = pretty_print )

def dump ( obj, f, pretty_print = False ) :
    r"""Write ``obj`` as an XML document to ``f`` (a binary file-like object or a
    file name)."""
    marshal( obj ).tree.write( f, encoding = ENCODING, xml_declaration = True, pretty_print = pretty_print )

def loads ( s, connector ) :
    r"""Parse the XML string (or bytes) ``s`` and return the object its root handler builds."""
    parser = xml_parser()
    if isinstance( s, str ) :
        s = s.encode( ENCODING )
        parser = xml_parser( ENCODING )
    try :
        root = etree.fromstring( s, parser )
    except etree.XMLSyntaxError as e :
        log.warning( "unable to load XML from string: %s", e )
        raise StructureMismatch( None, "Unable to load the XML from string: %s" % e ) from e
    return unmarshal( Document( root ), connector )

def load ( f, connector ) :
    r"""Read an XML document from the file-like object (or file name) ``f`` and return
    the object its root handler builds."""
    try :
        document = etree.parse( f, xml_parser() )
    except etree.XMLSyntaxError as e :
        log.warning( "unable to load XML from %r: %s", f, e )
        raise StructureMismatch( None, "Unable to load the XML: %s" % e ) from e
    return unmarshal( document, connector )
