#    figgistest/__init__.py - shared fixtures for the figgis test cases
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
import unittest

from lxml import etree

from figgis import Serializable, LANGUAGE_UNDEFINED
from figgis.putter import XmlPutter
from figgis.parser import XmlParser

def fragment ( markup ) :
    r"""Parse ``markup`` into an element, dropping blank text between elements."""
    return etree.fromstring( markup, etree.XMLParser( remove_blank_text = True ) )

def render ( node ) :
    return etree.tostring( node, encoding = "unicode" )

class DefaultTestCase ( unittest.TestCase ) :
    def _roundtrip ( self, data, handler = None ) :
        r"""Write ``data`` with a putter, read it back with ``handler`` (``data``'s
        own class by default) and check the two are equal."""
        putter = XmlPutter()
        node = putter.output_required_object( data )
        parser = XmlParser( node, document = putter.document )
        result = ( handler or type( data ) ).parse( parser )
        if result != data :
            print( ">>", data )
            print( "<<", result )
            print( render( node ) )
        self.assertEqual( result, data )
        return result

    def runTest ( self ) :
        pass

# sample domain types, loosely shaped after a product catalogue export.

class Sample ( Serializable ) :
    fields = ()
    def __init__ ( self, **kwargs ) :
        for field in self.fields :
            setattr( self, field, kwargs.get( field ) )
    def __eq__ ( self, other ) :
        return type( self ) is type( other ) and self.__dict__ == other.__dict__
    def __ne__ ( self, other ) :
        return not self == other
    def __repr__ ( self ) :
        return "<%s: %s>" % ( type( self ).__name__, ", ".join( "%s=%r" % ( f, getattr( self, f ) ) for f in self.fields ) )

class Brand ( Sample ) :
    tag_name = 'brand'
    fields = ( 'code', 'name' )
    def produce ( self, putter ) :
        return putter.output_required_string( 'brand', self.name, { 'code' : self.code } )
    @classmethod
    def parse ( cls, parser ) :
        return cls( code = parser.parse_optional_attribute( 'code' ), name = parser.parse_text() )

class Variant ( Sample ) :
    tag_name = 'variant'
    fields = ( 'sku', 'price', 'online' )
    def produce ( self, putter ) :
        node = putter.create_sub_element( 'variant', { 'sku' : self.sku } )
        putter.output_optional_string( 'price', self.price )
        putter.output_optional_boolean( 'online', self.online )
        putter.ascend()
        return node
    @classmethod
    def parse ( cls, parser ) :
        return cls( sku = parser.parse_required_attribute( 'sku' )
            , price = parser.parse_single_optional_string( 'price' )
            , online = parser.parse_single_optional_boolean( 'online' ) )

class Description ( Sample ) :
    tag_name = 'description'
    fields = ( 'body', 'markup' )
    def produce ( self, putter ) :
        node = putter.create_sub_element( 'description' )
        putter.set_boolean_attributes( { 'markup' : self.markup } )
        putter.output_required_string( 'body', self.body )
        putter.ascend()
        return node
    @classmethod
    def parse ( cls, parser ) :
        return cls( body = parser.parse_single_required_string( 'body' )
            , markup = parser.parse_optional_boolean_attribute( 'markup' ) )

class Product ( Sample ) :
    tag_name = 'product'
    fields = ( 'id', 'name', 'online', 'created', 'opens', 'tags', 'colours', 'display_names'
        , 'descriptions', 'brand', 'variants' )
    def produce ( self, putter ) :
        node = putter.create_sub_element( 'product', { 'product-id' : self.id } )
        putter.output_required_string( 'name', self.name )
        putter.output_optional_boolean( 'online', self.online )
        putter.output_optional_date( 'created', self.created )
        putter.output_optional_time( 'opens', self.opens )
        putter.output_multiple_strings( 'tag', self.tags or [] )
        putter.output_multiple_attribute_strings( 'colour', 'value', self.colours or [] )
        putter.output_multiple_strings_by_language( 'display-name', self.display_names or {} )
        putter.output_objects_by_language( self.descriptions or {} )
        putter.output_optional_object( self.brand )
        putter.output_multiple_objects( self.variants or [] )
        putter.ascend()
        return node
    @classmethod
    def parse ( cls, parser ) :
        return cls( id = parser.parse_required_attribute( 'product-id' )
            , name = parser.parse_single_required_string( 'name' )
            , online = parser.parse_single_optional_boolean( 'online' )
            , created = parser.parse_single_optional_date( 'created' )
            , opens = parser.parse_single_optional_time( 'opens' )
            , tags = parser.parse_multiple_strings( 'tag' )
            , colours = parser.parse_multiple_attribute_strings( 'colour', 'value' )
            , display_names = parser.parse_multiple_strings_by_language( 'display-name' )
            , descriptions = parser.parse_multiple_objects_by_language( 'description', Description )
            , brand = parser.parse_single_optional_object( 'brand', Brand )
            , variants = parser.parse_multiple_objects( 'variant', Variant ) )

class Catalog ( Sample ) :
    tag_name = 'catalog'
    fields = ( 'id', 'products' )
    def produce ( self, putter ) :
        node = putter.create_sub_element( 'catalog', { 'catalog-id' : self.id } )
        putter.output_multiple_objects( self.products )
        putter.ascend()
        return node
    @classmethod
    def parse ( cls, parser ) :
        parser.check_node_name( 'catalog' )
        return cls( id = parser.parse_required_attribute( 'catalog-id' )
            , products = parser.parse_multiple_objects( 'product', Product ) )

class Empty ( Sample ) :
    r"""Has nothing to write."""
    def produce ( self, putter ) :
        return None

class Broken ( Sample ) :
    r"""Fails halfway through writing itself, leaving the cursor inside its element."""
    def produce ( self, putter ) :
        putter.create_sub_element( 'broken' )
        raise ValueError( "broken on purpose" )

def sample_product () :
    return Product( id = "P-1", name = "Fish & Chips", online = True, created = 1234567890, opens = 3723
        , tags = [ "food", "hot" ], colours = [ "gold", "brown" ]
        , display_names = { LANGUAGE_UNDEFINED : "Fish and chips", "de" : "Fisch mit Pommes" }
        , descriptions = { "en" : Description( body = "<b>Crispy</b>", markup = True ) }
        , brand = Brand( code = "B1", name = "Harbour" )
        , variants = [ Variant( sku = "P-1-S", price = "4.50", online = True ), Variant( sku = "P-1-L", price = None, online = False ) ] )
