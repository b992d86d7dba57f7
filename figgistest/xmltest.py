#!/usr/bin/env python
#    figgistest/xmltest.py - test cases for loading and saving figgis documents
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
import io, unittest

from figgis import StructureMismatch, InvalidArgument, LANGUAGE_UNDEFINED, ROOT_MISMATCH
from figgis.XML import Connector, marshal, unmarshal, dumps, dump, loads, load
from figgis.parser import XmlParser
from figgis.putter import XmlPutter
import figgistest
from figgistest import Catalog, Product, Variant, sample_product

class RoundtripTests ( figgistest.DefaultTestCase ) :
    def testVariant ( self ) :
        """A flat object"""
        self._roundtrip( Variant( sku = 'S', price = '1.00', online = False ) )

    def testProduct ( self ) :
        """Every kind of field in one object"""
        self._roundtrip( sample_product() )

    def testCatalog ( self ) :
        """Objects nested in objects"""
        self._roundtrip( Catalog( id = 'C', products = [ sample_product(), Product( id = 'P-2', name = 'Plain'
            , tags = [], colours = [], display_names = {}, descriptions = {}, variants = [] ) ] ) )

    def testLanguageTree ( self ) :
        """The undefined language leaves no attribute in the intermediate tree"""
        putter = XmlPutter( None, 'root' )
        putter.output_multiple_strings_by_language( 's', { LANGUAGE_UNDEFINED : 'v1', 'en' : 'v2' } )
        first, second = putter.base
        self.assertEqual( dict( first.attrib ), {} )
        self.assertEqual( XmlParser( putter.base ).parse_multiple_strings_by_language( 's' ), { LANGUAGE_UNDEFINED : 'v1', 'en' : 'v2' } )

class DocumentTests ( unittest.TestCase ) :
    def setUp ( self ) :
        self.connector = Connector( { 'catalog' : Catalog } )
        self.catalog = Catalog( id = 'C', products = [ sample_product() ] )

    def testStrings ( self ) :
        """dumps then loads gives back an equal object"""
        text = dumps( self.catalog )
        self.assertTrue( text.startswith( '<catalog catalog-id="C">' ) )
        self.assertIn( '<![CDATA[Fish & Chips]]>', text )
        self.assertEqual( loads( text, self.connector ), self.catalog )

    def testPrettyPrint ( self ) :
        """Indentation added for people is ignored when loading"""
        text = dumps( self.catalog, pretty_print = True )
        self.assertIn( '\n  <product', text )
        self.assertEqual( loads( text, self.connector ), self.catalog )

    def testFiles ( self ) :
        f = io.BytesIO()
        dump( self.catalog, f )
        self.assertTrue( f.getvalue().startswith( b"<?xml version='1.0' encoding='UTF-8'?>" ) )
        f.seek( 0 )
        self.assertEqual( load( f, self.connector ), self.catalog )

    def testBytesWithDeclaration ( self ) :
        data = b'<?xml version="1.0" encoding="UTF-8"?><catalog catalog-id="X"/>'
        self.assertEqual( loads( data, self.connector ), Catalog( id = 'X', products = [] ) )

    def testStringWithForeignDeclaration ( self ) :
        """A str is already decoded, whatever encoding its declaration names"""
        connector = Connector( { 'variant' : Variant } )
        text = '<?xml version="1.0" encoding="ISO-8859-1"?><variant sku="\u00e9t\u00e9"/>'
        self.assertEqual( loads( text, connector ), Variant( sku = '\u00e9t\u00e9' ) )

    def testMarshal ( self ) :
        document = marshal( self.catalog )
        self.assertEqual( document.root.tag, 'catalog' )
        self.assertEqual( unmarshal( document, self.connector ), self.catalog )
        self.assertEqual( unmarshal( document.tree, { 'catalog' : Catalog } ), self.catalog )

    def testAsXml ( self ) :
        self.assertEqual( self.catalog.as_xml(), dumps( self.catalog ) )

    def testUnknownRoot ( self ) :
        """A root nobody registered is a structure error carrying the root"""
        with self.assertRaises( StructureMismatch ) as cm :
            loads( '<inventory/>', self.connector )
        self.assertEqual( cm.exception.element.tag, 'inventory' )

    def testMalformed ( self ) :
        """Markup that does not parse is a structure error without an element"""
        with self.assertRaises( StructureMismatch ) as cm :
            loads( '<catalog>', self.connector )
        self.assertIsNone( cm.exception.element )
        self.assertRaises( StructureMismatch, load, io.BytesIO( b'not xml' ), self.connector )

    def testRootMismatch ( self ) :
        """A handler registered for the wrong root still checks its name"""
        with self.assertRaises( StructureMismatch ) as cm :
            loads( '<product product-id="1"/>', { 'product' : Catalog } )
        self.assertEqual( cm.exception.code, ROOT_MISMATCH )

    def testEmptyObject ( self ) :
        """Nothing to write means no document"""
        self.assertRaises( InvalidArgument, dumps, figgistest.Empty() )

class ConnectorTests ( unittest.TestCase ) :
    def testRegister ( self ) :
        connector = Connector()
        connector.register( 'variant', Variant )
        @connector.register( 'sku' )
        def read_sku ( parser ) :
            return parser.parse_required_attribute( 'value' )
        self.assertIs( connector.handler_for_root( 'variant' ), Variant )
        self.assertIsNone( connector.handler_for_root( 'nothing' ) )
        self.assertEqual( loads( '<sku value="A-1"/>', connector ), 'A-1' )
        self.assertEqual( loads( '<variant sku="S"><online>1</online></variant>', connector ), Variant( sku = 'S', online = True ) )

    def testDuckTyped ( self ) :
        """Anything with handler_for_root will do"""
        class Everything ( object ) :
            def handler_for_root ( self, name ) :
                return lambda parser : parser.get_root_node().tag
        self.assertEqual( loads( '<whatever/>', Everything() ), 'whatever' )

if __name__ == "__main__":
    unittest.main()
