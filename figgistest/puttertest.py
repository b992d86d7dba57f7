#!/usr/bin/env python
#    figgistest/puttertest.py - test cases for the figgis output cursor
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

from figgis import InvalidArgument, InvalidInput, InvalidState, LANGUAGE_UNDEFINED
from figgis.putter import XmlPutter, is_cdata_required
from figgis.tree import Document
import figgistest
from figgistest import render

class ConstructionTests ( unittest.TestCase ) :
    def testNewDocument ( self ) :
        """Without arguments the putter writes into a new document"""
        putter = XmlPutter()
        self.assertIsInstance( putter.document, Document )
        self.assertIs( putter.base, putter.document )
        node = putter.create_sub_element( 'root' )
        self.assertIs( putter.document.root, node )

    def testNamedBase ( self ) :
        """A tag name creates the base element, as root of an empty document"""
        putter = XmlPutter( None, 'catalog', 'text' )
        self.assertEqual( putter.base.tag, 'catalog' )
        self.assertEqual( putter.base.text, 'text' )
        self.assertIs( putter.document.root, putter.base )
        self.assertIs( putter.get_current_node(), putter.get_base_node() )

    def testNodeBase ( self ) :
        """An existing element becomes the base"""
        element = etree.Element( 'existing' )
        putter = XmlPutter( base = element )
        putter.output_required_string( 'child', 'value' )
        self.assertEqual( render( element ), '<existing><child>value</child></existing>' )

    def testExistingTree ( self ) :
        """An lxml ElementTree is accepted as the document"""
        putter = XmlPutter( etree.ElementTree( etree.Element( 'a' ) ) )
        self.assertEqual( putter.document.root.tag, 'a' )

    def testInvalidArguments ( self ) :
        """Anything else is refused"""
        self.assertRaises( InvalidArgument, XmlPutter, None, 42 )
        self.assertRaises( InvalidArgument, XmlPutter, "not a document" )

class MovementTests ( unittest.TestCase ) :
    def setUp ( self ) :
        self.putter = XmlPutter( None, 'root' )

    def testDescendAscend ( self ) :
        """Descending into a child and ascending back"""
        child = self.putter.create_sub_element( 'child', descend = False )
        self.assertIs( self.putter.current, self.putter.base )
        self.putter.descend( child )
        self.assertIs( self.putter.current, child )
        self.putter.ascend()
        self.assertIs( self.putter.current, self.putter.base )

    def testAscendToDocument ( self ) :
        """The root element's parent is the document; the document has none"""
        self.putter.ascend()
        self.assertIs( self.putter.current, self.putter.document )
        self.assertRaises( InvalidState, self.putter.ascend )
        self.assertIs( self.putter.current, self.putter.document )

    def testAscendDetached ( self ) :
        """Ascending from a detached element fails and leaves the cursor alone"""
        element = etree.Element( 'floating' )
        self.putter.descend( element )
        self.assertRaises( InvalidState, self.putter.ascend )
        self.assertIs( self.putter.current, element )

    def testReset ( self ) :
        """Reset returns to the base from any depth"""
        self.putter.create_sub_element( 'a' )
        self.putter.create_sub_element( 'b' )
        self.putter.reset()
        self.assertIs( self.putter.current, self.putter.base )

    def testDescendNonNode ( self ) :
        self.assertRaises( InvalidArgument, self.putter.descend, "a" )

class AttributeTests ( unittest.TestCase ) :
    def setUp ( self ) :
        self.putter = XmlPutter( None, 'root' )

    def testOverwrite ( self ) :
        """Later values replace earlier ones; None never clears"""
        self.putter.set_attributes( { 'id' : 'a' } )
        self.putter.set_attributes( { 'id' : 'b' } )
        self.assertEqual( dict( self.putter.base.attrib ), { 'id' : 'b' } )
        self.putter.set_attributes( { 'id' : None } )
        self.assertEqual( dict( self.putter.base.attrib ), { 'id' : 'b' } )

    def testBooleanAttributes ( self ) :
        """Boolean attributes are normalised"""
        self.putter.set_boolean_attributes( { 'a' : True, 'b' : "0", 'c' : None, 'd' : '' } )
        self.assertEqual( dict( self.putter.base.attrib ), { 'a' : 'true', 'b' : 'false' } )

    def testLanguage ( self ) :
        """The undefined language writes no attribute"""
        self.putter.output_language( LANGUAGE_UNDEFINED )
        self.assertEqual( render( self.putter.base ), '<root/>' )
        self.putter.output_language( 'en' )
        self.assertEqual( render( self.putter.base ), '<root xml:lang="en"/>' )

    def testDocumentHasNoAttributes ( self ) :
        putter = XmlPutter()
        self.assertRaises( InvalidState, putter.set_attributes, { 'a' : 'b' } )

class ValueTests ( unittest.TestCase ) :
    def setUp ( self ) :
        self.putter = XmlPutter( None, 'root' )

    def testRequiredString ( self ) :
        """A required string creates a child and leaves the cursor in place"""
        node = self.putter.output_required_string( 'name', 'plain', { 'lang' : 'x' } )
        self.assertIs( self.putter.current, self.putter.base )
        self.assertEqual( render( node ), '<name lang="x">plain</name>' )

    def testRequiredMissing ( self ) :
        """A required value of None is refused and nothing is written"""
        self.assertRaises( InvalidArgument, self.putter.output_required_string, 'name', None )
        self.assertRaises( InvalidArgument, self.putter.output_required_boolean, 'flag', None )
        self.assertRaises( InvalidArgument, self.putter.output_required_date, 'when', None )
        self.assertRaises( InvalidArgument, self.putter.output_required_time, 'at', None )
        self.assertEqual( len( self.putter.base ), 0 )

    def testOptionalString ( self ) :
        """An optional None writes nothing"""
        self.assertIsNone( self.putter.output_optional_string( 'name', None ) )
        self.assertEqual( render( self.putter.base ), '<root/>' )
        self.assertIsNotNone( self.putter.output_optional_string( 'name', '' ) )
        self.assertEqual( render( self.putter.base ), '<root><name/></root>' )

    def testNullableString ( self ) :
        """A nullable None still writes an empty element"""
        self.putter.output_nullable_string( 'name', None )
        self.assertEqual( render( self.putter.base ), '<root><name/></root>' )

    def testNonStringValue ( self ) :
        self.putter.output_required_string( 'count', 3 )
        self.assertEqual( render( self.putter.base ), '<root><count>3</count></root>' )

    def testUnwritableText ( self ) :
        """Text XML cannot carry is bad input and nothing is written"""
        self.assertRaises( InvalidInput, self.putter.output_required_string, 'name', 'a\x00b' )
        self.assertRaises( InvalidInput, self.putter.output_nullable_string, 'name', 'a & \x01' )
        self.assertEqual( len( self.putter.base ), 0 )

    def testFloats ( self ) :
        """Floats are written in their string form"""
        self.putter.output_required_float( 'price', 1.5 )
        self.assertIsNone( self.putter.output_optional_float( 'weight', None ) )
        self.putter.output_nullable_float( 'discount', None )
        self.assertEqual( render( self.putter.base ), '<root><price>1.5</price><discount/></root>' )
        self.assertRaises( InvalidArgument, self.putter.output_required_float, 'price', None )

    def testCdata ( self ) :
        """Values with markup characters are written as CDATA"""
        self.putter.output_required_string( 'x', 'a&b' )
        self.putter.output_required_string( 'y', 'plain' )
        self.assertEqual( render( self.putter.base ), '<root><x><![CDATA[a&b]]></x><y>plain</y></root>' )

    def testCdataTerminator ( self ) :
        """A value that cannot be a CDATA section falls back to escaping"""
        node = self.putter.output_required_string( 'x', 'a]]>b' )
        self.assertEqual( render( node ), '<x>a]]&gt;b</x>' )
        self.assertEqual( node.text, 'a]]>b' )

    def testCdataRule ( self ) :
        self.assertTrue( is_cdata_required( "a<b" ) )
        self.assertTrue( is_cdata_required( "a>b" ) )
        self.assertTrue( is_cdata_required( "&amp;" ) )
        self.assertFalse( is_cdata_required( "plain text" ) )

    def testCdataHook ( self ) :
        """The CDATA rule can be replaced"""
        putter = XmlPutter( None, 'root', cdata_hook = lambda text : False )
        putter.output_required_string( 'x', 'a&b' )
        self.assertEqual( render( putter.base ), '<root><x>a&amp;b</x></root>' )

    def testTypedValues ( self ) :
        """Booleans, dates and times are written in their canonical form"""
        self.putter.output_required_boolean( 'flag', "TRUE" )
        self.putter.output_optional_boolean( 'other', None )
        self.putter.output_required_date( 'when', 0 )
        self.putter.output_optional_date_only( 'day', 0 )
        self.putter.output_required_time( 'at', 3723 )
        self.putter.output_nullable_date( 'never', None )
        self.assertEqual( render( self.putter.base ), '<root><flag>true</flag><when>1970-01-01T00:00:00.000Z</when>'
            '<day>1970-01-01Z</day><at>01:02:03.000Z</at><never/></root>' )

    def testOutputText ( self ) :
        """Literal text lands after existing children"""
        self.putter.output_text( 'head' )
        self.putter.output_required_string( 'a', '1' )
        self.putter.output_text( 'tail' )
        self.assertEqual( render( self.putter.base ), '<root>head<a>1</a>tail</root>' )

    def testAppendSubtree ( self ) :
        """A separately built subtree is attached without moving the cursor"""
        other = XmlPutter( None, 'other' )
        other.output_required_string( 'x', '1' )
        self.putter.append_subtree( other.document )
        self.assertIs( self.putter.current, self.putter.base )
        self.assertEqual( render( self.putter.base ), '<root><other><x>1</x></other></root>' )

class SubElementTests ( unittest.TestCase ) :
    def setUp ( self ) :
        self.putter = XmlPutter( None, 'root' )

    def testDescend ( self ) :
        """By default the cursor moves into the new element"""
        node = self.putter.create_sub_element( 'child', { 'id' : '1' } )
        self.assertIs( self.putter.current, node )
        self.assertEqual( node.get( 'id' ), '1' )

    def testNoDescend ( self ) :
        node = self.putter.create_sub_element( 'child', descend = False )
        self.assertIs( self.putter.current, self.putter.base )
        self.assertIs( node.getparent(), self.putter.base )

class MultipleTests ( unittest.TestCase ) :
    def setUp ( self ) :
        self.putter = XmlPutter( None, 'root' )

    def testMultipleStrings ( self ) :
        """One element per value, None values skipped"""
        nodes = self.putter.output_multiple_strings( 's', [ 'a', None, 'b' ] )
        self.assertEqual( [ n.text for n in nodes ], [ 'a', 'b' ] )
        self.assertEqual( render( self.putter.base ), '<root><s>a</s><s>b</s></root>' )

    def testMultipleAttributeStrings ( self ) :
        nodes = self.putter.output_multiple_attribute_strings( 'c', 'v', [ 'x', 'y' ] )
        self.assertEqual( len( nodes ), 2 )
        self.assertIs( self.putter.current, self.putter.base )
        self.assertEqual( render( self.putter.base ), '<root><c v="x"/><c v="y"/></root>' )

    def testStringsByLanguage ( self ) :
        """Undefined language carries no attribute; order follows the dict"""
        self.putter.output_multiple_strings_by_language( 's', { 'en' : 'v2', LANGUAGE_UNDEFINED : 'v1', 'fr' : None } )
        self.assertEqual( render( self.putter.base ), '<root><s xml:lang="en">v2</s><s>v1</s></root>' )

class ObjectTests ( unittest.TestCase ) :
    def setUp ( self ) :
        self.putter = XmlPutter( None, 'root' )

    def testOptionalObject ( self ) :
        """None writes nothing; an empty representation is returned as None"""
        self.assertIsNone( self.putter.output_optional_object( None ) )
        self.assertIsNone( self.putter.output_optional_object( figgistest.Empty() ) )
        node = self.putter.output_optional_object( figgistest.Brand( code = 'B', name = 'N' ) )
        self.assertEqual( render( node ), '<brand code="B">N</brand>' )

    def testNotSerializable ( self ) :
        self.assertRaises( InvalidArgument, self.putter.output_optional_object, object() )
        self.assertRaises( InvalidArgument, self.putter.output_required_object, "text" )

    def testRequiredObject ( self ) :
        """Required objects must exist and must write something"""
        self.assertRaises( InvalidArgument, self.putter.output_required_object, None )
        self.assertRaises( InvalidArgument, self.putter.output_required_object, figgistest.Empty() )
        self.assertIs( self.putter.current, self.putter.base )

    def testRestoreOnFailure ( self ) :
        """A failing produce leaves the cursor where it was before the call"""
        self.putter.create_sub_element( 'inner' )
        before = self.putter.current
        self.assertRaises( ValueError, self.putter.output_required_object, figgistest.Broken() )
        self.assertIs( self.putter.current, before )

    def testMultipleObjects ( self ) :
        """Empty representations are dropped, order is kept"""
        objects = [ figgistest.Variant( sku = '1' ), figgistest.Empty(), None, figgistest.Variant( sku = '2' ) ]
        nodes = self.putter.output_multiple_objects( objects )
        self.assertEqual( [ n.get( 'sku' ) for n in nodes ], [ '1', '2' ] )
        self.assertIs( self.putter.current, self.putter.base )

    def testObjectsByLanguage ( self ) :
        """The language goes on each produced node, not on the current node"""
        descriptions = { LANGUAGE_UNDEFINED : figgistest.Description( body = 'x' )
            , 'en' : figgistest.Description( body = 'y' ), 'de' : figgistest.Empty() }
        nodes = self.putter.output_objects_by_language( descriptions )
        self.assertEqual( len( nodes ), 2 )
        self.assertEqual( render( self.putter.base ), '<root><description><body>x</body></description>'
            '<description xml:lang="en"><body>y</body></description></root>' )

if __name__ == "__main__":
    unittest.main()
