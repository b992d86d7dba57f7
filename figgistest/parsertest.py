#!/usr/bin/env python
#    figgistest/parsertest.py - test cases for the figgis input cursor
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

from figgis import InvalidArgument, InvalidInput, InvalidState, StructureMismatch, LANGUAGE_UNDEFINED
from figgis import NOT_FOUND, MULTIPLE_FOUND, ROOT_MISMATCH
from figgis.parser import XmlParser
from figgis.tree import Document
import figgistest
from figgistest import fragment

class Required ( object ) :
    r"""Handler which insists on a <value> child of whatever it is given."""
    @classmethod
    def parse ( cls, parser, *args ) :
        return ( parser.parse_single_required_string( 'value' ), ) + args

    @classmethod
    def alternate ( cls, parser ) :
        return "alternate:" + parser.parse_text()

class ConstructionTests ( unittest.TestCase ) :
    def testNameCheck ( self ) :
        """The expected root name is checked on construction"""
        root = fragment( '<catalog/>' )
        self.assertIs( XmlParser( root, 'catalog' ).get_root_node(), root )
        try :
            XmlParser( root, 'product' )
        except StructureMismatch as e :
            self.assertEqual( e.code, ROOT_MISMATCH )
            self.assertIs( e.element, root )
        else :
            self.fail( "root mismatch not detected" )

    def testNone ( self ) :
        self.assertRaises( InvalidArgument, XmlParser, None )
        self.assertRaises( InvalidArgument, XmlParser, "<catalog/>" )

    def testTree ( self ) :
        """An lxml ElementTree is parsed from its root"""
        parser = XmlParser( etree.ElementTree( fragment( '<a><b/></a>' ) ) )
        self.assertEqual( parser.get_root_node().tag, 'a' )
        parser.return_to_parent()
        self.assertIsInstance( parser.current, Document )

    def testGracefulCheck ( self ) :
        parser = XmlParser( fragment( '<a/>' ) )
        self.assertTrue( parser.check_node_name( 'a' ) )
        self.assertFalse( parser.check_node_name( 'b', graceful = True ) )
        self.assertRaises( StructureMismatch, parser.check_node_name, 'b' )

class NavigationTests ( unittest.TestCase ) :
    def setUp ( self ) :
        self.root = fragment( '<root><item>1</item><item>2</item><one>x<b>y</b></one><!-- note --></root>' )
        self.parser = XmlParser( self.root )

    def testChildNodes ( self ) :
        """Only direct children, in document order"""
        self.assertEqual( [ n.text for n in self.parser.get_child_nodes( 'item' ) ], [ '1', '2' ] )
        self.assertEqual( self.parser.get_child_nodes( 'b' ), [] )
        self.assertTrue( self.parser.child_exists( 'one' ) )
        self.assertFalse( self.parser.child_exists( 'b' ) )

    def testSingleChildArity ( self ) :
        """Zero matches is NOT_FOUND, two is MULTIPLE_FOUND, one is returned"""
        with self.assertRaises( StructureMismatch ) as cm :
            self.parser.get_single_child( 'item' )
        self.assertEqual( cm.exception.code, MULTIPLE_FOUND )
        with self.assertRaises( StructureMismatch ) as cm :
            self.parser.get_single_child( 'missing' )
        self.assertEqual( cm.exception.code, NOT_FOUND )
        self.assertIs( cm.exception.element, self.root )
        self.assertFalse( cm.exception.nested )
        self.assertEqual( self.parser.get_single_child( 'one' ).tag, 'one' )

    def testProceedAndReturn ( self ) :
        self.parser.proceed_to_single_child( 'one' )
        self.assertEqual( self.parser.parse_text(), 'xy' )
        self.parser.return_to_parent()
        self.assertIs( self.parser.current, self.root )

    def testReturnFromRoot ( self ) :
        """Returning from a node without parent stays put"""
        self.parser.return_to_parent()
        self.assertIs( self.parser.current, self.root )

    def testReset ( self ) :
        self.parser.proceed_to_single_child( 'one' )
        self.parser.proceed_to_single_child( 'b' )
        self.parser.reset()
        self.assertIs( self.parser.current, self.root )

    def testPositions ( self ) :
        """Positional access counts every child, comments included"""
        self.assertEqual( self.parser.get_child_count(), 4 )
        self.assertEqual( self.parser.get_child_node_by_position( 2 ).tag, 'one' )
        self.assertIs( self.parser.current, self.root )
        node = self.parser.get_child_node_by_position( 1, advance = True )
        self.assertIs( self.parser.current, node )
        self.parser.reset()
        with self.assertRaises( StructureMismatch ) as cm :
            self.parser.get_child_node_by_position( 4, advance = True )
        self.assertEqual( cm.exception.code, NOT_FOUND )
        self.assertIs( self.parser.current, self.root )

    def testSetCurrent ( self ) :
        node = self.root[2]
        self.parser.set_current( node )
        self.assertIs( self.parser.get_current_node(), node )
        self.assertRaises( InvalidArgument, self.parser.set_current, None )

class ValueTests ( unittest.TestCase ) :
    def setUp ( self ) :
        self.root = fragment( '<root flag="TRUE" id="7" xml:lang="de">'
            '<name>plain</name><amp><![CDATA[a&b]]></amp><empty/>'
            '<on>1</on><off>false</off><bad>maybe</bad>'
            '<when>1970-01-01T00:00:00.000Z</when><at>01:02:03.000Z</at>'
            '<dup>1</dup><dup>2</dup></root>' )
        self.parser = XmlParser( self.root )

    def testStrings ( self ) :
        self.assertEqual( self.parser.parse_single_required_string( 'name' ), 'plain' )
        self.assertEqual( self.parser.parse_single_required_string( 'amp' ), 'a&b' )
        self.assertEqual( self.parser.parse_single_optional_string( 'empty' ), '' )
        self.assertIsNone( self.parser.parse_single_optional_string( 'missing' ) )
        self.assertEqual( self.parser.parse_single_optional_string( 'missing', 'dflt' ), 'dflt' )

    def testFloats ( self ) :
        """Floats come back as their text"""
        parser = XmlParser( fragment( '<variant><price>1.50</price></variant>' ) )
        self.assertEqual( parser.parse_single_required_float( 'price' ), '1.50' )
        self.assertEqual( parser.parse_single_optional_float( 'weight', '0' ), '0' )
        self.assertRaises( StructureMismatch, parser.parse_single_required_float, 'weight' )

    def testRequiredMissing ( self ) :
        with self.assertRaises( StructureMismatch ) as cm :
            self.parser.parse_single_required_string( 'missing' )
        self.assertEqual( cm.exception.code, NOT_FOUND )
        self.assertRaises( StructureMismatch, self.parser.parse_single_required_boolean, 'missing' )
        self.assertRaises( StructureMismatch, self.parser.parse_single_required_date, 'missing' )
        self.assertRaises( StructureMismatch, self.parser.parse_single_required_time, 'missing' )

    def testAmbiguousNeverDefaulted ( self ) :
        """Several matching children raise even for optional reads"""
        with self.assertRaises( StructureMismatch ) as cm :
            self.parser.parse_single_optional_string( 'dup', 'dflt' )
        self.assertEqual( cm.exception.code, MULTIPLE_FOUND )
        self.assertRaises( StructureMismatch, self.parser.parse_single_optional_boolean, 'dup' )

    def testBooleans ( self ) :
        self.assertIs( self.parser.parse_single_required_boolean( 'on' ), True )
        self.assertIs( self.parser.parse_single_optional_boolean( 'off' ), False )
        self.assertIs( self.parser.parse_single_optional_boolean( 'missing', True ), True )
        self.assertIsNone( self.parser.parse_single_optional_boolean( 'missing' ) )
        self.assertIs( self.parser.parse_single_optional_boolean( 'empty', False ), False )
        self.assertRaises( InvalidInput, self.parser.parse_single_optional_boolean, 'bad' )

    def testDates ( self ) :
        self.assertEqual( self.parser.parse_single_required_date( 'when' ), 0 )
        self.assertEqual( self.parser.parse_single_optional_date( 'when' ), 0 )
        self.assertEqual( self.parser.parse_single_optional_date( 'missing', 5 ), 5 )
        self.assertEqual( self.parser.parse_single_required_time( 'at' ), 3723 )
        self.assertIsNone( self.parser.parse_single_optional_time( 'missing' ) )
        self.assertRaises( InvalidInput, self.parser.parse_single_required_date, 'bad' )

    def testAttributes ( self ) :
        self.assertTrue( self.parser.attribute_exists( 'id' ) )
        self.assertFalse( self.parser.attribute_exists( 'nope' ) )
        self.assertEqual( self.parser.parse_required_attribute( 'id' ), '7' )
        self.assertEqual( self.parser.parse_optional_attribute( 'nope', 'x' ), 'x' )
        self.assertIs( self.parser.parse_required_boolean_attribute( 'flag' ), True )
        self.assertIs( self.parser.parse_optional_boolean_attribute( 'nope', False ), False )
        self.assertEqual( self.parser.parse_language(), 'de' )

    def testMissingAttributes ( self ) :
        """A missing required attribute is NOT_FOUND, plain or boolean alike"""
        for method in ( self.parser.parse_required_attribute, self.parser.parse_required_boolean_attribute ) :
            with self.assertRaises( StructureMismatch ) as cm :
                method( 'nope' )
            self.assertEqual( cm.exception.code, NOT_FOUND )

    def testEmptyBooleanAttribute ( self ) :
        """An empty boolean attribute is as good as a missing one"""
        parser = XmlParser( fragment( '<root flag=""/>' ) )
        self.assertIsNone( parser.parse_optional_boolean_attribute( 'flag' ) )
        self.assertIs( parser.parse_optional_boolean_attribute( 'flag', True ), True )
        with self.assertRaises( StructureMismatch ) as cm :
            parser.parse_required_boolean_attribute( 'flag' )
        self.assertEqual( cm.exception.code, NOT_FOUND )

    def testAttributesUnsupported ( self ) :
        """Nodes that cannot have attributes are a state error"""
        parser = XmlParser( Document( self.root ) )
        self.assertFalse( parser.attribute_exists( 'id' ) )
        self.assertRaises( InvalidState, parser.parse_optional_attribute, 'id' )
        self.assertRaises( InvalidState, parser.parse_required_attribute, 'id' )
        self.assertRaises( InvalidState, parser.parse_optional_boolean_attribute, 'id' )
        self.assertRaises( InvalidState, parser.parse_required_boolean_attribute, 'id' )
        self.assertRaises( InvalidState, parser.parse_language )

class MultipleTests ( unittest.TestCase ) :
    def setUp ( self ) :
        self.parser = XmlParser( fragment( '<root>'
            '<s>v1</s><s xml:lang="en">v2</s><s xml:lang="en">v3</s>'
            '<c v="x"/><c/><c v="x"/>'
            '<o k="a"><value>1</value></o><o k="b"><value>2</value></o><o k="a"><value>3</value></o>'
            '</root>' ) )

    def testStrings ( self ) :
        self.assertEqual( self.parser.parse_multiple_strings( 's' ), [ 'v1', 'v2', 'v3' ] )
        self.assertEqual( self.parser.parse_multiple_strings( 'missing' ), [] )

    def testAttributeStrings ( self ) :
        """No de-duplication; children without the attribute give None"""
        self.assertEqual( self.parser.parse_multiple_attribute_strings( 'c', 'v' ), [ 'x', None, 'x' ] )

    def testStringsByLanguage ( self ) :
        """Later duplicates win; no attribute means the undefined language"""
        self.assertEqual( self.parser.parse_multiple_strings_by_language( 's' ), { LANGUAGE_UNDEFINED : 'v1', 'en' : 'v3' } )

    def testObjects ( self ) :
        self.assertEqual( self.parser.parse_multiple_objects( 'o', Required ), [ ( '1', ), ( '2', ), ( '3', ) ] )
        self.assertEqual( self.parser.parse_multiple_objects( 'o', Required, [ 'extra' ] ), [ ( '1', 'extra' ), ( '2', 'extra' ), ( '3', 'extra' ) ] )

    def testObjectsByAttribute ( self ) :
        """Repeated keys keep the last object"""
        self.assertEqual( self.parser.parse_multiple_objects_by_attribute( 'o', 'k', Required ), { 'a' : ( '3', ), 'b' : ( '2', ) } )

    def testObjectsByLanguage ( self ) :
        values = self.parser.parse_multiple_objects_by_language( 's', lambda parser : parser.parse_text().upper() )
        self.assertEqual( values, { LANGUAGE_UNDEFINED : 'V1', 'en' : 'V3' } )

    def testFailureRestoresPosition ( self ) :
        """A failing handler leaves the cursor where it was"""
        root = self.parser.current
        with self.assertRaises( StructureMismatch ) as cm :
            self.parser.parse_multiple_objects( 'c', Required )
        self.assertTrue( cm.exception.nested )
        self.assertIs( self.parser.current, root )
        self.assertRaises( StructureMismatch, self.parser.parse_multiple_objects_by_language, 's', Required )
        self.assertIs( self.parser.current, root )
        self.assertRaises( StructureMismatch, self.parser.parse_multiple_objects_by_attribute, 'c', 'v', Required )
        self.assertIs( self.parser.current, root )

class ObjectTests ( unittest.TestCase ) :
    def setUp ( self ) :
        self.root = fragment( '<root><good><value>1</value></good><hollow><other/></hollow><twice/><twice/></root>' )
        self.parser = XmlParser( self.root )

    def testOptionalPresent ( self ) :
        self.assertEqual( self.parser.parse_single_optional_object( 'good', Required ), ( '1', ) )
        self.assertIs( self.parser.current, self.root )

    def testOptionalAbsent ( self ) :
        """A missing child gives the default without raising"""
        self.assertIsNone( self.parser.parse_single_optional_object( 'missing', Required ) )
        self.assertEqual( self.parser.parse_single_optional_object( 'missing', Required, default = 'd' ), 'd' )

    def testNestedNotFoundPropagates ( self ) :
        """A NOT_FOUND from inside the handler is not mistaken for absence"""
        with self.assertRaises( StructureMismatch ) as cm :
            self.parser.parse_single_optional_object( 'hollow', Required, default = 'd' )
        self.assertEqual( cm.exception.code, NOT_FOUND )
        self.assertTrue( cm.exception.nested )
        self.assertEqual( cm.exception.element.tag, 'hollow' )
        self.assertIs( self.parser.current, self.root )

    def testAmbiguous ( self ) :
        with self.assertRaises( StructureMismatch ) as cm :
            self.parser.parse_single_optional_object( 'twice', Required )
        self.assertEqual( cm.exception.code, MULTIPLE_FOUND )

    def testRequired ( self ) :
        """Required objects raise NOT_FOUND when absent, and restore position on failure"""
        self.assertEqual( self.parser.parse_single_required_object( 'good', Required ), ( '1', ) )
        with self.assertRaises( StructureMismatch ) as cm :
            self.parser.parse_single_required_object( 'missing', Required )
        self.assertEqual( cm.exception.code, NOT_FOUND )
        self.assertFalse( cm.exception.nested )
        self.assertRaises( StructureMismatch, self.parser.parse_single_required_object, 'hollow', Required )
        self.assertIs( self.parser.current, self.root )

    def testRequiredEmptyResult ( self ) :
        """A handler producing nothing does not satisfy a required object"""
        self.assertRaises( StructureMismatch, self.parser.parse_single_required_object, 'good', lambda parser : None )

    def testEntryPoint ( self ) :
        """Handlers can be reached through another entry point, or be plain callables"""
        self.assertEqual( self.parser.parse_single_optional_object( 'good', Required, entry_point = 'alternate' ), 'alternate:1' )
        self.assertEqual( self.parser.parse_single_optional_object( 'good', lambda parser, n : n * 2, [ 21 ] ), 42 )
        self.assertRaises( InvalidArgument, self.parser.parse_single_optional_object, 'good', object )

    def testHandlerExceptionRestores ( self ) :
        """Any exception from the handler restores the cursor"""
        def explode ( parser ) :
            raise KeyError( 'boom' )
        self.assertRaises( KeyError, self.parser.parse_single_optional_object, 'good', explode )
        self.assertIs( self.parser.current, self.root )

if __name__ == "__main__":
    unittest.main()
