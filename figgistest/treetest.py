#!/usr/bin/env python
#    figgistest/treetest.py - test cases for the figgis node operations
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

from figgis import InvalidState
from figgis import tree
from figgis.tree import Document
from figgistest import fragment

class DocumentTests ( unittest.TestCase ) :
    def testSingleRoot ( self ) :
        """A document holds one root element only"""
        document = Document()
        root = tree.create_node( 'root' )
        tree.append_child( document, root )
        self.assertIs( document.root, root )
        self.assertEqual( tree.get_children( document ), [ root ] )
        self.assertRaises( InvalidState, tree.append_child, document, tree.create_node( 'other' ) )

    def testParents ( self ) :
        """The document is the root's parent only when it is known"""
        root = fragment( '<a><b/></a>' )
        document = Document( root )
        self.assertIs( tree.get_parent( root[0] ), root )
        self.assertIsNone( tree.get_parent( root ) )
        self.assertIs( tree.get_parent( root, document ), document )
        self.assertIsNone( tree.get_parent( document, document ) )

    def testEmpty ( self ) :
        document = Document()
        self.assertIsNone( document.tree )
        self.assertEqual( tree.get_children( document ), [] )
        self.assertEqual( tree.get_text( document ), "" )
        self.assertRaises( InvalidState, document.tostring )

    def testTostring ( self ) :
        document = Document( fragment( '<a>x</a>' ) )
        self.assertEqual( document.tostring( encoding = str ), '<a>x</a>' )
        self.assertEqual( document.tostring(), b"<?xml version='1.0' encoding='UTF-8'?>\n<a>x</a>" )

class NodeTests ( unittest.TestCase ) :
    def testNames ( self ) :
        root = fragment( '<a><!-- c --><?pi data?><b/></a>' )
        self.assertEqual( [ tree.get_name( n ) for n in tree.get_children( root ) ], [ '#comment', '#processing-instruction', 'b' ] )
        self.assertEqual( tree.get_name( Document( root ) ), '#document' )

    def testText ( self ) :
        """Text is the concatenation of all descendant text, without comments"""
        root = fragment( '<a>x<b>y</b><!-- no -->z</a>' )
        self.assertEqual( tree.get_text( root ), 'xyz' )
        self.assertEqual( tree.get_text( fragment( '<a/>' ) ), '' )

    def testSetText ( self ) :
        root = tree.create_node( 'a', 'x' )
        self.assertIs( tree.set_text( root, 'y' ), root )
        tree.append_child( root, tree.create_node( 'b' ) )
        self.assertEqual( tree.set_text( root, 'z' ).tag, 'b' )
        self.assertEqual( etree.tostring( root, encoding = "unicode" ), '<a>xy<b/>z</a>' )
        self.assertRaises( InvalidState, tree.set_text, Document(), 'x' )

    def testAttributes ( self ) :
        """xml: prefixed attributes live in the XML namespace"""
        node = tree.create_node( 'a' )
        tree.set_attribute( node, 'xml:lang', 'en' )
        tree.set_attribute( node, 'id', '1' )
        self.assertTrue( tree.has_attribute( node, 'xml:lang' ) )
        self.assertEqual( tree.get_attribute( node, 'xml:lang' ), 'en' )
        self.assertIsNone( tree.get_attribute( node, 'lang' ) )
        self.assertEqual( etree.tostring( node, encoding = "unicode" ), '<a xml:lang="en" id="1"/>' )

    def testAttributesUnsupported ( self ) :
        comment = etree.Comment( 'c' )
        self.assertFalse( tree.supports_attributes( comment ) )
        self.assertFalse( tree.supports_attributes( Document() ) )
        self.assertRaises( InvalidState, tree.get_attribute, comment, 'a' )
        self.assertRaises( InvalidState, tree.set_attribute, Document(), 'a', 'b' )

    def testCdata ( self ) :
        node = tree.create_node( 'a' )
        node.text = tree.create_text_node( 'x<y', cdata = True )
        self.assertEqual( etree.tostring( node, encoding = "unicode" ), '<a><![CDATA[x<y]]></a>' )
        self.assertEqual( tree.create_text_node( 'plain' ), 'plain' )

if __name__ == "__main__":
    unittest.main()
