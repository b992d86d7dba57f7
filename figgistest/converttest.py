#!/usr/bin/env python
#    figgistest/converttest.py - test cases for the figgis value conversions
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

from figgis import InvalidInput
from figgis.convert import boolean_to_text, text_to_boolean, epoch_to_date_text, epoch_to_date_only_text
from figgis.convert import epoch_to_time_text, text_to_epoch, text_to_time

class BooleanTests ( unittest.TestCase ) :
    def testRoundtrip ( self ) :
        """Booleans survive being written and read back"""
        for value in ( True, False ) :
            self.assertIs( text_to_boolean( boolean_to_text( value ) ), value )

    def testSpellings ( self ) :
        """Case-insensitive true/false and 1/0 are all accepted"""
        self.assertEqual( boolean_to_text( "TRUE" ), "true" )
        self.assertEqual( boolean_to_text( "false" ), "false" )
        self.assertEqual( boolean_to_text( "1" ), "true" )
        self.assertEqual( boolean_to_text( "0" ), "false" )
        self.assertIs( text_to_boolean( "False" ), False )
        self.assertIs( text_to_boolean( "tRuE" ), True )

    def testInvalid ( self ) :
        """Unrecognised spellings are errors in both directions"""
        self.assertRaises( InvalidInput, text_to_boolean, "maybe" )
        self.assertRaises( InvalidInput, boolean_to_text, "yes" )
        self.assertRaises( InvalidInput, text_to_boolean, 1.5 )

    def testIdempotent ( self ) :
        """An actual boolean is handed back untouched"""
        self.assertIs( text_to_boolean( True ), True )
        self.assertIs( text_to_boolean( False ), False )

    def testAbsent ( self ) :
        """None and the empty string mean "no value", not an error"""
        self.assertIsNone( text_to_boolean( None ) )
        self.assertIsNone( text_to_boolean( "" ) )
        self.assertIsNone( boolean_to_text( None ) )

    def testTruthiness ( self ) :
        """Non-string values are written by their truth value"""
        self.assertEqual( boolean_to_text( 1 ), "true" )
        self.assertEqual( boolean_to_text( 0 ), "false" )

class DateTests ( unittest.TestCase ) :
    def testEpoch ( self ) :
        """The epoch itself, both ways"""
        self.assertEqual( epoch_to_date_text( 0 ), "1970-01-01T00:00:00.000Z" )
        self.assertEqual( text_to_epoch( "1970-01-01T00:00:00.000Z" ), 0 )

    def testFixedFormat ( self ) :
        """Dates are written in UTC with zero milliseconds"""
        self.assertEqual( epoch_to_date_text( 1234567890 ), "2009-02-13T23:31:30.000Z" )
        self.assertEqual( epoch_to_date_text( "1234567890" ), "2009-02-13T23:31:30.000Z" )
        self.assertEqual( epoch_to_date_text( 1234567890.9 ), "2009-02-13T23:31:30.000Z" )
        self.assertEqual( epoch_to_date_only_text( 1234567890 ), "2009-02-13Z" )

    def testRoundtrip ( self ) :
        """Written dates read back to the same second"""
        for epoch in ( 0, 1, 86399, 951782400, 1234567890, 2147483647 ) :
            self.assertEqual( text_to_epoch( epoch_to_date_text( epoch ) ), epoch )

    def testLenientParse ( self ) :
        """Common spellings of the same instant agree"""
        expected = 1234567890
        for text in ( "2009-02-13T23:31:30Z", "2009-02-13T23:31:30+00:00", "2009-02-13 23:31:30"
                , "2009-02-14T01:31:30+02:00", "Fri, 13 Feb 2009 23:31:30 +0000", "@1234567890" ) :
            self.assertEqual( text_to_epoch( text ), expected, text )
        self.assertEqual( text_to_epoch( "2009-02-13" ), 1234483200 )
        self.assertEqual( text_to_epoch( "13 February 2009" ), 1234483200 )

    def testNumbers ( self ) :
        """Numbers are already epoch seconds"""
        self.assertEqual( text_to_epoch( 42 ), 42 )
        self.assertEqual( text_to_epoch( 42.7 ), 42 )

    def testInvalid ( self ) :
        """Unparseable or untyped dates are errors"""
        self.assertRaises( InvalidInput, text_to_epoch, "not a date" )
        self.assertRaises( InvalidInput, text_to_epoch, "" )
        self.assertRaises( InvalidInput, text_to_epoch, [ 1 ] )
        self.assertRaises( InvalidInput, text_to_epoch, True )
        self.assertRaises( InvalidInput, epoch_to_date_text, "yesterday-ish" )
        self.assertRaises( InvalidInput, epoch_to_date_text, True )

    def testAbsent ( self ) :
        """None passes straight through"""
        self.assertIsNone( epoch_to_date_text( None ) )
        self.assertIsNone( epoch_to_time_text( None ) )
        self.assertIsNone( epoch_to_date_only_text( None ) )
        self.assertIsNone( text_to_epoch( None ) )

class TimeTests ( unittest.TestCase ) :
    def testFormat ( self ) :
        """Only the time of day is written"""
        self.assertEqual( epoch_to_time_text( 0 ), "00:00:00.000Z" )
        self.assertEqual( epoch_to_time_text( 1234567890 ), "23:31:30.000Z" )

    def testTimeOnly ( self ) :
        """A bare time reads as that time on 1970-01-01"""
        self.assertEqual( text_to_time( "01:02:03.000Z" ), 3723 )
        self.assertEqual( text_to_time( "1:02:03" ), 3723 )
        self.assertEqual( text_to_time( epoch_to_time_text( 1234567890 ) ), 1234567890 % 86400 )

    def testFullDate ( self ) :
        """Full dates are accepted where times are expected"""
        self.assertEqual( text_to_time( "1970-01-01T00:00:10.000Z" ), 10 )

if __name__ == "__main__":
    unittest.main()
