#    figgis/convert.py - canonical text encodings of primitive values.
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
r"""figgis/convert.py holds the conversions between python values and the text
written into XML documents.  The functions are stateless and know nothing about
cursors or trees.

The written forms are fixed; some consumers of these documents compare them
byte for byte:

    ``true`` / ``false``            booleans
    ``1970-01-01T00:00:00.000Z``    dates (always UTC, milliseconds always zero)
    ``1970-01-01Z``                 dates without a time part
    ``00:00:00.000Z``               times of day (UTC)

Reading is lenient.  Booleans accept any case as well as ``1`` and ``0``; dates
and times accept epoch numbers, ISO 8601, RFC 2822 and a handful of common
calendar spellings.  Points in time are UNIX epoch seconds (ints).

``None`` is never an error: every function hands it straight back, so optional
values pass through without special casing.
"""
import calendar, re, time
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime

from figgis import InvalidInput

__all__ = [ 'boolean_to_text', 'text_to_boolean', 'epoch_to_date_text', 'epoch_to_date_only_text'
    , 'epoch_to_time_text', 'text_to_epoch', 'text_to_time' ]

EPOCH = datetime( 1970, 1, 1, tzinfo = timezone.utc )
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S.000Z"
DATE_ONLY_FORMAT = "%Y-%m-%dZ"
TIME_FORMAT = "%H:%M:%S.000Z"

TRUE_SPELLINGS = ( 'true', '1' )
FALSE_SPELLINGS = ( 'false', '0' )

def boolean_to_text ( value ) :
    r"""Return ``'true'`` or ``'false'`` for ``value``, which may be a bool, anything
    with a truth value, or one of the strings :func:`text_to_boolean` accepts."""
    if value is None :
        return None
    if isinstance( value, str ) :
        value = text_to_boolean( value )
        if value is None :
            return None
    return 'true' if value else 'false'

def text_to_boolean ( text ) :
    r"""Return the boolean spelled by ``text`` (``true``/``false`` in any case, or
    ``1``/``0``).  Booleans are returned unchanged; ``None`` and the empty string
    give ``None``.  Anything else raises :class:`figgis.InvalidInput`."""
    if text is None or isinstance( text, bool ) :
        return text
    if not isinstance( text, str ) :
        raise InvalidInput( "Expecting a string or boolean: %s passed" % type( text ).__name__ )
    if text == "" :
        return None
    folded = text.lower()
    if folded in TRUE_SPELLINGS :
        return True
    if folded in FALSE_SPELLINGS :
        return False
    raise InvalidInput( 'Invalid boolean, expecting "true", "false", "1" or "0": %r' % text )

def _epoch ( value ) :
    if isinstance( value, bool ) :
        raise InvalidInput( "Date must be a number or a numeric string, got bool (%r)" % value )
    if isinstance( value, int ) :
        return value
    if isinstance( value, float ) :
        return int( value )
    if isinstance( value, str ) :
        try :
            return int( float( value ) )
        except ValueError :
            pass
    raise InvalidInput( "Date must be a number or a numeric string, got %s (%r)" % ( type( value ).__name__, value ) )

def _render ( epoch, fmt ) :
    if epoch is None :
        return None
    try :
        return ( EPOCH + timedelta( seconds = _epoch( epoch ) ) ).strftime( fmt )
    except OverflowError :
        raise InvalidInput( "Date out of range: %r" % ( epoch, ) )

def epoch_to_date_text ( epoch ) :
    r"""Render epoch seconds as ``YYYY-MM-DDTHH:MM:SS.000Z``."""
    return _render( epoch, DATE_FORMAT )

def epoch_to_date_only_text ( epoch ) :
    r"""Render epoch seconds as ``YYYY-MM-DDZ``."""
    return _render( epoch, DATE_ONLY_FORMAT )

def epoch_to_time_text ( epoch ) :
    r"""Render the time-of-day part of epoch seconds as ``HH:MM:SS.000Z``."""
    return _render( epoch, TIME_FORMAT )

# calendar spellings tried after ISO 8601 and RFC 2822.
FALLBACK_FORMATS = (
    "%Y-%m-%d %H:%M:%S", "%Y/%m/%d", "%Y/%m/%d %H:%M:%S", "%m/%d/%Y", "%m/%d/%Y %H:%M:%S"
    , "%d.%m.%Y", "%d %B %Y", "%d %b %Y", "%B %d %Y", "%B %d, %Y", "%b %d, %Y", "%Y%m%dT%H%M%S"
)
RELATIVE_DAYS = { 'today' : 0, 'yesterday' : -1, 'tomorrow' : 1 }
TIME_OF_DAY = re.compile( r"^\d{1,2}:\d{2}" )

def _timegm ( moment ) :
    if moment.tzinfo is None :
        moment = moment.replace( tzinfo = timezone.utc )
    return calendar.timegm( moment.utctimetuple() )

def _isoformat ( text ) :
    if text[-1:] in ( 'Z', 'z' ) :
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat( text )

def _parse ( text ) :
    text = text.strip()
    lowered = text.lower()
    if lowered == 'now' :
        return int( time.time() )
    if lowered in RELATIVE_DAYS :
        today = datetime.now( timezone.utc ).replace( hour = 0, minute = 0, second = 0, microsecond = 0 )
        return _timegm( today + timedelta( days = RELATIVE_DAYS[lowered] ) )
    if text.startswith( '@' ) :
        return int( float( text[1:] ) )
    if TIME_OF_DAY.match( text ) :
        # a bare time of day is read on 1970-01-01 so only the time part carries.
        if len( text.split( ':', 1 )[0] ) == 1 :
            text = "0" + text
        return _timegm( _isoformat( "1970-01-01T" + text ) )
    try :
        return _timegm( _isoformat( text ) )
    except ValueError :
        pass
    try :
        return _timegm( parsedate_to_datetime( text ) )
    except ( TypeError, ValueError, IndexError ) :
        pass
    for fmt in FALLBACK_FORMATS :
        try :
            return _timegm( datetime.strptime( text, fmt ) )
        except ValueError :
            continue
    raise ValueError( text )

def text_to_epoch ( value ) :
    r"""Return epoch seconds for ``value``.  Numbers are taken to be epoch seconds
    already; strings go through a lenient date parser.  Raises
    :class:`figgis.InvalidInput` for anything that is neither."""
    if value is None :
        return None
    if isinstance( value, bool ) :
        raise InvalidInput( "Invalid date argument, expecting string, integer or float, got bool" )
    if isinstance( value, ( int, float ) ) :
        return int( value )
    if not isinstance( value, str ) :
        raise InvalidInput( "Invalid date argument, expecting string, integer or float, got %s" % type( value ).__name__ )
    try :
        return _parse( value )
    except ( ValueError, OverflowError ) :
        raise InvalidInput( "Invalid string argument, expecting parseable date: %r" % value )

text_to_time = text_to_epoch
