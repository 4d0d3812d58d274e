import datetime
import pytz

from collections import OrderedDict

from dateutil.tz import tzlocal
from tzlocal import windows_tz


def to_dt(dt):
    """
        Convert a naive date or datetime to a tz-aware datetime.
    """

    if isinstance(dt, datetime.date) and not isinstance(dt, datetime.datetime) or dt is not None and not hasattr(dt, 'hour'):
        dt = datetime.datetime(dt.year, dt.month, dt.day, 0, 0, 0, 0, tzinfo=tzlocal())

    elif isinstance(dt, datetime.datetime):
        if dt.tzinfo is None:
            return dt.replace(tzinfo=pytz.utc)

    return dt


def same_instant(a, b):
    """
        Whether two dates or datetimes denote the same point in time, as
        far as recurrence identifiers are concerned.
    """
    if a is None or b is None:
        return a is None and b is None

    return to_dt(a) == to_dt(b)


def olson_timezone(name):
    """
        Map a (Windows) timezone identifier to an Olson timezone, or return
        None if the identifier is not known.
    """
    if name is None:
        return None

    if name in windows_tz.win_tz:
        name = windows_tz.win_tz[name]

    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        return None


def normalize_timezone(dt, default_tz):
    """
        Attach a proper Olson timezone to a datetime: floating datetimes are
        localized in the default timezone, datetimes whose timezone carries
        a Windows identifier are moved to the corresponding Olson zone.
    """
    if not isinstance(dt, datetime.datetime):
        return dt

    if dt.tzinfo is None:
        if hasattr(default_tz, 'localize'):
            return default_tz.localize(dt)

        return dt.replace(tzinfo=default_tz)

    zone = getattr(dt.tzinfo, 'zone', None) or getattr(dt.tzinfo, 'key', None) or dt.tzinfo.tzname(dt)

    if zone in windows_tz.win_tz:
        tz = pytz.timezone(windows_tz.win_tz[zone])
        return tz.localize(dt.replace(tzinfo=None))

    return dt


def compute_diff(a, b):
    """
        List the differences between two given dicts
    """
    diff = []

    properties = list(a.keys())
    properties.extend([x for x in b.keys() if x not in properties])

    for prop in properties:
        aa = a[prop] if prop in a else None
        bb = b[prop] if prop in b else None

        # compare two lists
        if isinstance(aa, list) or isinstance(bb, list):
            if not isinstance(aa, list):
                aa = [] if aa is None else [aa]
            if not isinstance(bb, list):
                bb = [] if bb is None else [bb]
            index = 0
            length = max(len(aa), len(bb))
            while index < length:
                aai = aa[index] if index < len(aa) else None
                bbi = bb[index] if index < len(bb) else None
                if not compare_values(aai, bbi):
                    diff.append(OrderedDict([('property', prop), ('index', index), ('old', aai), ('new', bbi)]))
                index += 1

        # the two properties differ
        elif not compare_values(aa, bb):
            diff.append(OrderedDict([('property', prop), ('old', aa), ('new', bb)]))

    return diff


def compare_values(aa, bb):
    ignore_keys = ['rsvp', 'entity']
    if not aa.__class__ == bb.__class__:
        return False

    if isinstance(aa, dict) and isinstance(bb, dict):
        aa = dict(aa)
        bb = dict(bb)
        # ignore some properties for comparison
        for k in ignore_keys:
            aa.pop(k, None)
            bb.pop(k, None)

    return aa == bb

