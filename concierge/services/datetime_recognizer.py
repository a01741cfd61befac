"""
Resolve everyday alarm phrases to candidate points in time or ranges.

Handles clock times ("7am", "19:00", "at 7"), relative days ("tomorrow",
"tonight"), weekday names, dates dateutil understands ("20 oct"), parts of the
day ("monday morning"), "noon" and "midnight", explicit ranges
("between 6 and 7am") and durations from now ("in 2 hours"). Points come
back as ``HH:MM:SS``, or ``YYYY-MM-DD HH:MM:SS`` when a day is known; a bare
date comes back as ``YYYY-MM-DD``.
"""
import logging
import re
from datetime import date, datetime, time, timedelta

from dateutil import parser as dtparser
from django.utils import timezone

from ..records import DateTimeResolution

logger = logging.getLogger(__name__)

DATE_FORMAT = '%Y-%m-%d'
TIME_FORMAT = '%H:%M:%S'
DATETIME_FORMAT = f'{DATE_FORMAT} {TIME_FORMAT}'

# Longest phrase first
RELATIVE_DAYS = (
    ('day after tomorrow', 2),
    ('tomorrow', 1),
    ('tonight', 0),
    ('today', 0),
)

WEEKDAYS = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')

PARTS_OF_DAY = {
    'morning': (time(8), time(12)),
    'afternoon': (time(12), time(16)),
    'evening': (time(16), time(20)),
    'night': (time(20), time(23, 59, 59)),
}
PM_PARTS = ('afternoon', 'evening', 'night')

FILLER_WORDS = {
    'at', 'in', 'the', 'on', 'for', 'around', 'about', 'by', 'o\'clock', 'oclock',
    'please', 'set', 'my', 'an', 'alarm', 'wake', 'me', 'up',
}

WEEKDAY_RE = re.compile(r'\b(?:(?P<modifier>next|this|on)\s+)?(?P<weekday>' + '|'.join(WEEKDAYS) + r')s?\b')
PART_OF_DAY_RE = re.compile(r'\b(?:this\s+|in\s+the\s+)?(?P<part>' + '|'.join(PARTS_OF_DAY) + r')\b')
MERIDIEM_RE = re.compile(r'\d\s*(?P<meridiem>[ap])\.?m\b\.?')
PADDED_24H_RE = re.compile(r'\b0\d:\d{2}\b')
AT_HOUR_RE = re.compile(r'\bat\s+(?P<hour>\d{1,2})\b(?!\s*(?::|\.\d|[ap]\.?m\b))')
RANGE_RE = re.compile(r'\b(?:from|between)\s+(?P<start>.+?)\s+(?:to|and|until|till)\s+(?P<end>.+)$')
DURATION_RE = re.compile(r'\bin\s+(?P<amount>\d+|an?)\s+(?P<unit>minute|min|hour|hr)s?\b')
DURATION_UNIT_RE = re.compile(r'\b(?:minutes?|mins?|hours?|hrs?)\b')
NOON_RE = re.compile(r'\b(?:noon|midday)\b')
MIDNIGHT_RE = re.compile(r'\bmidnight\b')

# Two defaults that differ in every date field and in the hour: whatever
# dateutil leaves at the default was not present in the text. Both months have
# 31 days so any day of the month parses.
_DEFAULT_A = datetime(2001, 1, 1, 0, 0)
_DEFAULT_B = datetime(2002, 3, 2, 1, 0)


class DateTimeRecognizer:
    def recognize(self, text, reference=None):
        """
        Return the DateTimeResolution candidates for ``text``, most likely
        first; an empty list when nothing is recognised.

        ``reference`` is the moment relative phrases are resolved against and
        defaults to the current local time.
        """
        if not text or not text.strip():
            return []

        reference = reference or timezone.localtime()
        today = reference.date() if isinstance(reference, datetime) else reference
        phrase = ' '.join(text.lower().split()).rstrip('!?,')

        duration = DURATION_RE.search(phrase)
        if duration and isinstance(reference, datetime):
            return [DateTimeResolution(value=self._after(reference, duration).strftime(DATETIME_FORMAT))]
        if DURATION_UNIT_RE.search(phrase):
            # Durations we cannot anchor must not be read as clock times
            logger.debug(f"Unsupported duration in {text!r}")
            return []

        day, phrase, implied_part = self._extract_day(phrase, today)

        if MIDNIGHT_RE.search(phrase):
            # The midnight that ends the day
            return [self._point(day + timedelta(days=1) if day else None, time(0))]
        phrase = NOON_RE.sub(' 12:00pm ', phrase)

        range_match = RANGE_RE.search(phrase)
        if range_match:
            candidates = self._resolve_range(range_match, day)
            if candidates:
                return candidates

        part_match = PART_OF_DAY_RE.search(phrase)
        part = part_match.group('part') if part_match else implied_part
        if part_match:
            phrase = PART_OF_DAY_RE.sub(' ', phrase)

        parsed_date, parsed_time = self._parse(phrase, today)
        day = parsed_date or day

        if parsed_time is not None:
            if part == 'night' and parsed_time.hour == 12:
                # "12 at night" is the start of the next day
                return [self._point((day or today) + timedelta(days=1), parsed_time.replace(hour=0))]
            return [self._point(day, moment) for moment in self._clock_candidates(parsed_time, phrase, part)]
        if part is not None:
            start, end = PARTS_OF_DAY[part]
            return [self._range(day, start, end)]
        if day is not None:
            return [DateTimeResolution(value=day.strftime(DATE_FORMAT))]

        logger.debug(f"Nothing recognised in {text!r}")
        return []

    def _extract_day(self, phrase, today):
        for words, offset in RELATIVE_DAYS:
            pattern = rf'\b{words}\b'
            if re.search(pattern, phrase):
                implied_part = 'night' if words == 'tonight' else None
                return today + timedelta(days=offset), re.sub(pattern, ' ', phrase), implied_part

        match = WEEKDAY_RE.search(phrase)
        if match:
            days_ahead = (WEEKDAYS.index(match.group('weekday')) - today.weekday()) % 7
            if days_ahead == 0 and match.group('modifier') == 'next':
                days_ahead = 7
            return today + timedelta(days=days_ahead), WEEKDAY_RE.sub(' ', phrase), None

        return None, phrase, None

    def _resolve_range(self, match, day):
        end_text = match.group('end')
        start_text = match.group('start')
        _, end = self._parse(end_text)
        _, start = self._parse(start_text)
        if start is None or end is None:
            return []

        # "from 6 to 7pm": the start borrows the end's meridiem unless that
        # would put it after the end ("from 11 to 1pm")
        end_meridiem = MERIDIEM_RE.search(end_text)
        if (not MERIDIEM_RE.search(start_text) and end_meridiem
                and end_meridiem.group('meridiem') == 'p' and start.hour < 12
                and start.replace(hour=start.hour + 12) <= end):
            start = start.replace(hour=start.hour + 12)

        return [self._range(day, start, end)]

    def _parse(self, phrase, today=None):
        """
        Fuzzy-parse ``phrase`` into ``(date or None, time or None)``, keeping
        only the parts actually present in the text.
        """
        phrase = self._normalise_hours(phrase)
        if not re.search(r'\d|[a-z]{3}', phrase):
            return None, None

        try:
            first = dtparser.parse(phrase, default=_DEFAULT_A, fuzzy=True)
            second = dtparser.parse(phrase, default=_DEFAULT_B, fuzzy=True)
        except (ValueError, OverflowError):
            return None, None

        parsed_time = first.time() if first.hour == second.hour else None
        parsed_date = None
        if first.day == second.day:
            parsed_date = self._complete_date(
                first,
                has_month=first.month == second.month,
                has_year=first.year == second.year,
                today=today or timezone.localdate(),
            )
        return parsed_date, parsed_time

    def _normalise_hours(self, phrase):
        """Turn bare hours ("7", "at 7") into clock times so dateutil does not read them as days."""
        phrase = AT_HOUR_RE.sub(lambda m: f"at {m.group('hour')}:00" if int(m.group('hour')) <= 23 else m.group(0), phrase)
        tokens = [token for token in phrase.split() if token not in FILLER_WORDS]
        if len(tokens) == 1 and tokens[0].isdigit() and int(tokens[0]) <= 23:
            return f"{int(tokens[0])}:00"
        return phrase

    def _complete_date(self, parsed, has_month, has_year, today):
        year = parsed.year if has_year else today.year
        month = parsed.month if has_month else today.month
        try:
            result = date(year, month, parsed.day)
        except ValueError:
            return None

        if result < today and not has_year:
            # "the 5th" after the 5th means next month, "5 oct" after October means next year
            try:
                if has_month:
                    result = result.replace(year=year + 1)
                else:
                    result = date(year + (month // 12), month % 12 + 1, parsed.day)
            except ValueError:
                return None
        return result

    def _clock_candidates(self, moment, phrase, part):
        if part in PM_PARTS and moment.hour < 12:
            return [moment.replace(hour=moment.hour + 12)]
        if part is not None or MERIDIEM_RE.search(phrase) or PADDED_24H_RE.search(phrase):
            return [moment]
        if 1 <= moment.hour <= 11:
            return [moment, moment.replace(hour=moment.hour + 12)]
        return [moment]

    def _after(self, reference, match):
        amount = match.group('amount')
        amount = 1 if amount in ('a', 'an') else int(amount)
        if match.group('unit') in ('hour', 'hr'):
            delta = timedelta(hours=amount)
        else:
            delta = timedelta(minutes=amount)
        return reference.replace(second=0, microsecond=0) + delta

    def _point(self, day, moment):
        if day is None:
            return DateTimeResolution(value=moment.strftime(TIME_FORMAT))
        return DateTimeResolution(value=datetime.combine(day, moment).strftime(DATETIME_FORMAT))

    def _range(self, day, start, end):
        if day is None:
            return DateTimeResolution(start=start.strftime(TIME_FORMAT), end=end.strftime(TIME_FORMAT))
        # A range past midnight ends on the following day
        end_day = day + timedelta(days=1) if end < start else day
        return DateTimeResolution(
            start=datetime.combine(day, start).strftime(DATETIME_FORMAT),
            end=datetime.combine(end_day, end).strftime(DATETIME_FORMAT),
        )
