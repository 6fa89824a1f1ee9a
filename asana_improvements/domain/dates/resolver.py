"""Due date resolution.

Turns the free-text due date labels the host renders ("Today", "Friday",
"Dec 5") into local datetimes and measures how far away they are. All
computations use naive local time; no timezone normalization happens.
"""

import logging
import math
from collections.abc import Callable
from datetime import date, datetime, timedelta

from asana_improvements.models import DateParserConfig

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86_400
ANNOTATION_MARKER = "("

Clock = Callable[[], datetime]


class DateResolver:
    """Resolve human-readable date expressions relative to a clock.

    Example:
        resolver = DateResolver(DateParserConfig())
        due = resolver.resolve("Tomorrow")
        days = resolver.days_remaining(due)  # just under 1.0
    """

    def __init__(
        self,
        config: DateParserConfig | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            config: Keywords, weekday names and calendar formats to accept.
            clock: Zero-argument callable returning the current local time.
                Defaults to datetime.now.
        """
        self._config = config or DateParserConfig()
        self._clock = clock or datetime.now

    def now(self) -> datetime:
        """Return the resolver's notion of the current local time."""
        return self._clock()

    def resolve(self, text: object) -> datetime | None:
        """Parse a due date label into a local datetime.

        Keywords and weekday names resolve relative to the current time of
        day, so "Tomorrow" is exactly one day from now. Weekday names always
        resolve 1 to 7 days ahead, never to today. Anything else is parsed as
        a calendar date; labels without a comma are assumed to omit the year
        and get the current year appended.

        Args:
            text: The raw label text.

        Returns:
            The resolved datetime, or None if the text is not understood.
        """
        if not isinstance(text, str):
            logger.debug(f"Ignoring non-string date label: {text!r}")
            return None

        label = text.strip()
        if not label:
            return None

        now = self._clock()

        if label == self._config.today_keyword:
            return now

        if label == self._config.tomorrow_keyword:
            return now + timedelta(days=1)

        if label in self._config.day_names:
            target = self._config.day_names.index(label)
            for offset in range(1, 8):
                candidate = now + timedelta(days=offset)
                if candidate.weekday() == target:
                    return candidate

        return self._parse_calendar_date(label, now.year)

    def _parse_calendar_date(self, label: str, year: int) -> datetime | None:
        if "," in label:
            candidates = [label]
        else:
            # Labels like "Dec 5" omit the year; numeric forms carry their own
            candidates = [f"{label}, {year}", label]

        for candidate in candidates:
            for fmt in self._config.date_formats:
                try:
                    return datetime.strptime(candidate, fmt)
                except ValueError:
                    continue

        logger.debug(f"Failed to parse date label: {label!r}")
        return None

    def days_remaining(self, due: object) -> float | None:
        """Signed, unrounded number of days between now and ``due``.

        Args:
            due: A datetime (or date, taken at local midnight).

        Returns:
            Fractional days, negative for past dates, or None for invalid input.
        """
        if isinstance(due, datetime):
            moment = due
        elif isinstance(due, date):
            moment = datetime.combine(due, datetime.min.time())
        else:
            return None

        delta = moment - self._clock()
        return delta.total_seconds() / SECONDS_PER_DAY


def is_annotated(text: str) -> bool:
    """Check whether a label already carries a remaining-days suffix."""
    return ANNOTATION_MARKER in text


def annotate(text: str, days: float) -> str:
    """Append the rounded-up remaining days to a label.

    Example:
        >>> annotate("Friday", 2.3)
        'Friday (3 days)'
    """
    return f"{text} ({math.ceil(days)} days)"
