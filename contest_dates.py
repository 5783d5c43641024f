#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Best-effort contest end-date extraction from a contest README.

Code4rena READMEs state the start date before the end date, so the last
"<Month> <day>, <year> <HH:MM> UTC" in the text is taken as the end date.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

DATE_FORMAT = "%B %d, %Y %H:%M %Z"

END_DATE_RE = re.compile(
    r"\b(January|February|March|April|May|June|July|August|September|October|November|December)"
    r"\s+\d{1,2},\s+\d{4}\s+\d{2}:\d{2}\s+UTC\b"
)


def parse_date(date_str: str) -> datetime:
    """Parse e.g. 'May 3, 2023 20:00 UTC' into an aware UTC datetime (ValueError if malformed)."""
    return datetime.strptime(date_str, DATE_FORMAT).replace(tzinfo=timezone.utc)


def extract_end_date(contest_info: str) -> Optional[datetime]:
    dates = [m.group(0) for m in END_DATE_RE.finditer(contest_info or "")]
    if not dates:
        return None
    try:
        return parse_date(dates[-1])
    except ValueError:
        return None


def is_active(end_date: datetime, now: Optional[datetime] = None) -> bool:
    # a contest ending exactly now is already over
    now = now or datetime.now(timezone.utc)
    return end_date > now
