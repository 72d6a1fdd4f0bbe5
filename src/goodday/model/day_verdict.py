# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum


class DayVerdict(TypedDict):
    entity_type: str  # "day_verdict"
    day: pendulum.Date
    is_good_day: bool
    locked_at: Optional[pendulum.Date]  # None while the verdict is live
