from timegrid.models.layout import (  # noqa: F401
    AxisTick,
    Cluster,
    ColumnAssignment,
    DayLayout,
    PositionedSlot,
    SkippedSlot,
    SkipReason,
    SlotLabelHint,
    WeekLayout,
)
from timegrid.models.slot import (  # noqa: F401
    WEEKDAYS,
    DayWindow,
    SlotKind,
    TimeSlot,
    Weekday,
    minutes_to_time,
    parse_time_to_minutes,
)
