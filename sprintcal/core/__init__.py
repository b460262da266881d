from .context import SprintContext, init_context_from_settings
from .calendar import week_number, iso_year, date_from_week, monday_of, sunday_of, as_date
from .mapping import sprint_from_week, sprint_weeks, resolve_sprint_weeks, roll_back
from .resolver import (
    build_sprint,
    current_sprint,
    current_sprint_number,
    previous_sprint,
    format_range,
    sprint_date_range,
)
from .history import sprint_history
from .aggregation import (
    scan_weekly_records,
    extract_sprints,
    sprint_history_from_data,
    aggregate_weekly_to_sprint,
    aggregate_multiple_sprints,
)
from .days import sprint_days, sprint_day_labels, is_date_in_sprint, sprint_for_date
