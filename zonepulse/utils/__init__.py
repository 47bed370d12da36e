"""Pure time-grid computations: slots, projections, labels."""

from .zone_projector import (
    load_civil_zone,
    is_valid_civil_zone,
    utc_offset_minutes,
    project_civil,
    is_near_dst_transition,
    dst_transitions,
)
from .slot_generator import (
    DEFAULT_STEP_MINUTES,
    DEFAULT_SLOT_COUNT,
    to_instant,
    instant_millis,
    validate_step_minutes,
    local_midnight,
    generate_slots,
    slot_index_of,
    current_slot_index,
    containing_slot_index,
)
from .mars_time import (
    INVALID_SOL,
    LANDING_INSTANT,
    MarsClock,
    invalid_projection,
    julian_date_ut,
    julian_day_number,
    landing_sol_date,
    mars_clock,
    mars_sol_date,
    project_mars,
    sol_number,
    split_hours,
)
from .projection import project, near_dst_transition
from .classifier import (
    is_current,
    is_highlighted,
    is_night,
    is_day,
    is_weekend,
    is_date_boundary,
    is_business_hours,
    classify,
)
from .formatting import (
    TIME_FORMATS,
    format_time,
    format_offset,
    format_utc_offset,
    format_time_difference,
    format_date_heading,
)
from .slot_search import find_slot_index

__all__ = [
    'load_civil_zone',
    'is_valid_civil_zone',
    'utc_offset_minutes',
    'project_civil',
    'is_near_dst_transition',
    'dst_transitions',
    'DEFAULT_STEP_MINUTES',
    'DEFAULT_SLOT_COUNT',
    'to_instant',
    'instant_millis',
    'validate_step_minutes',
    'local_midnight',
    'generate_slots',
    'slot_index_of',
    'current_slot_index',
    'containing_slot_index',
    'INVALID_SOL',
    'LANDING_INSTANT',
    'MarsClock',
    'invalid_projection',
    'julian_date_ut',
    'julian_day_number',
    'landing_sol_date',
    'mars_clock',
    'mars_sol_date',
    'project_mars',
    'sol_number',
    'split_hours',
    'project',
    'near_dst_transition',
    'is_current',
    'is_highlighted',
    'is_night',
    'is_day',
    'is_weekend',
    'is_date_boundary',
    'is_business_hours',
    'classify',
    'TIME_FORMATS',
    'format_time',
    'format_offset',
    'format_utc_offset',
    'format_time_difference',
    'format_date_heading',
    'find_slot_index',
]
