"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

WEEKDAY_DAYS = (1, 2, 3, 4, 5)
SATURDAY_DAY = 6

NOTES_MAX_LENGTH = 800
MAX_WEEKS_PER_YEAR = 53

DEFAULT_KEY_CONFLICT_RETRIES = 1

UNASSIGNED_GERAL_ID = "sem-geral"
UNASSIGNED_GERAL_NAME = "Sem Supervisor Geral"
UNASSIGNED_AREA_PREFIX = "sem-area-"
UNASSIGNED_AREA_NAME = "Sem Supervisor de Área"
