"""Display names for known course codes."""
from types import MappingProxyType

COURSE_CODE_MAP = MappingProxyType({
    'MEDU3300': 'Human Structure',
    'MEDU3400': 'Human Function',
    'MEDU3500': 'Doctor & Patient',
    'MEDU3160': 'Resilience Building',
    'MEDU3700': 'Bioethics',
    'MEDU3600': 'Pathology',
    'MEDU3520': 'Clinical Anatomy',
    'MED3-EVT': 'MED3 Event',
})
