# Schemas package (re-export feature modules for stable imports)
from .common.common import *
from .patients.patient import *
from .doctors.doctor import *
from .appointments.appointment import *
