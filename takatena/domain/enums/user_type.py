from enum import Enum


class UserType(str, Enum):
    INDIVIDUAL = "INDIVIDUAL"
    BUSINESS = "BUSINESS"
    RECYCLER = "RECYCLER"
    ARTISAN = "ARTISAN"
    MANUFACTURER = "MANUFACTURER"
