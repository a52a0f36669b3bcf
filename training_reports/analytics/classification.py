"""Indoor/outdoor classification of activities."""

from training_reports.config import INDOOR_SUB_SPORTS, INDOOR_TYPES, WALKING_TYPE
from training_reports.models.activity import Activity


def is_indoor_activity(activity: Activity) -> bool:
    """Return True when the activity took place indoors.

    Rules, first match wins: indoor sub-sport, inherently indoor type,
    walk without a GPS track. Everything else is outdoor.
    """
    if activity.sub_sport and activity.sub_sport in INDOOR_SUB_SPORTS:
        return True
    if activity.type in INDOOR_TYPES:
        return True
    if activity.type == WALKING_TYPE and not activity.has_gps:
        return True
    return False
