# src/core/alerts.py - v1
"""Predefined user-facing alerts.

Every store failure surfaces as exactly one of these, chosen by the call
site. Raw exception text never reaches an alert.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Alert(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    message: str


# --- Locations ---

UNABLE_TO_GET_LOCATIONS = Alert(
    title="Unable to get locations",
    message="Unable to retrieve locations at this time.\nPlease try again later.",
)
LOCATION_RESTRICTED = Alert(
    title="Location services restricted",
    message=(
        "Location services are restricted on this device.\n"
        "Please go to settings and enable location services."
    ),
)
LOCATION_ACCESS_DENIED = Alert(
    title="Location access denied",
    message=(
        "Location access is denied for this app.\n"
        "Please go to settings and enable location access."
    ),
)
LOCATION_ACCESS_DISABLED = Alert(
    title="Location access disabled",
    message="Location access is disabled.\nPlease go to settings and enable location access.",
)

# --- Profiles ---

INCOMPLETE_PROFILE = Alert(
    title="Please complete your profile",
    message=(
        "You must complete your profile before tapping the button. "
        "Your bio must be at least 90 characters long.\nPlease try again."
    ),
)
FAILED_TO_FETCH_USER_RECORD = Alert(
    title="User Record Not Found",
    message=(
        "We couldn't fetch your user information.\n"
        "Please make sure you are signed in and try again."
    ),
)
PROFILE_SAVED = Alert(
    title="Profile Saved",
    message="Your profile has been saved successfully. Welcome to Jurado's Burger!",
)
PROFILE_CREATED = Alert(
    title="Profile Created",
    message="Your new profile has been created successfully.",
)
PROFILE_UPDATED = Alert(
    title="Profile Updated",
    message="Your profile has been successfully updated.",
)
ERROR_SAVING_PROFILE = Alert(
    title="Save Failed",
    message="We couldn't save your profile.\nPlease check your connection and try again.",
)
PROFILE_UNAVAILABLE = Alert(
    title="Profile Unavailable",
    message="We couldn't get your profile.\nPlease try again later.",
)

# --- Check-in / check-out ---

UNABLE_TO_GET_CHECKIN_STATUS = Alert(
    title="Check-in Status Unavailable",
    message="We couldn't get your check-in status.\nPlease try again later.",
)
UNABLE_TO_CHECK_IN_OR_OUT = Alert(
    title="Check-in/Check-out Unavailable",
    message="We couldn't check you in or check you out.\nPlease try again later.",
)
UNABLE_TO_GET_CHECKED_IN_PROFILES = Alert(
    title="Checked-in Profiles Unavailable",
    message="We couldn't get who is checked in right now.\nPlease try again later.",
)
