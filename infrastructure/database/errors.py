"""
Database error translation.
Maps PostgreSQL error codes from PostgREST into messages an admin can act on.
"""

import re
from typing import Optional, Union

from postgrest.exceptions import APIError

# constraint name -> message, matched against error message/details
FOREIGN_KEY_MESSAGES = [
    ("games_location_id_fkey", "games",
     "This location cannot be deleted because it has games scheduled. "
     "Please delete or move the associated games first."),
    ("games_home_team_id_fkey", "games",
     "This team cannot be deleted because they have games scheduled. "
     "Please delete the associated games first."),
    ("games_away_team_id_fkey", "games",
     "This team cannot be deleted because they have games scheduled. "
     "Please delete the associated games first."),
    ("players_team_id_fkey", "players",
     "This team cannot be deleted because it has players assigned. "
     "Please remove all players from this team first."),
    ("announcements_created_by_fkey", "announcements",
     "This user cannot be deleted because they have authored announcements. "
     "Please reassign or delete their announcements first."),
    ("player_registrations_team_id_fkey", "player_registrations",
     "This team cannot be deleted because there are registrations associated with it. "
     "Please handle the registrations first."),
]

CONFLICT_CODES = {"23503", "23505"}


def _foreign_key_message(message: str, details: str) -> str:
    for constraint, referenced_by, user_message in FOREIGN_KEY_MESSAGES:
        if constraint in message or f'table "{referenced_by}"' in details:
            return user_message

    if "Key is still referenced" in details:
        match = re.search(r'from table "(\w+)"', details)
        if match:
            return (f"This item cannot be deleted because it is still being used by "
                    f"{match.group(1)}. Please remove those references first.")

    return ("This item cannot be deleted because it is still being used elsewhere. "
            "Please remove any dependencies first.")


def _unique_message(message: str) -> str:
    if "email" in message:
        return "This email address is already in use. Please use a different email."
    if "username" in message:
        return "This username is already taken. Please choose a different username."
    if "name" in message:
        return "This name is already taken. Please choose a different name."
    return "This value already exists. Please use a unique value."


def _not_null_message(message: str) -> str:
    match = re.search(r'column "(\w+)"', message)
    if match:
        column = match.group(1).replace("_", " ")
        return f"{column[:1].upper()}{column[1:]} is required and cannot be empty."
    return "A required field is missing. Please fill in all required information."


def _check_message(message: str) -> str:
    if "email" in message:
        return "Please enter a valid email address."
    if "phone" in message:
        return "Please enter a valid phone number."
    if "url" in message:
        return "Please enter a valid URL."
    if "gradient" in message:
        return ("The selected color theme is not valid. "
                "Please choose from the available color options.")
    if "sport_type" in message:
        return "Sport type must be either 'kickball' or 'dodgeball'."
    return "The provided data does not meet the required format or constraints."


def parse_database_error(error: Union[APIError, Exception, str, None]) -> str:
    """Translate a database error into a user-facing message"""
    if error is None:
        return "An unknown error occurred."
    if isinstance(error, str):
        return error

    code: Optional[str] = getattr(error, "code", None)
    message = getattr(error, "message", None) or str(error) or ""
    details = getattr(error, "details", None) or ""

    if code == "23503":
        return _foreign_key_message(message, details)
    if code == "23505":
        return _unique_message(message)
    if code == "23502":
        return _not_null_message(message)
    if code == "23514":
        return _check_message(message)
    if code == "42501":
        return "You don't have permission to perform this operation."
    if code == "42P01" or "permission denied" in message:
        return "Access denied. You may not have permission to access this data."

    lowered = message.lower()
    if "network" in lowered or "connection" in lowered or "timed out" in lowered:
        return "Network error. Please check your internet connection and try again."

    if message:
        return f"Database error: {message}"
    return "An unexpected error occurred. Please try again."


def error_status(error: Exception) -> int:
    """HTTP status for a database error: 409 for conflicts, 400 otherwise"""
    return 409 if getattr(error, "code", None) in CONFLICT_CODES else 400
